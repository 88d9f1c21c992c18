"""
Accounting Ledger - Source Package

A personal transaction ledger: record deposits and payments,
keep them in a plain pipe-delimited file, and run reports over them.

DESIGN PRINCIPLES:
1. The file is the source of truth; memory is only a sorted copy
2. One bad line never costs the rest of the ledger
3. No silent corrections
4. Every write is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Accounting Ledger Team"
