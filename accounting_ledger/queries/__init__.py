"""Report execution package."""

from accounting_ledger.queries.executor import QueryExecutionError, ReportExecutor

__all__ = ["QueryExecutionError", "ReportExecutor"]
