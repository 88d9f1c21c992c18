"""
In-Memory Audit Storage

Keeps the most recent audit events of the session so the front end can
show an activity log. Nothing here survives the process.
"""

from collections import deque
from typing import Optional
from uuid import UUID

from accounting_ledger.models.audit import AuditEvent
from accounting_ledger.services.storage.interface import AuditStorageInterface


class InMemoryAuditStorage(AuditStorageInterface):
    """Bounded, append-only audit trail."""

    def __init__(self, max_events: Optional[int] = 500):
        self._events: deque[AuditEvent] = deque(maxlen=max_events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        if limit <= 0:
            return []
        return list(reversed(self._events))[:limit]

    def __len__(self) -> int:
        return len(self._events)
