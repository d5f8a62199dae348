"""In-process, append-only audit log."""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from fastapi import Request

from app.auth.claims import Principal

logger = logging.getLogger("app.audit")


@dataclass(frozen=True)
class AuditEntry:
    timestamp: datetime
    actor_user_id: uuid.UUID
    actor_email: str
    org_id: uuid.UUID | None
    action: str
    metadata: dict[str, Any] = field(default_factory=dict)


class AuditSink:
    """Append-only record of authorization-relevant actions.

    Appends are serialized; ``query`` reads a snapshot, so it can miss an
    append that is still in flight but only ever returns the caller's
    organization. Whether the caller may read the log at all is decided by
    the route guard, not here.
    """

    def __init__(self) -> None:
        self._entries: list[AuditEntry] = []
        self._lock = threading.Lock()

    def append(
        self,
        principal: Principal,
        action: str,
        metadata: dict[str, Any] | None = None,
    ) -> AuditEntry:
        entry = AuditEntry(
            timestamp=datetime.now(timezone.utc),
            actor_user_id=principal.user_id,
            actor_email=principal.email,
            org_id=principal.org_id,
            action=action,
            metadata=dict(metadata or {}),
        )
        with self._lock:
            self._entries.append(entry)

        logger.info(
            "%s user=%s org=%s meta=%s",
            entry.action,
            entry.actor_user_id,
            entry.org_id,
            entry.metadata,
        )
        return entry

    def query(self, principal: Principal) -> list[AuditEntry]:
        if principal.org_id is None:
            return []

        with self._lock:
            snapshot = list(self._entries)
        return [e for e in snapshot if e.org_id == principal.org_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def get_audit_sink(request: Request) -> AuditSink:
    return request.app.state.audit_sink
