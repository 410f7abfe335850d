from __future__ import annotations

from sqlalchemy.orm import Session

from cronograma.models.activity_log import ActivityLog


def log_activity(
    db: Session,
    *,
    action: str,
    entity_type: str | None = None,
    entity_id: str | None = None,
    details: dict | None = None,
) -> None:
    # Added to the caller's session so it commits (or rolls back) with the change it records.
    db.add(
        ActivityLog(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details or {},
        )
    )
