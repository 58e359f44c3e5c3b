"""Audit logging service: records configuration changes for compliance."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.audit_log import AuditLog

logger = structlog.get_logger()


def log_action(
    db: AsyncSession,
    *,
    user_id: str | None = None,
    action: str,
    entity_type: str,
    entity_id: str | None = None,
    details: dict | None = None,
) -> AuditLog:
    """Queue an audit log entry on the session; it is committed with the caller's changes."""
    entry = AuditLog(
        user_id=user_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
    )
    db.add(entry)
    logger.info(
        "audit_logged",
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        user_id=user_id,
    )
    return entry
