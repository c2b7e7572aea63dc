from typing import Optional
from wedding_cms.extensions import db
from wedding_cms.models.audit_log import AuditLog


def log_action(
    *,
    actor_id: Optional[str],
    action: str,
    entity_type: str,
    entity_id: str,
    payload: dict | None = None
):
    """Adds an audit row to the current session; the caller commits."""
    log = AuditLog()

    log.actor_id = actor_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)
