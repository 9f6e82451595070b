"""
Best-effort audit trail.
"""

import logging

from config import AUDIT_LOG_ENABLED
from repositories.interfaces import IAuditRepository

logger = logging.getLogger("racha.services.audit")


class AuditService:
    """
    Records notable events.

    Writing an event never fails the operation that triggered it: errors are
    logged and swallowed.
    """

    def __init__(self, audit_repo: IAuditRepository | None, enabled: bool | None = None):
        self.audit_repo = audit_repo
        self.enabled = AUDIT_LOG_ENABLED if enabled is None else enabled

    def record(self, event: str, entity_type: str, entity_id, details: dict | None = None) -> bool:
        """Store an event. Returns False if it was skipped or could not be written."""
        if not self.enabled or self.audit_repo is None:
            return False
        try:
            self.audit_repo.log_event(event, entity_type, entity_id, details)
            return True
        except Exception as exc:
            logger.warning(f"Could not write audit event {event} for {entity_type} {entity_id}: {exc}")
            return False

    def get_events(self, entity_type: str | None = None, entity_id=None) -> list[dict]:
        if self.audit_repo is None:
            return []
        return self.audit_repo.get_events(entity_type=entity_type, entity_id=entity_id)
