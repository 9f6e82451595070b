"""
Repository for the audit log.
"""

import json

from repositories.base_repository import BaseRepository
from repositories.interfaces import IAuditRepository


class AuditRepository(BaseRepository, IAuditRepository):
    """Append-only log of notable events (draws, finished games)."""

    def log_event(
        self,
        event: str,
        entity_type: str,
        entity_id: int | str | None,
        details: dict | None = None,
    ) -> None:
        payload = json.dumps(details) if details is not None else None
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO audit_log (event, entity_type, entity_id, details)
                VALUES (?, ?, ?, ?)
                """,
                (event, entity_type, None if entity_id is None else str(entity_id), payload),
            )

    def get_events(self, entity_type: str | None = None, entity_id: int | str | None = None) -> list[dict]:
        """Events in insertion order, optionally filtered by entity."""
        clauses = []
        params: list = []
        if entity_type is not None:
            clauses.append("entity_type = ?")
            params.append(entity_type)
        if entity_id is not None:
            clauses.append("entity_id = ?")
            params.append(str(entity_id))
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT * FROM audit_log {where} ORDER BY id", params)
            events = []
            for row in cursor.fetchall():
                event = dict(row)
                event["details"] = json.loads(row["details"]) if row["details"] else None
                events.append(event)
            return events
