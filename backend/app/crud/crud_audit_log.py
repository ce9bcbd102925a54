"""Audit log sink."""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from backend.app.models.audit_log import AuditLog


class CRUDAuditLog:
    def append(
        self,
        db: Session,
        *,
        action: str,
        entity_type: str,
        entity_id: Any,
        details: Optional[Dict[str, Any]],
        user_id: int,
    ) -> AuditLog:
        entry = AuditLog(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            details=details,
        )
        db.add(entry)
        db.flush()
        return entry


audit_log_crud = CRUDAuditLog()
