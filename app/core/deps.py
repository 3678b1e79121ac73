# /app/core/deps.py
from typing import Optional

from fastapi import Request

from app.policies.rbac import Principal
from app.services.audit_service import AuditContext


def audit_context(request: Request, principal: Optional[Principal] = None) -> AuditContext:
    """Actor + request-id stamped on every audit row written for this request."""
    return AuditContext(
        actor_participant_id=principal.participant_id if principal else None,
        request_id=getattr(request.state, "request_id", None),
    )
