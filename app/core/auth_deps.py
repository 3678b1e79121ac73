#app/core/auth_deps.py
from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from app.core.security import decode_token
from app.models.enums import ParticipantRole
from app.policies.rbac import Principal

bearer = HTTPBearer(auto_error=True)


def get_current_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials = Depends(bearer),
) -> Principal:
    """
    Canonical authentication dependency.

    Guarantees:
    - JWT is valid
    - role, participant_id are present
    - role is a valid ParticipantRole

    Only identity is established here; role gating of admin routes is
    intentionally absent, ownership is checked by the services.
    """

    try:
        payload = decode_token(creds.credentials)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token.")

    role = payload.get("role")
    participant_id = payload.get("participant_id")
    display_name = payload.get("display_name") or "Unknown"

    if not role or not participant_id:
        raise HTTPException(status_code=401, detail="Token missing required claims.")

    try:
        role_enum = ParticipantRole(role)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid role in token.")

    principal = Principal(
        participant_id=str(participant_id),
        role=role_enum,
        display_name=str(display_name),
    )

    # Make principal available to downstream middleware / handlers
    request.state.principal = principal

    return principal
