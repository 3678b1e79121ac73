#app/policies/rbac.py
from __future__ import annotations
from dataclasses import dataclass

from app.models.enums import ParticipantRole


@dataclass(frozen=True)
class Principal:
    participant_id: str
    role: ParticipantRole
    display_name: str