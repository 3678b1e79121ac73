#/app/policies/projects_policy.py
from __future__ import annotations

from app.core.errors import AuthorizationError
from app.models.project import Project


def is_project_owner(project: Project, participant_id: str) -> bool:
    return bool(participant_id) and project.owner_id == participant_id


def require_project_owner(project: Project, participant_id: str, action: str) -> None:
    """
    Owner-only mutations (update, delete). Admins get no bypass here.
    """
    if not is_project_owner(project, participant_id):
        raise AuthorizationError(
            f"Only the project owner may {action} project {project.id}.",
            project_id=project.id,
            participant_id=participant_id,
        )
