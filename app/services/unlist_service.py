# app/services/unlist_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import InternalError
from app.core.lifecycle_guard import lifecycle_transaction
from app.services.assets_service import AssetListingService, project_id_from_asset_id
from app.services.audit_service import AuditAction, AuditContext, AuditService
from app.services.projects_service import ProjectsService

logger = logging.getLogger(__name__)

SYNTHESIZED_PROJECT_PREFIX = "project-from-"


@dataclass(frozen=True)
class UnlistResult:
    asset_id: str
    project_id: str
    synthesized: bool


class UnlistService:
    """
    Takes a listing off the market and hands its project back to review.

    Invariant kept: every unlisted asset ends with a PENDING project that
    can be resubmitted, whether or not the listing came from a submission.
    """

    def __init__(
        self,
        projects: Optional[ProjectsService] = None,
        assets: Optional[AssetListingService] = None,
        audit: Optional[AuditService] = None,
    ):
        self.audit = audit or AuditService()
        self.assets = assets or AssetListingService(audit=self.audit)
        self.projects = projects or ProjectsService(assets=self.assets, audit=self.audit)

    def unlist(
        self, db: Session, *, asset_id: str, ctx: Optional[AuditContext] = None
    ) -> UnlistResult:
        with lifecycle_transaction(db):
            listing = self.assets.get(db, asset_id)

            # Snapshot before removal: the row is gone after remove().
            back_reference = listing.project_id

            if not self.assets.remove(db, asset_id):
                logger.error(
                    "unlist: listing vanished between lookup and removal",
                    extra={"asset_id": asset_id, "project_id": back_reference},
                )
                raise InternalError(
                    f"Asset {asset_id} could not be removed after lookup.",
                    asset_id=asset_id,
                )

            candidate_id = back_reference or project_id_from_asset_id(asset_id)
            project = self.projects.find(db, candidate_id) if candidate_id else None

            if project is None:
                # A listing we synthesized a project for once before keeps that project.
                project = self.projects.find(db, f"{SYNTHESIZED_PROJECT_PREFIX}{asset_id}")

            if project is not None:
                self.projects.revert_to_pending(db, project, ctx=ctx)
                synthesized = False
            else:
                project = self.projects.create_from_asset(
                    db,
                    listing,
                    project_id=f"{SYNTHESIZED_PROJECT_PREFIX}{asset_id}",
                    ctx=ctx,
                )
                synthesized = True

            project_id = project.id
            self.audit.write(
                db,
                action=AuditAction.ASSET_UNLISTED,
                ctx=ctx,
                project_id=project_id,
                asset_id=asset_id,
                details={"synthesized": synthesized},
            )

        logger.info(
            "asset unlisted",
            extra={"asset_id": asset_id, "project_id": project_id, "synthesized": synthesized},
        )
        return UnlistResult(asset_id=asset_id, project_id=project_id, synthesized=synthesized)
