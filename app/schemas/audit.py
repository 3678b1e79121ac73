from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class AuditEntry(BaseModel):
    id: str
    action: str
    projectId: Optional[str] = None
    assetId: Optional[str] = None
    actorParticipantId: Optional[str] = None
    requestId: Optional[str] = None
    details: Dict[str, Any]
    createdAtIso: str


class AuditListResponse(BaseModel):
    entries: List[AuditEntry]


class PipelineCounts(BaseModel):
    pending: int
    underReview: int
    listed: int
    funding: int
    completed: int


class OverviewResponse(BaseModel):
    totalRaised: float
    assetPipeline: int
    pendingApproval: int
    pipeline: PipelineCounts
    distribution: Dict[str, int]
