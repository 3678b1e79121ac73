#app/models/enums.py
from __future__ import annotations
from enum import Enum


class ParticipantRole(str, Enum):
    INVESTOR = "INVESTOR"
    PROJECT_OWNER = "PROJECT_OWNER"
    ADMIN = "ADMIN"


class ProjectStatus(str, Enum):
    # submission / review lifecycle
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    # market-side statuses, shared with listings
    LISTED = "LISTED"
    FUNDING = "FUNDING"
    FUNDED = "FUNDED"


class ReviewDecision(str, Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class InvestmentStatus(str, Enum):
    CONFIRMED = "CONFIRMED"


# Statuses from which a submission can be reviewed or withdrawn
REVIEWABLE_STATUSES = frozenset({ProjectStatus.PENDING.value, ProjectStatus.UNDER_REVIEW.value})
# Terminal review decisions that an admin may revoke
REVOCABLE_STATUSES = frozenset({ProjectStatus.APPROVED.value, ProjectStatus.REJECTED.value})
