# app/api/v1/serializers.py
from __future__ import annotations

from typing import Any, Dict, Optional

from app.models.asset_listing import AssetListing
from app.models.audit_log import AuditLog
from app.models.investment import Investment
from app.models.project import Project


def _iso(dt):
    return dt.isoformat() if dt else None


def _expected_return(row) -> Dict[str, Any]:
    return {
        "min": row.expected_return_min,
        "max": row.expected_return_max,
        "type": row.expected_return_type,
    }


def project_resp(p: Project) -> dict:
    return {
        "id": p.id,
        "ownerId": p.owner_id,
        "ownerName": p.owner_name,
        "title": p.title,
        "description": p.description or "",
        "type": p.type,
        "originalCategory": p.original_category,
        "targetAmount": p.target_amount,
        "minInvestment": p.min_investment,
        "maxInvestment": p.max_investment,
        "expectedReturn": _expected_return(p),
        "revenueStructure": p.revenue_structure or {},
        "riskLevel": p.risk_level,
        "region": p.region,
        "city": p.city,
        "investmentPeriod": p.investment_period,
        "fundingDeadline": _iso(p.funding_deadline),
        "status": p.status,
        "createdAt": _iso(p.created_at),
        "updatedAt": _iso(p.updated_at),
        "submittedAt": _iso(p.submitted_at),
        "reviewedAt": _iso(p.reviewed_at),
        "reviewNotes": p.review_notes,
    }


def asset_resp(a: AssetListing) -> dict:
    return {
        "id": a.id,
        "projectId": a.project_id,
        "title": a.title,
        "description": a.description or "",
        "type": a.type,
        "originalCategory": a.original_category,
        "targetAmount": a.target_amount,
        "raisedAmount": a.raised_amount,
        "minInvestment": a.min_investment,
        "maxInvestment": a.max_investment,
        "expectedReturn": _expected_return(a),
        "expectedReturnMin": a.expected_return_min,
        "expectedReturnMax": a.expected_return_max,
        "expectedReturnType": a.expected_return_type,
        "revenueStructure": a.revenue_structure or {},
        "dueDiligence": a.due_diligence or {},
        "riskLevel": a.risk_level,
        "riskScore": a.risk_score,
        "region": a.region,
        "city": a.city,
        "status": a.status,
        "fundingDeadline": _iso(a.funding_deadline),
        "investmentPeriod": a.investment_period,
        "createdAt": _iso(a.created_at),
        "updatedAt": _iso(a.updated_at),
    }


def investment_resp(inv: Investment, asset: Optional[AssetListing] = None) -> dict:
    return {
        "id": inv.id,
        "userId": inv.investor_id,
        "assetId": inv.asset_id,
        "amount": inv.amount,
        "managementFee": inv.management_fee,
        "transactionFee": inv.transaction_fee,
        "netAmount": inv.net_amount,
        "currentValue": inv.current_value,
        "returnRate": inv.return_rate,
        "status": inv.status,
        "pNoteNumber": inv.p_note_number,
        "createdAt": _iso(inv.created_at),
        "updatedAt": _iso(inv.updated_at),
        "asset": (
            {
                "id": asset.id,
                "title": asset.title,
                "type": asset.type,
                "status": asset.status,
                "expectedReturnMin": asset.expected_return_min,
                "expectedReturnMax": asset.expected_return_max,
            }
            if asset
            else None
        ),
    }


def audit_resp(row: AuditLog) -> dict:
    return {
        "id": row.id,
        "action": row.action,
        "projectId": row.project_id,
        "assetId": row.asset_id,
        "actorParticipantId": row.actor_participant_id,
        "requestId": row.request_id,
        "details": row.details_json or {},
        "createdAtIso": _iso(row.created_at),
    }
