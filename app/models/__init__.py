from app.models.project import Project
from app.models.asset_listing import AssetListing
from app.models.investment import Investment
from app.models.audit_log import AuditLog

__all__ = ["Project", "AssetListing", "Investment", "AuditLog"]
