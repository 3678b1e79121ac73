from app.models.asset_listing import AssetListing
from app.models.investment import Investment
from app.models.project import Project
from app.seed import seed


def test_seed_loads_demo_market_once(db):
    seed(db)
    seed(db)

    assert db.query(AssetListing).count() == 4
    assert db.query(Project).count() == 3
    assert db.query(Investment).count() == 2

    statuses = {p.id: p.status for p in db.query(Project)}
    assert statuses == {
        "project-submit-001": "PENDING",
        "project-submit-002": "DRAFT",
        "project-submit-003": "APPROVED",
    }
    approved = db.get(AssetListing, "asset-from-project-submit-003")
    assert approved.project_id == "project-submit-003"
    assert db.get(AssetListing, "stadium-001").raised_amount == 9_500_000
