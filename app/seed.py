from datetime import date

from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.session import SessionLocal, init_db
from app.models.enums import ReviewDecision
from app.services.assets_service import AssetListingService
from app.services.investments_service import InvestmentsService
from app.services.projects_service import ProjectsService

DEMO_OWNER_ID = "project-owner-001"
DEMO_OWNER_NAME = "Harbour Live Entertainment"
DEMO_INVESTOR_ID = "investor-001"

# Admin-seeded listings: no originating submission, so no back-reference.
SEED_ASSETS = [
    {
        "id": "fund-lp-001",
        "title": "Flagship Revenue Fund LP Units 2024-Q1",
        "description": "Junior LP units of a diversified revenue-share fund.",
        "type": "FUND_LP",
        "target_amount": 400_000_000,
        "raised_amount": 280_000_000,
        "min_investment": 5_000_000,
        "max_investment": 100_000_000,
        "expected_return_min": 15,
        "expected_return_max": 20,
        "expected_return_type": "Annualized + carry",
        "revenue_structure": {"Base return": 75, "Carry share": 25},
        "risk_level": "HIGH",
        "region": "National",
        "city": "Shanghai",
        "investment_period": 60,
        "funding_deadline": date(2026, 12, 31),
        "due_diligence": {"financialAudit": True, "legalCompliance": True, "riskAssessment": True},
    },
    {
        "id": "stadium-001",
        "title": "City Stadium Matchday Revenue Rights",
        "description": "Share of ticketing and concession revenue for a municipal stadium.",
        "type": "SPORTS_VENUE",
        "target_amount": 30_000_000,
        "raised_amount": 9_000_000,
        "min_investment": 100_000,
        "max_investment": 5_000_000,
        "expected_return_min": 9,
        "expected_return_max": 13,
        "expected_return_type": "IRR",
        "revenue_structure": {"Ticketing": 60, "Concessions": 25, "Sponsorship": 15},
        "risk_level": "LOW",
        "region": "East",
        "city": "Hangzhou",
        "investment_period": 24,
        "funding_deadline": date(2026, 9, 30),
        "due_diligence": {"financialAudit": True, "legalCompliance": True, "operationsReview": True},
    },
    {
        "id": "campus-001",
        "title": "Campus Smart Laundry Network",
        "description": "Revenue share on a network of university laundry kiosks.",
        "type": "CAMPUS_FACILITY",
        "target_amount": 8_000_000,
        "raised_amount": 8_000_000,
        "min_investment": 50_000,
        "max_investment": 1_000_000,
        "expected_return_min": 8,
        "expected_return_max": 11,
        "expected_return_type": "IRR",
        "revenue_structure": {"Usage fees": 90, "Advertising": 10},
        "risk_level": "MEDIUM",
        "region": "North",
        "city": "Beijing",
        "investment_period": 36,
        "status": "FUNDED",
    },
]

# Demo submissions: (fields, steps to replay through the lifecycle)
SEED_PROJECTS = [
    (
        {
            "id": "project-submit-001",
            "title": "World Tour 2026 Concert Revenue Rights",
            "description": "Ticketing, sponsorship and merchandise revenue of a 12-show tour.",
            "type": "CONCERT",
            "target_amount": 15_000_000,
            "min_investment": 100_000,
            "max_investment": 3_000_000,
            "expected_return_min": 18,
            "expected_return_max": 28,
            "expected_return_type": "IRR",
            "revenue_structure": {"Ticketing": 70, "Sponsorship": 20, "Merchandise": 10},
            "risk_level": "MEDIUM",
            "region": "National",
            "city": "Shanghai",
            "investment_period": 10,
            "funding_deadline": date(2026, 4, 30),
        },
        ("submit",),
    ),
    (
        {
            "id": "project-submit-002",
            "title": "Esports Arena Naming Rights",
            "type": "ESPORTS",
            "target_amount": 6_000_000,
            "min_investment": 50_000,
            "max_investment": 1_000_000,
            "expected_return_min": 12,
            "expected_return_max": 18,
            "risk_level": "HIGH",
            "region": "South",
            "city": "Shenzhen",
            "investment_period": 18,
        },
        (),
    ),
    (
        {
            "id": "project-submit-003",
            "title": "Music Festival Weekend Pass Revenue",
            "type": "FESTIVAL",
            "target_amount": 4_000_000,
            "min_investment": 20_000,
            "max_investment": 500_000,
            "expected_return_min": 10,
            "expected_return_max": 16,
            "risk_level": "MEDIUM",
            "region": "West",
            "city": "Chengdu",
            "investment_period": 6,
        },
        ("submit", "approve"),
    ),
]

SEED_INVESTMENTS = [
    ("stadium-001", 500_000),
    ("fund-lp-001", 5_000_000),
]


def seed(db: Session) -> None:
    """Load demo data once; a second call is a no-op."""
    projects = ProjectsService()
    assets = AssetListingService()
    investments = InvestmentsService(assets=assets)

    if assets.find(db, SEED_ASSETS[0]["id"]):
        return

    for fields in SEED_ASSETS:
        assets.create_listing(db, fields=fields)

    for fields, steps in SEED_PROJECTS:
        p = projects.create(db, owner_id=DEMO_OWNER_ID, owner_name=DEMO_OWNER_NAME, fields=fields)
        for step in steps:
            if step == "submit":
                projects.submit(db, project_id=p.id)
            elif step == "approve":
                projects.review(
                    db, project_id=p.id, decision=ReviewDecision.APPROVE, notes="Demo approval"
                )

    for asset_id, amount in SEED_INVESTMENTS:
        investments.create(db, investor_id=DEMO_INVESTOR_ID, asset_id=asset_id, amount=amount)


if __name__ == "__main__":
    init_db()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()
    print(f"Seeded demo data into {get_settings().database_url}")
