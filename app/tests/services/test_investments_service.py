import pytest

from app.core.errors import NotFoundError, ValidationError
from app.models.audit_log import AuditLog
from app.services.assets_service import AssetListingService
from app.services.investments_service import InvestmentsService, compute_fees
from app.services.unlist_service import UnlistService
from app.tests.factories import listing_fields


@pytest.fixture
def listing(db):
    return AssetListingService().create_listing(
        db, fields=listing_fields(id="stadium-001", type="SPORTS_VENUE")
    )


def test_compute_fees():
    fees = compute_fees(10_000, management_rate=0.02, transaction_rate=0.01)
    assert fees == {"management_fee": 200, "transaction_fee": 100, "net_amount": 9_700}


def test_create_takes_fees_and_grows_raised_amount(db, listing, ctx):
    svc = InvestmentsService()

    inv = svc.create(db, investor_id="investor-1", asset_id=listing.id, amount=10_000, ctx=ctx)

    assert inv.id.startswith("inv-")
    assert inv.p_note_number.startswith("PN-")
    assert inv.status == "CONFIRMED"
    assert inv.management_fee == pytest.approx(200)
    assert inv.transaction_fee == pytest.approx(100)
    assert inv.net_amount == pytest.approx(9_700)
    assert inv.current_value == 10_000
    assert inv.asset_type == "SPORTS_VENUE"
    assert AssetListingService().get(db, listing.id).raised_amount == 10_000
    assert db.query(AuditLog).filter_by(action="INVESTMENT_CREATED").count() == 1


@pytest.mark.parametrize(
    "amount, reason",
    [(999, "AMOUNT_TOO_LOW"), (100_001, "AMOUNT_TOO_HIGH")],
)
def test_create_enforces_investment_bounds(db, listing, amount, reason):
    with pytest.raises(ValidationError) as exc:
        InvestmentsService().create(db, investor_id="investor-1", asset_id=listing.id, amount=amount)

    assert exc.value.context["reason"] == reason
    assert AssetListingService().get(db, listing.id).raised_amount == 0


def test_create_on_unknown_listing(db):
    with pytest.raises(NotFoundError):
        InvestmentsService().create(db, investor_id="investor-1", asset_id="missing", amount=5_000)


def test_get_unknown_investment(db):
    with pytest.raises(NotFoundError):
        InvestmentsService().get(db, "inv-missing")


def test_investments_survive_unlisting(db, listing):
    svc = InvestmentsService()
    inv = svc.create(db, investor_id="investor-1", asset_id=listing.id, amount=5_000)

    UnlistService().unlist(db, asset_id=listing.id)

    assert svc.get(db, inv.id).asset_id == "stadium-001"


def test_portfolio_stats(db, listing):
    assets = AssetListingService()
    svc = InvestmentsService()
    concert = assets.create_listing(db, fields=listing_fields(id="concert-001", type="CONCERT"))

    svc.create(db, investor_id="investor-1", asset_id=listing.id, amount=30_000)
    svc.create(db, investor_id="investor-1", asset_id=concert.id, amount=10_000)
    svc.create(db, investor_id="investor-2", asset_id=concert.id, amount=50_000)

    stats = svc.portfolio_stats(db, "investor-1")

    assert stats["count"] == 2
    assert stats["total_invested"] == 40_000
    assert stats["total_value"] == 40_000
    assert stats["total_return"] == 0
    assert stats["distribution"] == {"SPORTS_VENUE": 75.0, "CONCERT": 25.0}
    assert len(svc.list_for_investor(db, "investor-2")) == 1
    assert len(svc.list_for_investor(db, None)) == 3


def test_portfolio_stats_empty(db):
    stats = InvestmentsService().portfolio_stats(db, "nobody")
    assert stats == {
        "total_value": 0,
        "total_invested": 0,
        "total_return": 0.0,
        "distribution": {},
        "count": 0,
    }
