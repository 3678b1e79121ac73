import pytest

API = "/api/v1"


def stadium_payload(**overrides):
    payload = {
        "id": "stadium-001",
        "title": "City Stadium Matchday Revenue Rights",
        "type": "SPORTS_VENUE",
        "targetAmount": 100_000,
        "raisedAmount": 60_000,
        "minInvestment": 1_000,
        "maxInvestment": 50_000,
        "expectedReturn": {"min": 9, "max": 13},
        "revenueStructure": {"Ticketing": 60, "Concessions": 40},
        "riskLevel": "LOW",
        "region": "East",
        "city": "Hangzhou",
        "investmentPeriod": 24,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def stadium(client, admin_headers):
    r = client.post(f"{API}/admin/assets", json=stadium_payload(), headers=admin_headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_admin_created_listing(stadium):
    assert stadium["id"] == "stadium-001"
    assert stadium["projectId"] is None
    assert stadium["status"] == "FUNDING"
    assert stadium["riskScore"] == 30
    assert stadium["expectedReturnType"] == "IRR"


def test_duplicate_admin_listing_conflicts(client, admin_headers, stadium):
    r = client.post(f"{API}/admin/assets", json=stadium_payload(), headers=admin_headers)
    assert r.status_code == 409


def test_list_filters_by_repeated_query_params(client, admin_headers, stadium):
    client.post(
        f"{API}/admin/assets",
        json=stadium_payload(id="concert-001", type="CONCERT", riskLevel="HIGH", region="West"),
        headers=admin_headers,
    )
    client.post(
        f"{API}/admin/assets",
        json=stadium_payload(id="campus-001", type="CAMPUS_FACILITY", status="FUNDED"),
        headers=admin_headers,
    )

    def ids(params):
        r = client.get(f"{API}/assets", params=params)
        assert r.status_code == 200
        return [a["id"] for a in r.json()["assets"]]

    assert ids({}) == ["stadium-001", "concert-001", "campus-001"]
    assert ids({"type": ["CONCERT", "CAMPUS_FACILITY"]}) == ["concert-001", "campus-001"]
    assert ids({"riskLevel": "HIGH"}) == ["concert-001"]
    assert ids({"status": "FUNDED"}) == ["campus-001"]
    assert ids({"status": "LISTED"}) == ["stadium-001", "concert-001", "campus-001"]
    assert ids({"region": "West"}) == ["concert-001"]


def test_unlisting_admin_listing_synthesizes_project(client, admin_headers, stadium):
    r = client.post(f"{API}/assets/stadium-001/unlist", headers=admin_headers)

    assert r.status_code == 200
    body = r.json()
    assert body["synthesized"] is True
    assert body["projectId"] == "project-from-stadium-001"

    r = client.get(f"{API}/projects/project-from-stadium-001")
    project = r.json()
    assert project["status"] == "PENDING"
    assert project["ownerId"] == "admin-001"
    assert project["revenueStructure"] == {"Ticketing": 60, "Concessions": 40}

    pending = client.get(f"{API}/admin/projects/pending", headers=admin_headers).json()
    assert "project-from-stadium-001" in [p["id"] for p in pending["projects"]]


def test_invest_and_portfolio(client, investor_headers, stadium):
    r = client.post(
        f"{API}/investments",
        json={"assetId": "stadium-001", "amount": 10_000},
        headers=investor_headers,
    )
    assert r.status_code == 201, r.text
    inv = r.json()
    assert inv["userId"] == "investor-1"
    assert inv["managementFee"] == pytest.approx(200)
    assert inv["transactionFee"] == pytest.approx(100)
    assert inv["netAmount"] == pytest.approx(9_700)
    assert inv["asset"]["id"] == "stadium-001"

    assert client.get(f"{API}/assets/stadium-001").json()["raisedAmount"] == 70_000

    r = client.get(f"{API}/investments/{inv['id']}", headers=investor_headers)
    assert r.json()["pNoteNumber"] == inv["pNoteNumber"]

    r = client.get(f"{API}/investments/my", headers=investor_headers)
    assert [i["id"] for i in r.json()["investments"]] == [inv["id"]]

    stats = client.get(f"{API}/investments/portfolio/stats", headers=investor_headers).json()
    assert stats["count"] == 1
    assert stats["totalInvested"] == 10_000
    assert stats["distribution"] == {"SPORTS_VENUE": 100.0}


def test_investment_bounds_use_reason_codes(client, investor_headers, stadium):
    r = client.post(
        f"{API}/investments",
        json={"assetId": "stadium-001", "amount": 500},
        headers=investor_headers,
    )
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "AMOUNT_TOO_LOW"


def test_investment_outlives_unlisting(client, investor_headers, admin_headers, stadium):
    inv = client.post(
        f"{API}/investments",
        json={"assetId": "stadium-001", "amount": 5_000},
        headers=investor_headers,
    ).json()
    client.post(f"{API}/assets/stadium-001/unlist", headers=admin_headers)

    r = client.get(f"{API}/investments/{inv['id']}", headers=investor_headers)

    assert r.status_code == 200
    assert r.json()["asset"] is None


def test_matching_endpoints(client, stadium):
    recs = client.get(f"{API}/matching/recommendations").json()["recommendations"]
    # 70 + 0.6 * 15 + 10
    assert recs[0]["asset"]["id"] == "stadium-001"
    assert recs[0]["matchScore"] == 89
    assert recs[0]["recommendation"] == "strong"

    r = client.post(f"{API}/matching/compare", json={"assetIds": ["stadium-001", "nope"]})
    assert [a["id"] for a in r.json()["assets"]] == ["stadium-001"]

    r = client.post(f"{API}/matching/compare", json={"assetIds": []})
    assert r.status_code == 400

    r = client.post(
        f"{API}/matching/calculate",
        json={"amount": 100_000, "expectedReturn": 12, "period": 12},
    )
    assert r.json()["estimatedReturn"] == pytest.approx(12_000)
    assert r.json()["roi"] == pytest.approx(12)


def test_overview(client, admin_headers, stadium):
    client.post(
        f"{API}/admin/assets",
        json=stadium_payload(id="campus-001", type="CAMPUS_FACILITY", status="FUNDED", raisedAmount=100_000),
        headers=admin_headers,
    )

    data = client.get(f"{API}/admin/overview", headers=admin_headers).json()

    assert data["totalRaised"] == 160_000
    assert data["assetPipeline"] == 2
    assert data["pendingApproval"] == 0
    assert data["pipeline"]["funding"] == 1
    assert data["pipeline"]["completed"] == 1
    assert data["distribution"] == {"SPORTS_VENUE": 50, "CAMPUS_FACILITY": 50}


def test_dashboard_featured(client, admin_headers, stadium):
    client.post(
        f"{API}/admin/assets",
        json=stadium_payload(id="campus-001", raisedAmount=90_000),
        headers=admin_headers,
    )
    client.post(
        f"{API}/admin/assets",
        json=stadium_payload(id="concert-001", raisedAmount=0),
        headers=admin_headers,
    )

    r = client.get(f"{API}/dashboard/featured")
    assert r.status_code == 200
    assert [a["id"] for a in r.json()["assets"]] == ["campus-001", "stadium-001", "concert-001"]

    r = client.get(f"{API}/dashboard/featured", params={"limit": 1})
    assert [a["id"] for a in r.json()["assets"]] == ["campus-001"]
