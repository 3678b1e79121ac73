from app.tests.factories import auth

API = "/api/v1"


def concert_payload(**overrides):
    payload = {
        "id": "Concert X",
        "title": "Concert X",
        "description": "Ticketing revenue of a stadium concert.",
        "type": "CONCERT",
        "targetAmount": 1_000_000,
        "minInvestment": 10_000,
        "maxInvestment": 200_000,
        "expectedReturn": {"min": 12, "max": 18, "type": "IRR"},
        "revenueStructure": {"Ticketing": 70, "Sponsorship": 30},
        "riskLevel": "MEDIUM",
        "region": "National",
        "city": "Shanghai",
        "investmentPeriod": 12,
    }
    payload.update(overrides)
    return payload


def create_concert(client, headers, **overrides):
    r = client.post(f"{API}/projects", json=concert_payload(**overrides), headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_health_echoes_request_id(client):
    r = client.get(f"{API}/health", headers={"X-Request-Id": "rid-1"})
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.json()["requestId"] == "rid-1"
    assert r.headers["X-Request-Id"] == "rid-1"


def test_full_lifecycle_round_trip(client, owner_headers, admin_headers):
    project = create_concert(client, owner_headers)
    assert project["status"] == "DRAFT"
    assert project["ownerId"] == "owner-1"
    assert project["expectedReturn"] == {"min": 12, "max": 18, "type": "IRR"}

    r = client.post(f"{API}/projects/Concert X/submit", headers=owner_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "PENDING"
    assert r.json()["submittedAt"] is not None

    r = client.get(f"{API}/admin/projects/pending", headers=admin_headers)
    assert [p["id"] for p in r.json()["projects"]] == ["Concert X"]

    r = client.post(
        f"{API}/admin/projects/Concert X/review",
        json={"action": "APPROVE", "notes": "ok"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["status"] == "APPROVED"
    assert r.json()["reviewNotes"] == "ok"

    r = client.get(f"{API}/assets")
    assets = r.json()["assets"]
    assert [a["id"] for a in assets] == ["asset-from-Concert X"]
    listing = assets[0]
    assert listing["projectId"] == "Concert X"
    assert listing["raisedAmount"] == 0
    assert listing["expectedReturnMin"] == 12
    assert listing["expectedReturn"]["max"] == 18
    assert r.json()["pagination"]["total"] == 1

    r = client.post(f"{API}/assets/asset-from-Concert X/unlist", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["projectId"] == "Concert X"
    assert r.json()["synthesized"] is False

    assert client.get(f"{API}/assets").json()["assets"] == []
    r = client.get(f"{API}/projects/Concert X")
    assert r.json()["status"] == "PENDING"
    assert r.json()["reviewNotes"] is None
    assert r.json()["reviewedAt"] is None

    r = client.post(
        f"{API}/admin/projects/Concert X/review",
        json={"action": "APPROVE"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert [a["id"] for a in client.get(f"{API}/assets").json()["assets"]] == [
        "asset-from-Concert X"
    ]


def test_double_submit_conflicts(client, owner_headers):
    create_concert(client, owner_headers)
    client.post(f"{API}/projects/Concert X/submit", headers=owner_headers)

    r = client.post(f"{API}/projects/Concert X/submit", headers=owner_headers)

    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "INVALID_STATE"
    assert r.json()["detail"]["currentStatus"] == "PENDING"


def test_review_of_draft_conflicts(client, owner_headers, admin_headers):
    create_concert(client, owner_headers)

    r = client.post(
        f"{API}/admin/projects/Concert X/review",
        json={"action": "APPROVE"},
        headers=admin_headers,
    )

    assert r.status_code == 409
    assert client.get(f"{API}/assets").json()["assets"] == []


def test_missing_resources_are_404(client, owner_headers, admin_headers):
    assert client.get(f"{API}/projects/nope").status_code == 404
    assert client.post(f"{API}/projects/nope/submit", headers=owner_headers).status_code == 404
    assert client.get(f"{API}/assets/nope").status_code == 404
    r = client.post(f"{API}/assets/nope/unlist", headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["detail"]["code"] == "NOT_FOUND"


def test_update_by_non_owner_is_forbidden(client, owner_headers):
    create_concert(client, owner_headers)

    r = client.put(
        f"{API}/projects/Concert X",
        json={"title": "Hijacked"},
        headers=auth("owner-2"),
    )
    assert r.status_code == 403
    assert r.json()["detail"]["code"] == "FORBIDDEN"

    r = client.put(
        f"{API}/projects/Concert X",
        json={"title": "Concert X (updated)", "expectedReturn": {"min": 10, "max": 14}},
        headers=owner_headers,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["title"] == "Concert X (updated)"
    assert body["expectedReturn"] == {"min": 10, "max": 14, "type": "IRR"}
    assert body["city"] == "Shanghai"


def test_update_after_submit_conflicts(client, owner_headers):
    create_concert(client, owner_headers)
    client.post(f"{API}/projects/Concert X/submit", headers=owner_headers)

    r = client.put(f"{API}/projects/Concert X", json={"title": "Late"}, headers=owner_headers)
    assert r.status_code == 409


def test_withdraw_and_delete(client, owner_headers):
    create_concert(client, owner_headers)
    client.post(f"{API}/projects/Concert X/submit", headers=owner_headers)

    r = client.delete(f"{API}/projects/Concert X", headers=owner_headers)
    assert r.status_code == 409

    r = client.post(f"{API}/projects/Concert X/withdraw", headers=owner_headers)
    assert r.json()["status"] == "DRAFT"

    r = client.delete(f"{API}/projects/Concert X", headers=owner_headers)
    assert r.status_code == 200
    assert client.get(f"{API}/projects/Concert X").status_code == 404


def test_my_projects_lists_only_own(client, owner_headers):
    create_concert(client, owner_headers)
    create_concert(client, auth("owner-2"), id="Other")

    r = client.get(f"{API}/projects/my", headers=owner_headers)

    assert r.json()["total"] == 1
    assert r.json()["projects"][0]["id"] == "Concert X"


def test_invalid_payload_is_rejected(client, owner_headers):
    r = client.post(
        f"{API}/projects",
        json=concert_payload(expectedReturn={"min": 20, "max": 10}),
        headers=owner_headers,
    )
    assert r.status_code == 422

    r = client.post(
        f"{API}/projects",
        json=concert_payload(minInvestment=500_000),
        headers=owner_headers,
    )
    assert r.status_code == 422


def test_mutations_require_a_token(client):
    r = client.post(f"{API}/projects", json=concert_payload())
    assert r.status_code in (401, 403)

    r = client.post(
        f"{API}/projects",
        json=concert_payload(),
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert r.status_code == 401


def test_revoke_approval_takes_listing_down(client, owner_headers, admin_headers):
    create_concert(client, owner_headers)
    client.post(f"{API}/projects/Concert X/submit", headers=owner_headers)
    client.post(
        f"{API}/admin/projects/Concert X/review",
        json={"action": "APPROVE"},
        headers=admin_headers,
    )

    r = client.post(f"{API}/admin/projects/Concert X/revoke", headers=admin_headers)

    assert r.status_code == 200
    assert r.json()["status"] == "PENDING"
    assert client.get(f"{API}/assets/asset-from-Concert X").status_code == 404


def test_audit_trail_records_request_id(client, owner_headers, admin_headers):
    client.post(
        f"{API}/projects",
        json=concert_payload(),
        headers={**owner_headers, "X-Request-Id": "rid-create"},
    )

    r = client.get(f"{API}/admin/audit", params={"projectId": "Concert X"}, headers=admin_headers)

    entries = r.json()["entries"]
    assert [e["action"] for e in entries] == ["PROJECT_CREATED"]
    assert entries[0]["requestId"] == "rid-create"
    assert entries[0]["actorParticipantId"] == "owner-1"


def test_update_cannot_null_required_fields(client, owner_headers):
    create_concert(client, owner_headers)

    r = client.put(f"{API}/projects/Concert X", json={"title": None}, headers=owner_headers)
    assert r.status_code == 422

    r = client.put(
        f"{API}/projects/Concert X",
        json={"riskLevel": None, "targetAmount": None},
        headers=owner_headers,
    )
    assert r.status_code == 422

    body = client.get(f"{API}/projects/Concert X").json()
    assert body["title"] == "Concert X"
    assert body["riskLevel"] == "MEDIUM"
    assert body["targetAmount"] == 1_000_000


def test_update_can_clear_optional_fields(client, owner_headers):
    create_concert(client, owner_headers)

    r = client.put(f"{API}/projects/Concert X", json={"city": None}, headers=owner_headers)

    assert r.status_code == 200
    assert r.json()["city"] is None


def test_update_rechecks_investment_bounds(client, owner_headers):
    create_concert(client, owner_headers)

    r = client.put(
        f"{API}/projects/Concert X",
        json={"minInvestment": 500_000},
        headers=owner_headers,
    )

    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "INVALID_INVESTMENT_BOUNDS"
    assert client.get(f"{API}/projects/Concert X").json()["minInvestment"] == 10_000
