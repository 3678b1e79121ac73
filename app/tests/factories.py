from app.core.security import create_access_token


def token_for(participant_id: str, role: str = "PROJECT_OWNER", display_name: str = "Tester") -> str:
    return create_access_token(
        participant_id,
        {"participant_id": participant_id, "role": role, "display_name": display_name},
    )


def auth(participant_id: str, role: str = "PROJECT_OWNER") -> dict:
    return {"Authorization": f"Bearer {token_for(participant_id, role)}"}


def project_fields(**overrides):
    fields = {
        "title": "Concert X",
        "description": "Ticketing revenue of a stadium concert.",
        "type": "CONCERT",
        "target_amount": 1_000_000,
        "min_investment": 10_000,
        "max_investment": 200_000,
        "expected_return_min": 12,
        "expected_return_max": 18,
        "expected_return_type": "IRR",
        "revenue_structure": {"Ticketing": 70, "Sponsorship": 30},
        "risk_level": "MEDIUM",
        "region": "National",
        "city": "Shanghai",
        "investment_period": 12,
    }
    fields.update(overrides)
    return fields


def listing_fields(**overrides):
    fields = {
        "title": "Seeded Stadium Rights",
        "type": "SPORTS_VENUE",
        "target_amount": 500_000,
        "min_investment": 1_000,
        "max_investment": 100_000,
        "expected_return_min": 9,
        "expected_return_max": 12,
        "risk_level": "LOW",
        "region": "East",
        "city": "Hangzhou",
        "investment_period": 24,
    }
    fields.update(overrides)
    return fields
