import asyncio
import uuid

from fastapi.testclient import TestClient

from main import app
from scripts.refresh_plans import refresh

PROFILE = {"age": 40, "height": 180, "weight": 90, "goal": "weight gain"}


def _onboard(c: TestClient) -> tuple[dict, int]:
    r = c.post(
        "/api/v1/auth/signup",
        json={
            "username": "Script",
            "email": f"script-{uuid.uuid4().hex[:8]}@example.com",
            "password": "secret123",
        },
    )
    data = r.json()
    headers = {"Authorization": f"Bearer {data['token']}"}
    assert c.post("/api/v1/onboarding", json=PROFILE, headers=headers).status_code == 200
    return headers, data["user"]["id"]


def test_refresh_single_user_appends_plan():
    with TestClient(app) as c:
        headers, uid = _onboard(c)

    # runs on its own event loop, outside the app lifespan
    assert asyncio.run(refresh(uid)) == 1
    assert asyncio.run(refresh(10_000_000)) == 0

    with TestClient(app) as c:
        plans = c.get("/api/v1/plans", headers=headers).json()["plans"]
    assert len(plans) == 2
    assert plans[0]["plan_data"] == plans[1]["plan_data"]
