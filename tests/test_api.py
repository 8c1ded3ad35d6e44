"""
End-to-end through the FastAPI app against a temp SQLite file.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone

import jwt


def _email() -> str:
    return f"api-{uuid.uuid4().hex[:8]}@example.com"


# ── auth ─────────────────────────────────────────────────────────────
def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_signup_then_login(client, signup):
    email = _email()
    _, data = signup(email=email)
    assert data["user"]["email"] == email
    assert data["token"]

    r = client.post("/api/v1/auth/login", json={"email": email, "password": "secret123"})
    assert r.status_code == 200
    assert r.json()["user"]["id"] == data["user"]["id"]


def test_signup_duplicate_email(client, signup):
    email = _email()
    signup(email=email)
    r = client.post(
        "/api/v1/auth/signup",
        json={"username": "Bob", "email": email, "password": "secret123"},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Email already in use"


def test_login_wrong_password(client, signup):
    email = _email()
    signup(email=email)
    r = client.post("/api/v1/auth/login", json={"email": email, "password": "nope-nope"})
    assert r.status_code == 400


def test_requires_token(client):
    assert client.get("/api/v1/users/me").status_code == 401
    bad = {"Authorization": "Bearer not-a-jwt"}
    assert client.get("/api/v1/onboarding", headers=bad).status_code == 401


# ── users ────────────────────────────────────────────────────────────
def test_me_and_update(client, signup):
    headers, _ = signup(username="Ada")
    assert client.get("/api/v1/users/me", headers=headers).json()["user"]["name"] == "Ada"

    r = client.put("/api/v1/users/me", json={"name": "Grace"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["user"]["name"] == "Grace"

    assert client.put("/api/v1/users/me", json={}, headers=headers).status_code == 400


def test_update_email_taken(client, signup):
    other = _email()
    signup(email=other)
    headers, _ = signup()
    r = client.put("/api/v1/users/me", json={"email": other}, headers=headers)
    assert r.status_code == 400


def test_change_password(client, signup):
    email = _email()
    headers, _ = signup(email=email)
    url = "/api/v1/users/me/password"

    short = {"current_password": "secret123", "new_password": "abc"}
    assert client.put(url, json=short, headers=headers).status_code == 400
    wrong = {"current_password": "wrong-one", "new_password": "brandnew1"}
    assert client.put(url, json=wrong, headers=headers).status_code == 400

    ok = {"current_password": "secret123", "new_password": "brandnew1"}
    assert client.put(url, json=ok, headers=headers).status_code == 200
    r = client.post("/api/v1/auth/login", json={"email": email, "password": "brandnew1"})
    assert r.status_code == 200


# ── onboarding ───────────────────────────────────────────────────────
def test_onboarding_creates_profile_and_plan(client, onboarded):
    r = client.get("/api/v1/onboarding", headers=onboarded)
    assert r.status_code == 200
    assert r.json()["onboarding_data"]["goal"] == "lose weight"

    plans = client.get("/api/v1/plans", params={"latest": "true"}, headers=onboarded).json()
    data = plans["plans"]["plan_data"]
    assert data["calories_target"] == 1509
    assert data["bmi_category"] == "Normal"
    assert data["macros"] == {"protein_g": 113, "carbs_g": 151, "fat_g": 50}

    prof = client.get("/api/v1/users/me/profile", headers=onboarded).json()
    assert prof["profile"]["age"] == 25


def test_onboarding_twice_rejected(client, onboarded):
    body = {"age": 25, "height": 175, "weight": 70, "goal": "maintain weight"}
    r = client.post("/api/v1/onboarding", json=body, headers=onboarded)
    assert r.status_code == 400


def test_onboarding_invalid_profile(client, signup):
    headers, _ = signup()
    body = {"age": 25, "height": 175, "weight": 500, "goal": "maintain weight"}
    r = client.post("/api/v1/onboarding", json=body, headers=headers)
    assert r.status_code == 400
    assert r.json()["field"] == "weight"

    r = client.post("/api/v1/onboarding", json={"age": 25}, headers=headers)
    assert r.status_code == 400
    assert client.get("/api/v1/onboarding", headers=headers).status_code == 404


def test_onboarding_update_recomputes(client, onboarded):
    body = {"age": 25, "height": 175, "weight": 70, "goal": "Maintain Weight"}
    r = client.put("/api/v1/onboarding", json=body, headers=onboarded)
    assert r.status_code == 200
    assert r.json()["plan"]["plan_data"]["calories_target"] == 2009

    latest = client.get("/api/v1/plans?latest=true", headers=onboarded).json()["plans"]
    assert latest["plan_data"]["calories_target"] == 2009
    assert len(client.get("/api/v1/plans", headers=onboarded).json()["plans"]) == 2


def test_onboarding_update_without_profile(client, signup):
    headers, _ = signup()
    body = {"age": 25, "height": 175, "weight": 70, "goal": "maintain"}
    assert client.put("/api/v1/onboarding", json=body, headers=headers).status_code == 400


# ── plans ────────────────────────────────────────────────────────────
def test_plan_requires_onboarding(client, signup):
    headers, _ = signup()
    assert client.post("/api/v1/plans", json={}, headers=headers).status_code == 404
    assert client.get("/api/v1/plans", headers=headers).status_code == 404


def test_generate_plan_with_overrides(client, onboarded):
    r = client.post(
        "/api/v1/plans",
        json={"plan_data": {"calories_target": 1700, "note": "coach tweak"}},
        headers=onboarded,
    )
    assert r.status_code == 201
    data = r.json()["plan"]["plan_data"]
    assert data["calories_target"] == 1700
    assert data["note"] == "coach tweak"
    assert data["goal"] == "lose weight"
    assert r.json()["plan"]["bmi"] == 22.9


def test_update_plan_merges(client, onboarded):
    plan = client.get("/api/v1/plans?latest=true", headers=onboarded).json()["plans"]
    url = f"/api/v1/plans/{plan['id']}"

    assert client.put(url, json={}, headers=onboarded).status_code == 400

    r = client.put(url, json={"plan_data": {"water_l": 2.5}, "bmi": 23.0}, headers=onboarded)
    assert r.status_code == 200
    updated = r.json()["plan"]
    assert updated["plan_data"]["water_l"] == 2.5
    assert updated["plan_data"]["calories_target"] == 1509
    assert updated["bmi"] == 23.0


def test_update_foreign_plan_hidden(client, onboarded, signup):
    plan = client.get("/api/v1/plans?latest=true", headers=onboarded).json()["plans"]
    stranger, _ = signup()
    r = client.put(f"/api/v1/plans/{plan['id']}", json={"bmi": 20.0}, headers=stranger)
    assert r.status_code == 404


def test_latest_summary(client, onboarded):
    r = client.get("/api/v1/plans/latest/summary", headers=onboarded)
    assert r.status_code == 200
    body = r.json()
    assert body["macro_shares"] == {"protein": 30, "carbs": 40, "fat": 30}
    assert "Create a moderate calorie deficit" in body["tips"]


# ── admin ────────────────────────────────────────────────────────────
def test_admin_users(client, signup):
    assert client.get("/api/v1/admin/users").status_code == 401

    regular, _ = signup()
    assert client.get("/api/v1/admin/users", headers=regular).status_code == 403

    admin_email = "admin@example.com"
    r = client.post(
        "/api/v1/auth/login", json={"email": admin_email, "password": "secret123"}
    )
    if r.status_code != 200:
        headers, _ = signup(email=admin_email)
    else:
        headers = {"Authorization": f"Bearer {r.json()['token']}"}

    r = client.get("/api/v1/admin/users", headers=headers)
    assert r.status_code == 200
    assert any(u["email"] == admin_email for u in r.json()["users"])


# ── validation owned by the calculator ──────────────────────────────
def test_onboarding_fractional_age_is_invalid_profile(client, signup):
    headers, _ = signup()
    body = {"age": 25.5, "height": 175, "weight": 70, "goal": "maintain weight"}
    r = client.post("/api/v1/onboarding", json=body, headers=headers)
    assert r.status_code == 400
    assert r.json()["field"] == "age"

    body = {"age": 25, "height": "tall", "weight": 70, "goal": "maintain weight"}
    r = client.post("/api/v1/onboarding", json=body, headers=headers)
    assert r.status_code == 400
    assert r.json()["field"] == "height"


def test_onboarding_update_invalid_profile(client, onboarded):
    body = {"age": 25, "height": 175, "weight": 70, "goal": "maintain weight"}
    bad = {**body, "height": 260}
    r = client.put("/api/v1/onboarding", json=bad, headers=onboarded)
    assert r.status_code == 400
    assert r.json()["field"] == "height"

    # stored profile and plan history untouched
    assert client.get("/api/v1/onboarding", headers=onboarded).json()["onboarding_data"]["height"] == 175
    assert len(client.get("/api/v1/plans", headers=onboarded).json()["plans"]) == 1


def test_expired_token_rejected(client, signup):
    _, data = signup()
    expired = jwt.encode(
        {"sub": str(data["user"]["id"]), "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        "test-secret",
        algorithm="HS256",
    )
    r = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401


# ── plan bmi override / logging ─────────────────────────────────────
def test_generate_plan_bmi_override(client, onboarded):
    r = client.post("/api/v1/plans", json={"bmi": 24.0}, headers=onboarded)
    assert r.status_code == 201
    plan = r.json()["plan"]
    assert plan["bmi"] == 24.0
    assert plan["plan_data"]["bmi"] == 24.0
    assert plan["plan_data"]["calories_target"] == 1509

    # plan_data still wins over the top-level bmi
    r = client.post(
        "/api/v1/plans", json={"bmi": 24.0, "plan_data": {"bmi": 21.5}}, headers=onboarded
    )
    assert r.json()["plan"]["plan_data"]["bmi"] == 21.5


def test_update_plan_is_logged(client, onboarded, caplog):
    plan = client.get("/api/v1/plans?latest=true", headers=onboarded).json()["plans"]
    with caplog.at_level(logging.INFO, logger="api.v1.plans"):
        r = client.put(f"/api/v1/plans/{plan['id']}", json={"bmi": 22.0}, headers=onboarded)
    assert r.status_code == 200
    assert f"plan {plan['id']} updated for user {plan['user_id']}" in caplog.text
