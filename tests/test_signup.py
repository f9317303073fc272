"""
Tests for POST /auth/signup and the profile endpoints.
"""
from quickjob.db.models.user import User


def _signup(client, **overrides):
    body = {
        "email": "awa.kone@example.ci",
        "password": "MotDePasse123",
        "role": "candidate",
        "first_name": "Awa",
        "last_name": "Koné",
        "phone": "+2250700000000",
        "location": "Abidjan",
        "commune": "Cocody",
    }
    body.update(overrides)
    return client.post("/auth/signup", json=body)


def test_signup_candidate_creates_free_profile(client, db):
    response = _signup(client)

    assert response.status_code == 201
    data = response.json()
    assert data["role"] == "candidate"
    assert data["redirect_to"] == "/dashboard/candidat"

    user = db.query(User).filter(User.id == data["user_id"]).first()
    assert user.subscription_plan == "free"
    assert user.applications_created_count == 0
    assert user.jobs_published == 0
    assert user.commune == "Cocody"


def test_signup_recruiter(client):
    response = _signup(client, email="boutique@example.ci", role="recruiter", company_name="Boutique Plateau")

    assert response.status_code == 201
    assert response.json()["redirect_to"] == "/dashboard/recruteur"


def test_signup_duplicate_email_case_insensitive(client):
    assert _signup(client).status_code == 201

    response = _signup(client, email="AWA.KONE@example.ci")

    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


def test_signup_cannot_self_register_admin(client):
    response = _signup(client, role="admin")
    assert response.status_code == 422


def test_signup_rejects_password_over_72_bytes(client):
    response = _signup(client, password="é" * 40)
    assert response.status_code == 422


def test_signup_rejects_invalid_email(client):
    response = _signup(client, email="not-an-email")
    assert response.status_code == 422


def test_get_and_update_profile(client, make_user, headers):
    user = make_user(first_name="Yao")

    response = client.get("/me", headers=headers(user))
    assert response.status_code == 200
    assert response.json()["first_name"] == "Yao"

    response = client.patch("/me", json={"whatsapp": "+2250500000000", "quartier": "Riviera"}, headers=headers(user))
    assert response.status_code == 200
    data = response.json()
    assert data["whatsapp"] == "+2250500000000"
    assert data["quartier"] == "Riviera"
    assert data["subscription_plan"] == "free"


def test_profile_update_ignores_plan_fields(client, make_user, headers, db):
    user = make_user()

    client.patch("/me", json={"subscription_plan": "pro"}, headers=headers(user))

    db.refresh(user)
    assert user.subscription_plan == "free"
