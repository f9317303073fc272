"""
Tests for Paystack webhook verification and event handling.
"""
import hashlib
import hmac
import json

import pytest

from quickjob.db.models.subscription import Subscription
from quickjob.services import billing_service
from quickjob.services.billing_service import WebhookSignatureError, plan_from_paystack, verify_webhook_signature

SECRET = "sk_test_webhook"
WEBHOOK_URL = "/functions/paystack-webhook"


@pytest.fixture(autouse=True)
def paystack_secret(monkeypatch):
    monkeypatch.setattr(billing_service, "PAYSTACK_SECRET_KEY", SECRET)


def _post_event(client, event, signature=None):
    raw = json.dumps(event).encode("utf-8")
    if signature is None:
        signature = hmac.new(SECRET.encode("utf-8"), raw, hashlib.sha512).hexdigest()
    return client.post(
        WEBHOOK_URL,
        content=raw,
        headers={"Content-Type": "application/json", "x-paystack-signature": signature}
    )


def _subscription_event(event_type, email, amount=150000, name="Standard QuickJob CI", **data):
    payload = {
        "subscription_code": "SUB_abc",
        "customer": {"email": email, "customer_code": "CUS_1"},
        "plan": {"plan_code": "PLN_1", "name": name, "amount": amount, "currency": "XOF"},
        "next_payment_date": "2026-11-18T00:00:00Z",
    }
    payload.update(data)
    return {"event": event_type, "data": payload}


def test_signature_verification():
    body = b'{"event": "charge.success"}'
    signature = hmac.new(b"secret", body, hashlib.sha512).hexdigest()

    verify_webhook_signature(body, signature, secret_key="secret")
    with pytest.raises(WebhookSignatureError):
        verify_webhook_signature(body, "0" * 128, secret_key="secret")
    with pytest.raises(WebhookSignatureError):
        verify_webhook_signature(body, None, secret_key="secret")


def test_invalid_signature_rejected(client, make_user, db):
    user = make_user(role="recruiter")

    response = _post_event(client, _subscription_event("subscription.create", user.email), signature="deadbeef")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Invalid signature"}
    assert db.query(Subscription).count() == 0


def test_unsigned_webhook_rejected(client):
    response = client.post(WEBHOOK_URL, json={"event": "subscription.create", "data": {}})

    assert response.status_code == 500
    assert response.json()["error"] == "Invalid signature"


@pytest.mark.parametrize("amount,name,expected", [
    (150000, "Standard QuickJob CI", "standard"),
    (300000, "Pro QuickJob CI", "pro"),
    (999, "Pro QuickJob CI", "pro"),
])
def test_subscription_create_activates_plan(client, db, make_user, amount, name, expected):
    user = make_user(role="recruiter")

    response = _post_event(client, _subscription_event("subscription.create", user.email.upper(), amount=amount, name=name))

    assert response.status_code == 200
    assert response.json() == {"success": True, "event": "subscription.create"}

    subscription = db.query(Subscription).filter(Subscription.user_id == user.id).one()
    assert subscription.status == "active"
    assert subscription.plan == expected
    assert subscription.paystack_subscription_id == "SUB_abc"
    db.refresh(user)
    assert user.subscription_plan == expected
    assert user.subscription_end is not None


def test_unknown_plan_falls_back_to_pending_checkout_plan(client, db, make_user):
    user = make_user(role="recruiter")
    db.add(Subscription(user_id=user.id, plan="pro", status="inactive"))
    db.commit()

    _post_event(client, _subscription_event("subscription.create", user.email, amount=1, name="Legacy"))

    db.expire_all()
    assert user.subscription_plan == "pro"


def test_unknown_plan_defaults_to_standard(client, db, make_user):
    user = make_user(role="candidate")

    _post_event(client, _subscription_event("subscription.enable", user.email, amount=1, name="Legacy"))

    db.refresh(user)
    assert user.subscription_plan == "standard"


def test_subscription_without_customer_email_is_ignored(client, db, make_user):
    make_user(role="recruiter")
    event = _subscription_event("subscription.create", None)

    response = _post_event(client, event)

    assert response.status_code == 200
    assert db.query(Subscription).count() == 0


def test_subscription_disable_downgrades_to_free(client, db, make_user):
    user = make_user(role="recruiter", plan="pro")
    db.add(Subscription(user_id=user.id, plan="pro", status="active", paystack_subscription_id="SUB_abc"))
    db.commit()

    response = _post_event(client, _subscription_event("subscription.disable", user.email))

    assert response.status_code == 200
    db.expire_all()
    subscription = db.query(Subscription).filter(Subscription.user_id == user.id).one()
    assert subscription.status == "cancelled"
    assert user.subscription_plan == "free"
    assert user.subscription_end is None


def test_paid_invoice_reactivates(client, db, make_user):
    user = make_user(role="candidate")
    db.add(Subscription(user_id=user.id, plan="standard", status="past_due", paystack_subscription_id="SUB_abc"))
    db.commit()

    event = {"event": "invoice.update", "data": {
        "status": "success",
        "paid_at": "2026-10-18T10:00:00Z",
        "customer": {"email": user.email},
        "subscription": {"subscription_code": "SUB_abc"},
    }}
    assert _post_event(client, event).status_code == 200

    db.expire_all()
    assert db.query(Subscription).one().status == "active"
    assert user.subscription_plan == "standard"


def test_unpaid_invoice_ignored(client, db, make_user):
    user = make_user(role="candidate")
    db.add(Subscription(user_id=user.id, plan="standard", status="past_due", paystack_subscription_id="SUB_abc"))
    db.commit()

    event = {"event": "invoice.create", "data": {
        "status": "pending",
        "customer": {"email": user.email},
        "subscription": {"subscription_code": "SUB_abc"},
    }}
    assert _post_event(client, event).status_code == 200

    db.expire_all()
    assert db.query(Subscription).one().status == "past_due"


def test_unhandled_event_acknowledged(client):
    response = _post_event(client, {"event": "charge.success", "data": {}})

    assert response.status_code == 200
    assert response.json()["event"] == "charge.success"


def test_plan_mapping():
    assert plan_from_paystack({"amount": 150000}) == "standard"
    assert plan_from_paystack({"amount": 1, "name": "pro QuickJob CI"}) == "pro"
    assert plan_from_paystack({"amount": 1, "name": "Legacy"}) is None
    assert plan_from_paystack(None) is None
