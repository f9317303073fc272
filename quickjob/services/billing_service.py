"""
Billing service for Paystack integration.

Handles plan provisioning, subscription checkout, and webhook event processing.
"""
import hashlib
import hmac
import json
import logging
import time
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from quickjob.core.config import FRONTEND_URL, PAYSTACK_CURRENCY, PAYSTACK_SECRET_KEY
from quickjob.db.models.subscription import Subscription
from quickjob.db.models.user import User
from quickjob.services.paystack_client import PaystackClient, PaystackError
from quickjob.services.user_service import find_user_by_email

logger = logging.getLogger(__name__)

PLAN_CATALOG: Dict[str, Dict[str, Any]] = {
    "standard": {
        "name": "Standard QuickJob CI",
        "amount": 150000,
        "interval": "monthly",
        "description": "10 annonces actives, accès complet aux CV, gestion candidatures, badge vérifié",
        "jobs_limit": 10,
        "trial_days": 7,
    },
    "pro": {
        "name": "Pro QuickJob CI",
        "amount": 300000,
        "interval": "monthly",
        "description": "Annonces illimitées, accès illimité profils, mise en avant, support premium",
        "jobs_limit": 999,
        "trial_days": 7,
    },
}

PAYMENT_CHANNELS = ["card", "mobile_money", "bank_transfer"]
DEFAULT_PERIOD_DAYS = 30


class WebhookSignatureError(Exception):
    """Raised when a webhook body does not match its x-paystack-signature header."""


def get_plan_config(plan: str) -> Dict[str, Any]:
    config = PLAN_CATALOG.get((plan or "").lower())
    if not config:
        raise ValueError("Plan non valide")
    return config


def plan_from_paystack(plan_data: Optional[Dict[str, Any]]) -> Optional[str]:
    """Map a Paystack plan object back to a catalog key by amount, then by name."""
    if not plan_data:
        return None

    amount = plan_data.get("amount")
    for key, config in PLAN_CATALOG.items():
        if amount == config["amount"]:
            return key

    name = (plan_data.get("name") or "").lower()
    for key, config in PLAN_CATALOG.items():
        if name == config["name"].lower() or key in name.split():
            return key
    return None


def ensure_plan(client: PaystackClient, plan: str) -> Dict[str, Any]:
    """
    Create the Paystack plan for a catalog entry.

    When Paystack reports the plan already exists, the existing plan with the
    same name is returned instead.
    """
    config = get_plan_config(plan)
    try:
        return client.create_plan(
            name=config["name"],
            amount=config["amount"],
            interval=config["interval"],
            currency=PAYSTACK_CURRENCY,
            description=config["description"],
        )
    except PaystackError as e:
        if "already exists" not in (e.message or "").lower():
            raise
        logger.info(f"Paystack plan already exists, reusing: plan={plan}")

    for existing in client.list_plans():
        if existing.get("name") == config["name"]:
            return existing
    raise PaystackError(f"Failed to create or find subscription plan: {config['name']}")


def create_subscription(
    db: Session,
    user: User,
    plan: str,
    client: PaystackClient,
    origin: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Run the Paystack checkout sequence for a user.

    1. fetch or create the customer
    2. create (or reuse) the plan
    3. create the subscription, starting after the trial
    4. initialize the payment transaction
    5. upsert the local subscription row as inactive

    A failure at any step raises and leaves earlier remote resources in place.

    Returns:
        Dictionary with payment_url, reference, subscription_code and plan
    """
    config = get_plan_config(plan)
    plan = plan.lower()

    customer = client.fetch_customer(user.email)
    if not customer:
        customer = client.create_customer(
            email=user.email,
            first_name=user.first_name or "",
            last_name=user.last_name or "",
            phone=user.phone or "",
        )
    customer_code = customer.get("customer_code") or str(customer.get("id"))

    plan_data = ensure_plan(client, plan)
    plan_code = plan_data["plan_code"]

    trial_end = datetime.utcnow() + timedelta(days=config["trial_days"])
    subscription_data = client.create_subscription(
        customer=customer_code,
        plan_code=plan_code,
        start_date=trial_end.isoformat() + "Z",
    )
    subscription_code = subscription_data.get("subscription_code")

    reference = f"quickjob_{plan}_{int(time.time() * 1000)}"
    payment = client.initialize_transaction({
        "email": user.email,
        "amount": config["amount"],
        "currency": PAYSTACK_CURRENCY,
        "reference": reference,
        "callback_url": f"{origin or FRONTEND_URL}/dashboard?subscription=success",
        "metadata": {
            "user_id": user.id,
            "custom_fields": [
                {"display_name": "Plan", "variable_name": "plan", "value": plan},
                {"display_name": "Trial Days", "variable_name": "trial_days", "value": str(config["trial_days"])},
            ],
        },
        "channels": PAYMENT_CHANNELS,
        "plan": plan_code,
    })

    subscription = db.query(Subscription).filter(Subscription.user_id == user.id).first()
    if not subscription:
        subscription = Subscription(user_id=user.id)
        db.add(subscription)

    subscription.plan = plan
    subscription.status = "inactive"
    subscription.paystack_subscription_id = subscription_code
    subscription.paystack_customer_code = customer_code
    subscription.plan_id = plan_code
    subscription.amount = config["amount"]
    subscription.currency = PAYSTACK_CURRENCY
    subscription.jobs_limit = config["jobs_limit"]
    subscription.trial_days = config["trial_days"]
    subscription.trial_end_date = trial_end
    db.commit()

    logger.info(f"Subscription checkout created: user_id={user.id}, plan={plan}, reference={payment.get('reference', reference)}")

    return {
        "payment_url": payment.get("authorization_url"),
        "reference": payment.get("reference", reference),
        "subscription_code": subscription_code,
        "plan": {"key": plan, **config},
    }


def verify_webhook_signature(raw_body: bytes, signature: Optional[str], secret_key: Optional[str] = None) -> None:
    """
    Check the HMAC-SHA512 of the raw body against the x-paystack-signature header.

    Raises:
        WebhookSignatureError: Missing secret, missing header, or mismatch
    """
    secret_key = secret_key or PAYSTACK_SECRET_KEY
    if not secret_key:
        raise WebhookSignatureError("PAYSTACK_SECRET_KEY is not set")
    if not signature:
        raise WebhookSignatureError("Invalid signature")

    expected = hmac.new(secret_key.encode("utf-8"), raw_body, hashlib.sha512).hexdigest()
    if not hmac.compare_digest(expected, signature.strip().lower()):
        raise WebhookSignatureError("Invalid signature")


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable Paystack date: {value}")
        return None


def _find_subscription(db: Session, subscription_code: Optional[str], email: Optional[str]) -> Optional[Subscription]:
    if subscription_code:
        subscription = db.query(Subscription).filter(
            Subscription.paystack_subscription_id == subscription_code
        ).first()
        if subscription:
            return subscription

    user = find_user_by_email(db, email) if email else None
    if user:
        return db.query(Subscription).filter(Subscription.user_id == user.id).first()
    return None


def handle_subscription_active(event_data: Dict, db: Session) -> Optional[Subscription]:
    """Handle subscription.create / subscription.enable."""
    customer = event_data.get("customer") or {}
    plan_data = event_data.get("plan") or {}
    subscription_code = event_data.get("subscription_code")

    email = customer.get("email")
    user = find_user_by_email(db, email) if email else None
    if not user:
        logger.warning(f"Webhook subscription for unknown customer: subscription_code={subscription_code}")
        return None

    subscription = db.query(Subscription).filter(Subscription.user_id == user.id).first()
    if not subscription:
        subscription = Subscription(user_id=user.id)
        db.add(subscription)

    plan = plan_from_paystack(plan_data) or (subscription.plan if subscription.plan != "free" else None) or "standard"
    renew_date = _parse_date(event_data.get("next_payment_date"))

    subscription.plan = plan
    subscription.status = "active"
    subscription.paystack_subscription_id = subscription_code
    subscription.paystack_customer_code = customer.get("customer_code") or subscription.paystack_customer_code
    subscription.plan_id = plan_data.get("plan_code") or subscription.plan_id
    subscription.amount = plan_data.get("amount") or subscription.amount
    subscription.currency = plan_data.get("currency") or subscription.currency
    subscription.renew_date = renew_date
    subscription.next_payment_date = renew_date

    user.subscription_plan = plan
    user.subscription_end = renew_date or (datetime.utcnow() + timedelta(days=DEFAULT_PERIOD_DAYS))

    db.commit()
    db.refresh(subscription)

    logger.info(f"Subscription activated: user_id={user.id}, plan={plan}, subscription_code={subscription_code}")
    return subscription


def handle_subscription_inactive(event_data: Dict, db: Session) -> Optional[Subscription]:
    """Handle subscription.disable / subscription.not_renew."""
    customer = event_data.get("customer") or {}
    subscription_code = event_data.get("subscription_code")

    subscription = _find_subscription(db, subscription_code, customer.get("email"))
    if not subscription:
        logger.warning(f"Webhook cancellation for unknown subscription: subscription_code={subscription_code}")
        return None

    subscription.status = "cancelled"
    user = db.query(User).filter(User.id == subscription.user_id).first()
    if user:
        user.subscription_plan = "free"
        user.subscription_end = None

    db.commit()
    db.refresh(subscription)

    logger.info(f"Subscription cancelled: user_id={subscription.user_id}, subscription_code={subscription_code}")
    return subscription


def handle_invoice_event(event_data: Dict, db: Session) -> Optional[Subscription]:
    """Handle invoice.create / invoice.update; only successful paid invoices change state."""
    if event_data.get("status") != "success" or not event_data.get("paid_at"):
        return None

    customer = event_data.get("customer") or {}
    subscription_code = (event_data.get("subscription") or {}).get("subscription_code")

    subscription = _find_subscription(db, subscription_code, customer.get("email"))
    if not subscription:
        logger.warning(f"Paid invoice for unknown subscription: subscription_code={subscription_code}")
        return None

    subscription.status = "active"
    user = db.query(User).filter(User.id == subscription.user_id).first()
    if user and subscription.plan and subscription.plan != "free":
        user.subscription_plan = subscription.plan

    db.commit()
    db.refresh(subscription)

    logger.info(f"Invoice paid: user_id={subscription.user_id}, subscription_code={subscription_code}")
    return subscription


WEBHOOK_HANDLERS = {
    "subscription.create": handle_subscription_active,
    "subscription.enable": handle_subscription_active,
    "subscription.disable": handle_subscription_inactive,
    "subscription.not_renew": handle_subscription_inactive,
    "invoice.create": handle_invoice_event,
    "invoice.update": handle_invoice_event,
}


def process_webhook(raw_body: bytes, signature: Optional[str], db: Session) -> str:
    """
    Verify and dispatch a Paystack webhook.

    Returns:
        The event type that was processed
    """
    verify_webhook_signature(raw_body, signature)

    event = json.loads(raw_body)
    event_type = event.get("event")
    logger.info(f"Paystack webhook event: {event_type}")

    handler = WEBHOOK_HANDLERS.get(event_type)
    if handler is None:
        logger.info(f"Unhandled Paystack event type: {event_type}")
        return event_type

    handler(event.get("data") or {}, db)
    return event_type


def get_user_subscription(db: Session, user: User) -> Optional[Subscription]:
    return db.query(Subscription).filter(Subscription.user_id == user.id).first()
