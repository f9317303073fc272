"""
Paystack billing endpoints.

- /functions/create-paystack-plan, /functions/create-paystack-subscription and
  /functions/paystack-webhook answer with {"success": ..., ...} envelopes
- /billing/subscription returns the caller's local subscription row
"""
import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from quickjob.core.auth_dependency import get_client_origin, get_current_user_obj, get_db, optional_oauth2_scheme
from quickjob.core.responses import error_response, success_response
from quickjob.core.security import decode_access_token
from quickjob.db.models.user import User
from quickjob.schemas.billing import CreatePlanRequest, CreateSubscriptionRequest, SubscriptionResponse
from quickjob.services import billing_service
from quickjob.services.paystack_client import PaystackClient
from quickjob.services.user_service import find_user_by_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/billing", tags=["Billing"])
functions_router = APIRouter(prefix="/functions", tags=["Billing"])


def get_paystack_client_factory() -> Callable[[], PaystackClient]:
    """Builds Paystack clients inside the request so a missing key is reported in the envelope."""
    return PaystackClient


@functions_router.post("/create-paystack-plan")
def create_paystack_plan(
    body: CreatePlanRequest,
    client_factory: Callable[[], PaystackClient] = Depends(get_paystack_client_factory)
):
    try:
        client = client_factory()
        try:
            plan = billing_service.ensure_plan(client, body.plan_type or "")
        finally:
            client.close()
        return success_response(plan=plan, plan_code=plan.get("plan_code"))
    except Exception as e:
        logger.error(f"Error creating Paystack plan: plan_type={body.plan_type}: {e}", exc_info=True)
        return error_response(str(e))


@functions_router.post("/create-paystack-subscription")
def create_paystack_subscription(
    body: CreateSubscriptionRequest,
    request: Request,
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: Session = Depends(get_db),
    client_factory: Callable[[], PaystackClient] = Depends(get_paystack_client_factory)
):
    """
    Start a Paystack checkout for the signed-in user.

    Returns the hosted payment URL; the subscription becomes active when the
    subscription.create webhook arrives.
    """
    try:
        email = decode_access_token(token) if token else None
        user = find_user_by_email(db, email) if email else None
        if not user:
            raise ValueError("User not authenticated")

        client = client_factory()
        try:
            result = billing_service.create_subscription(
                db, user, body.plan or "", client, origin=get_client_origin(request)
            )
        finally:
            client.close()
        return success_response(**result)
    except Exception as e:
        db.rollback()
        logger.error(f"Error in create-paystack-subscription: plan={body.plan}: {e}", exc_info=True)
        return error_response(str(e))


@functions_router.post("/paystack-webhook")
async def paystack_webhook(
    request: Request,
    x_paystack_signature: Optional[str] = Header(None),
    db: Session = Depends(get_db)
):
    raw_body = await request.body()
    try:
        event_type = billing_service.process_webhook(raw_body, x_paystack_signature, db)
        return success_response(event=event_type)
    except Exception as e:
        db.rollback()
        logger.error(f"Webhook error: {e}", exc_info=True)
        return error_response(str(e))


@router.get("/subscription", response_model=SubscriptionResponse)
def get_my_subscription(user: User = Depends(get_current_user_obj), db: Session = Depends(get_db)):
    subscription = billing_service.get_user_subscription(db, user)
    if not subscription:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No subscription found")
    return subscription
