"""
Thin synchronous client for the Paystack REST API.

Every Paystack response is an envelope {"status": bool, "message": str, "data": ...};
a false status or a non-2xx code raises PaystackError.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from quickjob.core.config import PAYSTACK_BASE_URL, PAYSTACK_SECRET_KEY

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class PaystackError(Exception):
    """Raised when Paystack rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PaystackClient:
    def __init__(
        self,
        secret_key: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.secret_key = secret_key or PAYSTACK_SECRET_KEY
        if not self.secret_key:
            raise PaystackError("PAYSTACK_SECRET_KEY is not set")

        self.client = httpx.Client(
            base_url=base_url or PAYSTACK_BASE_URL,
            headers={
                "Authorization": f"Bearer {self.secret_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = self.client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.error(f"Paystack request failed: {method} {path}: {e}", exc_info=True)
            raise PaystackError(f"Paystack unreachable: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error or not body.get("status"):
            message = body.get("message") or f"HTTP {response.status_code}"
            logger.warning(f"Paystack error: {method} {path} -> {response.status_code}: {message}")
            raise PaystackError(message, status_code=response.status_code)

        return body.get("data")

    def fetch_customer(self, email: str) -> Optional[Dict[str, Any]]:
        """Existing customer for an email, or None when Paystack does not know it."""
        try:
            return self._request("GET", f"/customer/{quote(email)}")
        except PaystackError as e:
            if e.status_code is None:
                raise
            return None

    def create_customer(self, email: str, first_name: str = "", last_name: str = "", phone: str = "") -> Dict[str, Any]:
        return self._request("POST", "/customer", json={
            "email": email,
            "first_name": first_name,
            "last_name": last_name,
            "phone": phone,
        })

    def create_plan(self, name: str, amount: int, interval: str, currency: str, description: str = "") -> Dict[str, Any]:
        return self._request("POST", "/plan", json={
            "name": name,
            "amount": amount,
            "interval": interval,
            "currency": currency,
            "description": description,
            "send_invoices": True,
            "send_sms": True,
        })

    def list_plans(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/plan") or []

    def create_subscription(self, customer: str, plan_code: str, start_date: str) -> Dict[str, Any]:
        return self._request("POST", "/subscription", json={
            "customer": customer,
            "plan": plan_code,
            "start_date": start_date,
        })

    def initialize_transaction(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/transaction/initialize", json=payload)
