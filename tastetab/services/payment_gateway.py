# tastetab/services/payment_gateway.py
import logging
import time
from typing import Optional

import httpx

from tastetab.core.config import settings

logger = logging.getLogger(__name__)

CURRENCY = "INR"


class GatewayError(Exception):
    pass


def to_paise(amount: float) -> int:
    return int(round(amount * 100))


class RazorpayClient:
    """Thin async wrapper over the Razorpay REST API (orders, QR codes, payments)."""

    def __init__(self, key_id: str, key_secret: str, base_url: str = settings.RAZORPAY_BASE_URL, timeout: float = 30.0):
        if not key_id or not key_secret:
            raise ValueError("Razorpay key id and secret are required")
        self.base_url = base_url.rstrip("/")
        self.auth = (key_id, key_secret)
        self.timeout = timeout

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> dict:
        async with httpx.AsyncClient(base_url=self.base_url, auth=self.auth, timeout=self.timeout) as client:
            try:
                res = await client.request(method, path, json=json)
                res.raise_for_status()
                return res.json()
            except httpx.HTTPStatusError as e:
                logger.error(f"Razorpay {method} {path} failed: {e.response.status_code} {e.response.text}")
                raise GatewayError(f"Razorpay returned {e.response.status_code}") from e
            except (httpx.RequestError, ValueError) as e:
                logger.error(f"Razorpay {method} {path} unreachable: {e}")
                raise GatewayError(str(e)) from e

    async def create_order(self, amount: float) -> dict:
        payload = {
            "amount": to_paise(amount),
            "currency": CURRENCY,
            "receipt": f"receipt_{int(time.time() * 1000)}",
        }
        return await self._request("POST", "/orders", json=payload)

    async def fetch_qr_code(self, qr_id: str) -> dict:
        return await self._request("GET", f"/payments/qr_codes/{qr_id}")

    async def fetch_payment(self, payment_id: str) -> dict:
        return await self._request("GET", f"/payments/{payment_id}")


def init_gateway() -> Optional[RazorpayClient]:
    try:
        return RazorpayClient(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET)
    except ValueError as e:
        logger.warning(f"Razorpay initialization failed: {e}")
        return None


gateway = init_gateway()


def get_gateway() -> Optional[RazorpayClient]:
    return gateway
