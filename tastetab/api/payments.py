# tastetab/api/payments.py
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends

from tastetab import schemas
from tastetab.core.config import settings
from tastetab.core.errors import APIError
from tastetab.services.payment_gateway import GatewayError, RazorpayClient, get_gateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


def require_gateway(gateway: Optional[RazorpayClient] = Depends(get_gateway)) -> RazorpayClient:
    if gateway is None:
        raise APIError(503, "Razorpay unavailable")
    return gateway


@router.post("/create-order")
async def create_order(payload: schemas.CreateOrderRequest, gateway: RazorpayClient = Depends(require_gateway)):
    if not payload.amount or not math.isfinite(payload.amount) or payload.amount <= 0:
        logger.error(f"Invalid amount: {payload.amount}")
        raise APIError(400, "Invalid amount")
    try:
        order = await gateway.create_order(payload.amount)
    except GatewayError as e:
        logger.error(f"Error creating order: {e}")
        raise APIError(500, "Failed to create order")
    logger.info(f"Order created: {order.get('id')}")
    return {"order_id": order.get("id"), "amount": order.get("amount")}


@router.get("/fetch-qr")
async def fetch_qr(gateway: RazorpayClient = Depends(require_gateway)):
    if not settings.RAZORPAY_QR_ID:
        raise APIError(503, "QR code not configured")
    try:
        qr = await gateway.fetch_qr_code(settings.RAZORPAY_QR_ID)
    except GatewayError as e:
        logger.error(f"Error fetching QR code: {e}")
        raise APIError(500, "Failed to fetch QR code")
    if qr.get("status") == "closed":
        raise APIError(400, "QR code is closed or expired")
    amount = qr.get("payment_amount") / 100 if qr.get("fixed_amount") and qr.get("payment_amount") is not None else None
    return {"qr_id": qr.get("id"), "image_url": qr.get("image_url"), "amount": amount}


@router.post("/verify-payment")
async def verify_payment(payload: schemas.VerifyPaymentRequest, gateway: RazorpayClient = Depends(require_gateway)):
    if not payload.payment_id:
        logger.error("Payment ID missing")
        raise APIError(400, "Payment ID is required")
    try:
        payment = await gateway.fetch_payment(payload.payment_id)
    except GatewayError as e:
        logger.error(f"Error verifying payment: {e}")
        raise APIError(500, "Failed to verify payment")
    return {"method": payment.get("method") or "unknown"}
