# tastetab/schemas.py
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


# --- Auth ---
# Auth bodies are all-optional so the routes can report the first missing
# field in their own order instead of pydantic's.
class RegisterRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    confirmPassword: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserInfo(BaseModel):
    id: str
    email: str
    role: str


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful"
    token: str
    user: UserInfo


class ForgotPasswordRequest(BaseModel):
    email: Optional[str] = None


class VerifyOtpRequest(BaseModel):
    email: Optional[str] = None
    otp: Optional[str] = None
    newPassword: Optional[str] = None


# --- Menu ---
class MenuItemIn(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)
    imageUrl: str = Field(..., min_length=1)
    openTime: str = Field(..., min_length=1)
    closeTime: str = Field(..., min_length=1)


# --- Bills ---
class BillItem(BaseModel):
    itemName: str
    category: str
    price: float
    quantity: int
    total: float


class BillCreate(BaseModel):
    items: List[BillItem]
    grandTotal: float
    paymentMethod: Literal["cash", "online"]
    status: Literal["success", "failed"]


# --- Payments ---
class CreateOrderRequest(BaseModel):
    amount: Optional[float] = None


class VerifyPaymentRequest(BaseModel):
    payment_id: Optional[str] = None
