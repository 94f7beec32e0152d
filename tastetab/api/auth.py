# tastetab/api/auth.py
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from tastetab import schemas
from tastetab.core import security
from tastetab.core.errors import APIError
from tastetab.database import USERS, get_db
from tastetab.utils import mailer

logger = logging.getLogger(__name__)

router = APIRouter()

REGISTER_REQUIRED = ("username", "email", "password", "confirmPassword", "role")
UNIQUE_FIELDS = ("username", "email", "phone")


def _exists_error(field: str) -> APIError:
    return APIError(400, f"{field.capitalize()} already exists", field)


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: schemas.RegisterRequest, db: Database = Depends(get_db)):
    for field in REGISTER_REQUIRED:
        if not getattr(payload, field):
            raise APIError(
                400,
                "Username, email, password, confirmPassword, and role are required",
                field,
            )

    if payload.password != payload.confirmPassword:
        raise APIError(400, "Passwords do not match", "confirmPassword")

    if payload.role not in security.ROLES:
        raise APIError(400, 'Invalid role. Must be "admin" or "user"', "role")

    if payload.phone and not security.PHONE_PATTERN.match(payload.phone):
        raise APIError(400, "Phone must be a valid 10-digit number", "phone")

    # --- Uniqueness: report the first colliding field ---
    clauses = [{"username": payload.username}, {"email": payload.email}]
    if payload.phone:
        clauses.append({"phone": payload.phone})
    existing = db[USERS].find_one({"$or": clauses})
    if existing:
        for field in UNIQUE_FIELDS:
            value = getattr(payload, field)
            if value and existing.get(field) == value:
                raise _exists_error(field)

    user = {
        "username": payload.username,
        "email": payload.email,
        "password": security.hash_password(payload.password),
        "role": payload.role,
        "otp": None,
    }
    # phone is only stored when given so the sparse unique index skips the rest
    if payload.phone:
        user["phone"] = payload.phone

    try:
        db[USERS].insert_one(user)
    except DuplicateKeyError as e:
        key_pattern = (e.details or {}).get("keyPattern") or {}
        field = next((f for f in UNIQUE_FIELDS if f in key_pattern), "email")
        raise _exists_error(field)

    logger.info(f"Registered {payload.role} account {payload.email}")
    return {"message": "User registered successfully"}


@router.post("/login", response_model=schemas.LoginResponse)
def login(payload: schemas.LoginRequest, db: Database = Depends(get_db)):
    if not payload.email or not payload.password:
        raise APIError(
            400,
            "Email and password are required",
            "email" if not payload.email else "password",
        )

    user = db[USERS].find_one({"email": payload.email})
    # Same payload for unknown email and wrong password
    if not user or not security.verify_password(payload.password, user.get("password")):
        logger.info(f"Failed login for {payload.email}")
        raise APIError(401, "Invalid credentials", "email")

    user_id = str(user["_id"])
    role = user.get("role", "user")
    token = security.create_access_token(user_id, role)
    return schemas.LoginResponse(
        token=token,
        user=schemas.UserInfo(id=user_id, email=user["email"], role=role),
    )


@router.post("/forgot-password")
def forgot_password(payload: schemas.ForgotPasswordRequest, db: Database = Depends(get_db)):
    if not payload.email or not security.EMAIL_PATTERN.match(payload.email):
        raise APIError(400, "Valid email is required", "email")

    user = db[USERS].find_one({"email": payload.email})
    if not user:
        raise APIError(404, "Email not found", "email")

    otp = security.generate_otp()
    db[USERS].update_one({"_id": user["_id"]}, {"$set": {"otp": otp}})
    logger.info(f"Issued reset code for {payload.email}")

    if not mailer.send_otp_email(payload.email, otp):
        raise APIError(500, "Failed to send OTP email. Please try again later.", "email")

    return JSONResponse(status_code=200, content={"message": "OTP sent to email"})


@router.post("/verify-otp")
def verify_otp(payload: schemas.VerifyOtpRequest, db: Database = Depends(get_db)):
    for field in ("email", "otp", "newPassword"):
        if not getattr(payload, field):
            raise APIError(400, "Email, OTP, and new password are required", field)

    if not security.is_strong_password(payload.newPassword):
        raise APIError(
            400,
            "Password must be 8+ characters with 1 uppercase, 1 number, 1 special character",
            "newPassword",
        )

    user = db[USERS].find_one({"email": payload.email})
    if not user:
        raise APIError(404, "Email not found", "email")

    stored = user.get("otp")
    if not stored or stored != payload.otp:
        logger.info(f"Wrong reset code submitted for {payload.email}")
        raise APIError(400, "Invalid OTP", "otp")

    db[USERS].update_one(
        {"_id": user["_id"]},
        {"$set": {"password": security.hash_password(payload.newPassword), "otp": None}},
    )
    logger.info(f"Password updated for {payload.email}")
    return {"message": "Password updated successfully"}
