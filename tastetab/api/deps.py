# tastetab/api/deps.py
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tastetab.core.errors import APIError
from tastetab.core.security import ROLES, JWTError, decode_access_token

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)

DENIED_MESSAGES = {
    "admin": "Access Denied: Admins only",
    "user": "Access Denied: Users only",
}


def require_role(*roles: str):
    """Build a dependency admitting only bearer tokens whose role claim is in ``roles``.

    Missing token -> 401, invalid or expired token -> 400, wrong role -> 403.
    The decoded claims are handed to the route.
    """

    def gate(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> dict:
        if credentials is None or not credentials.credentials:
            raise APIError(401, "Access Denied: No token provided")
        try:
            claims = decode_access_token(credentials.credentials)
        except JWTError as e:
            logger.info(f"Rejected token: {e}")
            raise APIError(400, "Invalid Token")
        if claims.get("role") not in roles:
            message = DENIED_MESSAGES.get(roles[0]) if len(roles) == 1 else None
            raise APIError(403, message or "Access Denied")
        return claims

    gate.__name__ = "require_" + "_or_".join(roles)
    return gate


get_admin_user = require_role("admin")
get_staff_user = require_role("user")
get_any_user = require_role(*ROLES)
