"""FastAPI dependencies for authentication.

Dependencies:
  get_current_user   → decode the JWT (cookie or bearer), return AuthUser

Role checks are per operation and live in the reference data controller
(ReferenceDataController.authorize).
"""

from dataclasses import dataclass

from fastapi import HTTPException, Request, status

from carobar.auth.jwt import decode_token
from carobar.config import settings


@dataclass(frozen=True)
class AuthUser:
    """Caller identity attached to every tenant-scoped request."""
    user_id: str
    user_name: str
    company_id: str
    role_id: str


def _extract_token(request: Request) -> str | None:
    token = request.cookies.get(settings.auth_cookie_name)
    if token:
        return token
    auth_header = request.headers.get("authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:]
    return None


async def get_current_user(request: Request) -> AuthUser:
    """Decode the access token and return the caller's tenant and role.

    Raises 401 when the token is missing, expired, malformed, a refresh
    token, or lacks the tenant/user claims.
    """
    token = _extract_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(token)
    user_id = payload.get("userId")
    company_id = payload.get("companyId")
    if not user_id or not company_id or payload.get("tokenType", "access") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthUser(
        user_id=user_id,
        user_name=payload.get("userName") or user_id,
        company_id=company_id,
        role_id=payload.get("roleId", ""),
    )
