"""JWT token creation and decoding.

Tokens are issued by the login flow and stored in the `token` cookie.

Token claims:
  - userId, userName, email
  - companyId, companyName:  the tenant the user belongs to
  - roleId, roleName:        "SA" | "CA" | "CU"
  - tokenType:               "access" | "refresh"
  - exp:                     expiry timestamp
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from carobar.config import settings

ALGORITHM = settings.jwt_algorithm

ACCESS_TOKEN_EXPIRY = timedelta(hours=1)


def create_access_token(
    user_id: str,
    company_id: str,
    role_id: str,
    user_name: str = "",
    expires_delta: timedelta | None = None,
    token_type: str = "access",
) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or ACCESS_TOKEN_EXPIRY)
    payload = {
        "userId": user_id,
        "userName": user_name or user_id,
        "companyId": company_id,
        "roleId": role_id,
        "tokenType": token_type,
        "exp": expire,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and validate a JWT. Returns empty dict on failure."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return {}
