"""
Bearer token identity.

Tokens are HS256 JWTs carrying the user id in ``sub``. Issuing tokens is a
management task (see ``manage.py token``); the API only verifies them.
"""

from datetime import datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from marginbook.config import get_settings
from marginbook.core.exceptions import AuthenticationError


def create_access_token(
    user_id: str,
    email: str | None = None,
    expires_minutes: int | None = None,
) -> str:
    """Sign an access token for ``user_id``."""
    auth = get_settings().auth
    expire = datetime.utcnow() + timedelta(
        minutes=expires_minutes or auth.access_token_expire_minutes
    )
    payload: dict[str, Any] = {"sub": user_id, "exp": expire}
    if email:
        payload["email"] = email
    return jwt.encode(payload, auth.secret_key, algorithm=auth.algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify a token and return its claims.

    Raises:
        AuthenticationError: If the signature, expiry or ``sub`` claim is bad
    """
    auth = get_settings().auth
    try:
        claims = jwt.decode(token, auth.secret_key, algorithms=[auth.algorithm])
    except JWTError as e:
        raise AuthenticationError("Invalid or expired token") from e

    if not isinstance(claims.get("sub"), str) or not claims["sub"]:
        raise AuthenticationError("Invalid token payload")
    return claims
