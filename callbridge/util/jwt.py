"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from callbridge.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload (the authenticated principal)."""

    account_id: str
    role: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(account_id: str, role: str, settings: AuthSettings) -> str:
    """Create a JWT token for an account.

    Args:
        account_id: Account ID
        role: Account role value
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "account_id": account_id,
        "role": role,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}") from e

    try:
        return TokenPayload(**payload)
    except (TypeError, ValueError) as e:
        raise JWTError(f"Invalid token payload: {e}") from e
