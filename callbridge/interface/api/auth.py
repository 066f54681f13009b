"""Request authentication.

The principal is a JWT carried in the ``auth_token`` cookie or an
``Authorization: Bearer`` header.
"""

from fastapi import HTTPException, status

from callbridge.domain.service import JWTService
from callbridge.util.jwt import TokenPayload


def authenticate(
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None = None,
) -> TokenPayload:
    """Resolve the request principal.

    Args:
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie
        authorization: Raw Authorization header

    Returns:
        Verified token payload

    Raises:
        HTTPException: 401 if no token is present
        JWTError: If the token is invalid (mapped to 401)
    """
    token = auth_token
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    return jwt_service.verify_token(token)
