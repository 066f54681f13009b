"""JWT token domain service."""

import logfire

from callbridge.config import AuthSettings
from callbridge.domain.model import Account
from callbridge.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues the credential artifact handed out on invitation acceptance."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        super().__init__()
        self.auth_settings = auth_settings

    def create_token(self, account: Account) -> str:
        """Create JWT token for an account.

        Args:
            account: Account the token identifies

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", account_id=str(account.id)):
            token = create_token(str(account.id), account.role.value, self.auth_settings)
            logfire.info(
                "JWT token created",
                account_id=str(account.id),
                role=account.role.value,
            )
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
            logfire.info("JWT token verified", account_id=payload.account_id)
            return payload
