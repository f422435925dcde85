"""Caller identity domain service."""

from typing import Optional

import logfire

from engage.config import AuthSettings
from engage.domain.value import UserId
from engage.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class IdentityService(Service):
    """Resolves the caller's user id from the identity provider's token."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize identity service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: UserId) -> str:
        """Create a signed token for a user.

        Args:
            user_id: User ID

        Returns:
            JWT token string
        """
        with logfire.span("identity_service.create_token", user_id=str(user_id)):
            return create_token(str(user_id), self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a token and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("identity_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> Optional[UserId]:
        """Extract the user ID from a token without raising.

        Routes use this to resolve an optional caller; operations that need
        a caller raise UnauthorizedError themselves when it is None.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return UserId(payload.user_id)
        except JWTError as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
