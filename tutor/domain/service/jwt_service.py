"""JWT token domain service."""

from uuid import UUID

import logfire

from tutor.config import AuthSettings
from tutor.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Verifies the platform's session tokens to identify the acting user."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, username: str) -> str:
        """Create a JWT token for a user.

        Tokens are normally issued by the platform's login flow; this is
        used by tooling and tests.
        """
        return create_token(user_id, username, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            payload = verify_token(token, self.auth_settings)
            logfire.debug("JWT token verified", user_id=payload.user_id)
            return payload

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Extract the user ID from a token without raising.

        Returns:
            User ID if the token is valid and its subject is a UUID,
            None otherwise
        """
        if not token:
            return None

        try:
            user_id = self.verify_token(token).user_id
        except Exception as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None

        try:
            UUID(user_id)
        except ValueError:
            logfire.debug("JWT subject is not a user ID", user_id=user_id)
            return None
        return user_id
