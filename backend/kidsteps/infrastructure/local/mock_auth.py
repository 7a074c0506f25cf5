"""
Mock authentication provider for local development.
"""

from kidsteps.core.exceptions import AuthenticationError
from kidsteps.interfaces.auth_provider import IAuthProvider, User


class MockAuthProvider(IAuthProvider):
    """Mock auth provider: the bearer token is the user ID."""

    def __init__(self, enabled: bool = False):
        """
        Initialize mock auth provider.

        Args:
            enabled: Whether authentication is required
        """
        self._enabled = enabled

    async def verify_token(self, token: str) -> User:
        """
        Verify token - in mock mode, token is treated as user_id.

        Args:
            token: User ID (in mock mode)

        Returns:
            Mock user
        """
        token = token.strip()
        if not token:
            raise AuthenticationError("Empty token")
        if "@" in token:
            return User(id=token, email=token, display_name=token)
        return User(id=token, email=f"{token}@example.com", display_name=token)

    def is_enabled(self) -> bool:
        """Check if authentication is enabled."""
        return self._enabled
