"""
Authentication provider interface.

Authentication itself is handled by an external service; the application
only needs to turn a bearer token into a user.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    """Authenticated user."""

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class IAuthProvider(ABC):
    """Interface for authentication providers."""

    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """Verify a token and return the user it belongs to."""
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """Check if authentication is enabled."""
        pass
