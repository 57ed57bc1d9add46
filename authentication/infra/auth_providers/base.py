"""
Abstract base class for identity resolvers.

Defines the contract the API layer consumes to turn a bearer credential into
a user id, adhering to the Dependency Inversion Principle.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IdentityResolver(ABC):
    """Interface for bearer-credential identity providers."""

    @abstractmethod
    def resolve(self, credential: str) -> Optional[str]:
        """
        Resolve an opaque bearer credential.

        Args:
            credential: The raw token string from the Authorization header.

        Returns:
            The stable user id the credential belongs to, or None when the
            credential is invalid or expired.
        """
        pass
