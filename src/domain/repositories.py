"""
Repository interfaces for the assignment notifier.

Repository interfaces define the contract for data access. Firestore
implementations live in database.repositories; tests use in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Optional, Set


class ITokenRepository(ABC):
    """Device tokens registered under a user."""

    @abstractmethod
    async def list_tokens(self, user_id: str) -> Set[str]:
        """
        List the push tokens of a user.

        Args:
            user_id: Owner of the tokens

        Returns:
            Token strings; empty when the user has none
        """
        pass

    @abstractmethod
    async def delete_token(self, user_id: str, token: str) -> bool:
        """
        Delete one token of a user.

        Deleting a token that is already gone is not an error.

        Args:
            user_id: Owner of the token
            token: Token string (also the record key)

        Returns:
            True once the token is absent from the store
        """
        pass


class IDirectoryRepository(ABC):
    """Display names for users and workspaces."""

    @abstractmethod
    async def resolve_user_name(self, user_id: Optional[str]) -> str:
        """Display name of a user, or a fallback literal. Never raises."""
        pass

    @abstractmethod
    async def resolve_workspace_name(self, workspace_id: Optional[str]) -> str:
        """Name of a workspace, or a fallback literal. Never raises."""
        pass
