"""Firestore Token Repository.

Device tokens live under users/{userId}/tokens/{token}; the document id is
the token itself and the document body is not read.
"""

from __future__ import annotations

import logging
from typing import Set

from google.cloud.firestore import AsyncClient

from domain.repositories import ITokenRepository

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
TOKENS_COLLECTION = "tokens"


class TokenRepository(ITokenRepository):
    """Async implementation of ITokenRepository on Firestore."""

    def __init__(self, client: AsyncClient):
        """
        Initialize repository with a client.

        Args:
            client: Firestore async client.
        """
        self._client = client

    def _tokens(self, user_id: str):
        return (
            self._client.collection(USERS_COLLECTION)
            .document(user_id)
            .collection(TOKENS_COLLECTION)
        )

    async def list_tokens(self, user_id: str) -> Set[str]:
        """
        List token strings registered for a user.

        Args:
            user_id: Token owner.

        Returns:
            Set of tokens, empty if none are registered.
        """
        tokens = set()
        async for snapshot in self._tokens(user_id).stream():
            tokens.add(snapshot.id)
        return tokens

    async def delete_token(self, user_id: str, token: str) -> bool:
        """
        Delete a token document.

        Firestore deletes of missing documents succeed, so this is idempotent.

        Args:
            user_id: Token owner.
            token: Token string.

        Returns:
            True when the delete went through.
        """
        await self._tokens(user_id).document(token).delete()
        logger.debug(f"Token document removed for user {user_id}")
        return True
