"""Firestore Directory Repository.

Resolves display names for users (users/{userId}.displayName) and
workspaces (workspaces/{workspaceId}.name). Lookups never raise: missing
records, unset fields and read errors all map to fallback literals.
"""

from __future__ import annotations

import logging
from typing import Optional

from google.cloud.firestore import AsyncClient

from domain.repositories import IDirectoryRepository
from notifications.composer import get_catalog

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
WORKSPACES_COLLECTION = "workspaces"


class DirectoryRepository(IDirectoryRepository):
    """Async implementation of IDirectoryRepository on Firestore."""

    def __init__(
        self,
        client: AsyncClient,
        unknown_user: Optional[str] = None,
        unknown_workspace: Optional[str] = None,
        locale: Optional[str] = None,
    ):
        """
        Initialize repository.

        Args:
            client: Firestore async client.
            unknown_user: Fallback user name (defaults to the locale's).
            unknown_workspace: Fallback workspace name (defaults to the locale's).
            locale: Catalog used for the default fallbacks.
        """
        catalog = get_catalog(locale)
        self._client = client
        self.unknown_user = unknown_user or catalog.unknown_user
        self.unknown_workspace = unknown_workspace or catalog.unknown_workspace

    async def resolve_user_name(self, user_id: Optional[str]) -> str:
        """Display name of a user, or the unknown-user fallback."""
        return await self._read_name(USERS_COLLECTION, user_id, "displayName", self.unknown_user)

    async def resolve_workspace_name(self, workspace_id: Optional[str]) -> str:
        """Name of a workspace, or the workspace fallback."""
        return await self._read_name(WORKSPACES_COLLECTION, workspace_id, "name", self.unknown_workspace)

    async def _read_name(
        self,
        collection: str,
        document_id: Optional[str],
        field_name: str,
        fallback: str,
    ) -> str:
        if not document_id:
            return fallback

        try:
            snapshot = await self._client.collection(collection).document(document_id).get()
        except Exception as e:
            logger.warning(f"Failed to read {collection}/{document_id}: {e}")
            return fallback

        if not snapshot.exists:
            return fallback

        value = (snapshot.to_dict() or {}).get(field_name)
        if value is None:
            return fallback
        return str(value)
