"""Async Firestore client factory.

Each trigger invocation runs its own event loop (asyncio.run), and an
AsyncClient's gRPC channel belongs to the loop it was first used on, so a
client is created per invocation instead of being cached globally.
The Firebase app (credentials, project id) is initialized once in main.py.
"""

from __future__ import annotations

import logging
from typing import Optional

import firebase_admin
from google.cloud.firestore import AsyncClient

logger = logging.getLogger(__name__)


def create_async_client(app: Optional[firebase_admin.App] = None) -> AsyncClient:
    """
    Create an async Firestore client bound to a Firebase app.

    Honors FIRESTORE_EMULATOR_HOST like every google-cloud-firestore client.

    Args:
        app: Firebase app. Defaults to the default app.

    Returns:
        AsyncClient: Client for the app's project.
    """
    app = app or firebase_admin.get_app()
    logger.debug(f"Creating Firestore AsyncClient for project {app.project_id}")
    return AsyncClient(
        project=app.project_id,
        credentials=app.credential.get_credential(),
    )
