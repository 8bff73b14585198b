"""
Cloud Functions entry points.

Adapts firestore_fn CloudEvents to AssignmentNotifier calls: reads the path
parameters, turns snapshots into dicts, binds the event id for logging and
runs the async handler on a fresh event loop.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from config.settings import Settings, get_settings
from database.firestore_client import create_async_client
from database.repositories.directory_repository import DirectoryRepository
from database.repositories.token_repository import TokenRepository
from notifications.dispatcher import DispatchResult, NotificationDispatcher
from notifications.push_provider import delivery_hints_from_settings, get_push_provider

from .correlation import event_context
from .handlers import AssignmentNotifier

logger = logging.getLogger(__name__)

NotifierFactory = Callable[[], AssignmentNotifier]


def build_notifier(settings: Optional[Settings] = None) -> AssignmentNotifier:
    """
    Wire an AssignmentNotifier against Firestore and the configured push provider.

    Must be called inside the event loop that will use it.
    """
    settings = settings or get_settings()
    client = create_async_client()
    dispatcher = NotificationDispatcher(
        TokenRepository(client),
        get_push_provider(),
        delivery_hints_from_settings(),
    )
    return AssignmentNotifier(
        DirectoryRepository(client, locale=settings.locale),
        dispatcher,
        locale=settings.locale,
    )


def snapshot_to_dict(snapshot: Any) -> Optional[Dict[str, Any]]:
    """Document data of a snapshot, or None for a missing one."""
    if snapshot is None:
        return None
    return snapshot.to_dict()


def run_item_created(
    event: Any,
    notifier_factory: NotifierFactory = build_notifier,
) -> Optional[DispatchResult]:
    """Handle an on_document_created event for an item."""
    workspace_id = event.params["workspaceId"]
    item_id = event.params["itemId"]

    async def _handle():
        notifier = notifier_factory()
        return await notifier.handle_item_created(
            workspace_id,
            item_id,
            snapshot_to_dict(event.data),
        )

    with event_context(getattr(event, "id", None)):
        return asyncio.run(_handle())


def run_item_updated(
    event: Any,
    notifier_factory: NotifierFactory = build_notifier,
) -> Optional[DispatchResult]:
    """Handle an on_document_updated event for an item."""
    workspace_id = event.params["workspaceId"]
    item_id = event.params["itemId"]
    change = event.data

    before = snapshot_to_dict(change.before) if change is not None else None
    after = snapshot_to_dict(change.after) if change is not None else None

    async def _handle():
        notifier = notifier_factory()
        return await notifier.handle_item_updated(workspace_id, item_id, before, after)

    with event_context(getattr(event, "id", None)):
        return asyncio.run(_handle())
