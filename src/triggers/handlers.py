"""
Item Assignment Handlers

Entry logic for the two item triggers:
- item created with an assignee
- item updated with a new assignee

Handlers take plain snapshot dicts, so they run the same under the
Functions runtime, the emulator and tests.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from domain.models import AssignmentEvent, Item
from domain.repositories import IDirectoryRepository
from notifications.composer import (
    build_assignment_data,
    compose_assignment_notice,
    default_item_title,
)
from notifications.dispatcher import DispatchResult, NotificationDispatcher

from .assignment_detector import detect_created_assignment, detect_reassignment

logger = logging.getLogger(__name__)

SnapshotData = Optional[Dict[str, Any]]


class AssignmentNotifier:
    """
    Notifies the new assignee of an item.

    Stateless between events; all durable state is in Firestore.
    """

    def __init__(
        self,
        directory: IDirectoryRepository,
        dispatcher: NotificationDispatcher,
        locale: Optional[str] = None,
    ):
        self._directory = directory
        self._dispatcher = dispatcher
        self._locale = locale

    async def handle_item_created(
        self,
        workspace_id: str,
        item_id: str,
        data: SnapshotData,
    ) -> Optional[DispatchResult]:
        """Notify the assignee of a newly created item, if warranted."""
        event = detect_created_assignment(workspace_id, item_id, Item.from_snapshot(data))
        if event is None:
            return None

        result = await self._notify(event)
        logger.info(f"Notification sent for new item assignment: {item_id}")
        return result

    async def handle_item_updated(
        self,
        workspace_id: str,
        item_id: str,
        before: SnapshotData,
        after: SnapshotData,
    ) -> Optional[DispatchResult]:
        """Notify the new assignee of a reassigned item, if warranted."""
        event = detect_reassignment(
            workspace_id,
            item_id,
            Item.from_snapshot(before),
            Item.from_snapshot(after),
        )
        if event is None:
            return None

        result = await self._notify(event)
        logger.info(f"Notification sent for item reassignment: {item_id}")
        return result

    async def _notify(self, event: AssignmentEvent) -> DispatchResult:
        assigner_name, workspace_name = await asyncio.gather(
            self._directory.resolve_user_name(event.acting_user_id),
            self._directory.resolve_workspace_name(event.workspace_id),
        )

        item_title = event.item_title
        if item_title is None:
            item_title = default_item_title(event.kind, self._locale)

        notice = compose_assignment_notice(
            assigner_name,
            item_title,
            event.item_type,
            locale=self._locale,
        )

        return await self._dispatcher.notify_user(
            event.new_assignee,
            notice.title,
            notice.body,
            build_assignment_data(event, workspace_name),
        )
