"""
Assignment-change detection.

Pure functions deciding whether an item event should notify someone.
Nothing is remembered between events: the same input always gives the
same answer, so a redelivered event notifies again.
"""

import logging
from typing import Optional

from domain.models import AssignmentEvent, AssignmentKind, Item

logger = logging.getLogger(__name__)


def detect_created_assignment(
    workspace_id: str,
    item_id: str,
    item: Optional[Item],
) -> Optional[AssignmentEvent]:
    """
    Assignment carried by a newly created item.

    Skipped when there is no item data, no assignee, or the creator
    assigned the item to themselves.
    """
    if item is None:
        return None

    if not item.assignee_id:
        return None

    if item.created_by == item.assignee_id:
        logger.debug(f"Item {item_id} created self-assigned; no notification")
        return None

    return AssignmentEvent(
        item_id=item_id,
        workspace_id=workspace_id,
        new_assignee=item.assignee_id,
        kind=AssignmentKind.CREATED,
        acting_user_id=item.created_by,
        item_title=item.title,
        item_type=item.type,
    )


def detect_reassignment(
    workspace_id: str,
    item_id: str,
    before: Optional[Item],
    after: Optional[Item],
) -> Optional[AssignmentEvent]:
    """
    Assignment change between two snapshots of the same item.

    Skipped when either snapshot is missing, the assignee did not change,
    the assignee was cleared, or the acting user (updatedBy, else createdBy)
    is the new assignee.
    """
    if before is None or after is None:
        return None

    previous_assignee = before.assignee_id
    new_assignee = after.assignee_id

    if previous_assignee == new_assignee or not new_assignee:
        return None

    acting_user_id = after.acting_user_id
    if acting_user_id == new_assignee:
        logger.debug(f"Item {item_id} reassigned to the acting user; no notification")
        return None

    return AssignmentEvent(
        item_id=item_id,
        workspace_id=workspace_id,
        new_assignee=new_assignee,
        kind=AssignmentKind.REASSIGNED,
        acting_user_id=acting_user_id,
        previous_assignee=previous_assignee,
        item_title=after.title,
        item_type=after.type,
    )
