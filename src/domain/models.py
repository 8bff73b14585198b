"""
Domain models for item assignment notifications.

Item is read from a Firestore snapshot dict; identifiers of the item and its
workspace come from the document path, never from the body.
AssignmentEvent is derived per trigger invocation and never stored.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ItemCategory(str, Enum):
    """Item types known to the clients."""
    ACTIVE_TASK = "activeTask"
    BUG = "bug"
    LOGIC = "logic"
    IDEA = "idea"


class AssignmentKind(str, Enum):
    """How the assignee came to be set."""
    CREATED = "created"
    REASSIGNED = "reassigned"


class Item(BaseModel):
    """
    Fields of an item document consumed by the notifier.

    Field names follow the stored camelCase keys; anything else in the
    document is ignored.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    title: Optional[str] = Field(default=None)
    type: str = Field(default=ItemCategory.ACTIVE_TASK.value)
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    assignee_id: Optional[str] = Field(default=None, alias="assigneeId")
    updated_by: Optional[str] = Field(default=None, alias="updatedBy")

    @classmethod
    def from_snapshot(cls, data: Optional[Dict[str, Any]]) -> Optional["Item"]:
        """Build an Item from snapshot data, or None when there is no data."""
        if data is None:
            return None
        # Stored nulls mean "unset"
        cleaned = {key: value for key, value in data.items() if value is not None}
        return cls.model_validate(cleaned)

    @property
    def acting_user_id(self) -> Optional[str]:
        """Last modifier, falling back to the creator."""
        return self.updated_by if self.updated_by is not None else self.created_by


@dataclass(frozen=True)
class AssignmentEvent:
    """An assignment that warrants notifying the new assignee."""
    item_id: str
    workspace_id: str
    new_assignee: str
    kind: AssignmentKind
    acting_user_id: Optional[str] = None
    previous_assignee: Optional[str] = None
    item_title: Optional[str] = None
    item_type: str = ItemCategory.ACTIVE_TASK.value
