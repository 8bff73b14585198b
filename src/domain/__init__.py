"""Domain layer: item and assignment models, repository interfaces."""

from .models import AssignmentEvent, AssignmentKind, Item, ItemCategory
from .repositories import IDirectoryRepository, ITokenRepository

__all__ = [
    "AssignmentEvent",
    "AssignmentKind",
    "Item",
    "ItemCategory",
    "IDirectoryRepository",
    "ITokenRepository",
]
