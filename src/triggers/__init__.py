"""
Firestore triggers for item assignment notifications.

Usage:
    from triggers import run_item_created, run_item_updated

    @firestore_fn.on_document_created(document="workspaces/{workspaceId}/items/{itemId}")
    def on_item_created(event):
        run_item_created(event)
"""

from .assignment_detector import detect_created_assignment, detect_reassignment
from .correlation import configure_event_logging, event_context, get_event_id
from .entrypoints import build_notifier, run_item_created, run_item_updated
from .handlers import AssignmentNotifier

__all__ = [
    "AssignmentNotifier",
    "build_notifier",
    "configure_event_logging",
    "detect_created_assignment",
    "detect_reassignment",
    "event_context",
    "get_event_id",
    "run_item_created",
    "run_item_updated",
]
