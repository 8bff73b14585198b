"""
Cloud Functions for item assignment push notifications.

Triggers:
- on_item_created: push to the assignee when an item is created already assigned
- on_item_updated: push to the new assignee when an item is reassigned
"""
from dotenv import load_dotenv
from firebase_admin import initialize_app
from firebase_functions import firestore_fn, options

from config.settings import get_settings
from triggers.correlation import configure_event_logging
from triggers.entrypoints import run_item_created, run_item_updated

# Load environment variables (local runs and the emulator)
load_dotenv()

settings = get_settings()
configure_event_logging(level=settings.log_level, json_output=settings.log_json)

initialize_app()

# Global options for cost control
options.set_global_options(
    max_instances=settings.functions.max_instances,
    region=settings.functions.region,
)

ITEM_DOCUMENT = settings.functions.item_document_path


@firestore_fn.on_document_created(document=ITEM_DOCUMENT)
def on_item_created(event: firestore_fn.Event[firestore_fn.DocumentSnapshot | None]) -> None:
    """Item created with an assignee."""
    run_item_created(event)


@firestore_fn.on_document_updated(document=ITEM_DOCUMENT)
def on_item_updated(
    event: firestore_fn.Event[firestore_fn.Change[firestore_fn.DocumentSnapshot | None]],
) -> None:
    """Item updated; the assignee may have changed."""
    run_item_updated(event)
