"""
Push Notification Delivery

Assignment push notifications over Firebase Cloud Messaging.

Provides:
- Multicast push provider interface (FCM, null)
- Assignment notice composition (localized text, category glyphs)
- Dispatcher with invalid-token cleanup

Usage:
    from notifications import NotificationDispatcher, get_push_provider

    dispatcher = NotificationDispatcher(token_repository, get_push_provider())
    result = await dispatcher.notify_user(
        user_id,
        title="🎯 Sana iş atandı!",
        body='Ayşe sana "Release notes" atadı',
        data={"type": "item_assigned", "workspaceId": "ws1", "itemId": "it1", "workspaceName": "Mobile"},
    )
"""

from .push_provider import (
    DeliveryHints,
    MulticastResult,
    NullPushProvider,
    PushMessage,
    PushProvider,
    PushProviderError,
    PushTransportError,
    TokenOutcome,
    get_push_provider,
    set_push_provider,
)

from .composer import (
    AssignmentNotice,
    build_assignment_data,
    category_symbol,
    compose_assignment_notice,
)

from .dispatcher import DispatchResult, NotificationDispatcher

__all__ = [
    # Core interfaces
    "PushProvider",
    "PushMessage",
    "DeliveryHints",
    "MulticastResult",
    "TokenOutcome",
    "PushProviderError",
    "PushTransportError",
    "get_push_provider",
    "set_push_provider",
    # Providers
    "NullPushProvider",
    # Composition
    "AssignmentNotice",
    "build_assignment_data",
    "category_symbol",
    "compose_assignment_notice",
    # Dispatch
    "DispatchResult",
    "NotificationDispatcher",
]
