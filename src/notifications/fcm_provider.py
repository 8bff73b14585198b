"""
Firebase Cloud Messaging Provider

Production push delivery through the Firebase Admin SDK.

Configuration:
    Uses the default Firebase app (initialized in main.py).
    PUSH_DRY_RUN: validate messages without delivering them (optional)
"""

import logging
from typing import Optional

from firebase_admin import exceptions as firebase_exceptions
from firebase_admin import messaging

from .push_provider import (
    MulticastResult,
    PushMessage,
    PushProvider,
    PushTransportError,
    TokenOutcome,
)

logger = logging.getLogger(__name__)


class FCMPushProvider(PushProvider):
    """
    FCM multicast provider.

    One send_each_for_multicast call per message; FCM answers with one
    SendResponse per token, in token order.
    """

    def __init__(self, app=None, dry_run: bool = False):
        """
        Initialize FCM provider.

        Args:
            app: Firebase app to use (default app when None)
            dry_run: Ask FCM to validate without delivering
        """
        self._app = app
        self.dry_run = dry_run

    @property
    def provider_name(self) -> str:
        return "fcm"

    def is_configured(self) -> bool:
        """Check that a Firebase app is available."""
        if self._app is not None:
            return True
        try:
            import firebase_admin
            firebase_admin.get_app()
            return True
        except ValueError:
            return False

    def build_message(self, message: PushMessage) -> messaging.MulticastMessage:
        """Translate a PushMessage into the SDK's multicast message."""
        hints = message.hints
        return messaging.MulticastMessage(
            tokens=list(message.tokens),
            notification=messaging.Notification(
                title=message.title,
                body=message.body,
            ),
            data=dict(message.data),
            android=messaging.AndroidConfig(
                priority=hints.android_priority,
                notification=messaging.AndroidNotification(
                    channel_id=hints.channel_id,
                    icon=hints.icon,
                ),
            ),
            apns=messaging.APNSConfig(
                payload=messaging.APNSPayload(
                    aps=messaging.Aps(
                        badge=hints.badge,
                        sound=hints.sound,
                    ),
                ),
            ),
        )

    def send_multicast(self, message: PushMessage) -> MulticastResult:
        """
        Send via FCM.

        Args:
            message: Push message to send

        Returns:
            MulticastResult with one outcome per token

        Raises:
            PushTransportError: If the multicast call failed as a whole
        """
        message.validate()
        sdk_message = self.build_message(message)

        try:
            response = messaging.send_each_for_multicast(
                sdk_message,
                dry_run=self.dry_run,
                app=self._app,
            )
        except (firebase_exceptions.FirebaseError, ValueError) as e:
            raise PushTransportError(f"FCM multicast failed: {e}") from e

        outcomes = []
        for token, send_response in zip(message.tokens, response.responses):
            if send_response.success:
                outcomes.append(TokenOutcome(
                    token=token,
                    success=True,
                    message_id=send_response.message_id,
                ))
            else:
                error = send_response.exception
                outcomes.append(TokenOutcome(
                    token=token,
                    success=False,
                    error_code=_error_code(error),
                    error_message=str(error) if error is not None else None,
                ))

        return MulticastResult(outcomes=outcomes, provider=self.provider_name)


def _error_code(error: Optional[Exception]) -> Optional[str]:
    if error is None:
        return None
    return getattr(error, "code", None) or type(error).__name__
