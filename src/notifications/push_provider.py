"""
Push Provider Abstraction

Unified interface for multicast push delivery backends.

Supports:
- Firebase Cloud Messaging (production)
- Null provider (local runs and emulator; logs only)

A provider sends one message to many device tokens in a single call and
reports an outcome per token, in the order the tokens were given.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class PushProviderError(Exception):
    """Base error for push providers."""


class PushTransportError(PushProviderError):
    """The multicast call itself failed; no per-token outcome is available."""


@dataclass
class DeliveryHints:
    """Platform-specific delivery options."""
    android_priority: str = "high"
    channel_id: str = "task_assignment"
    icon: str = "ic_notification"
    badge: int = 1
    sound: str = "default"


@dataclass
class PushMessage:
    """Multicast push message to be sent."""
    tokens: List[str]
    title: str
    body: str
    data: Dict[str, str] = field(default_factory=dict)
    hints: DeliveryHints = field(default_factory=DeliveryHints)

    def validate(self) -> bool:
        """Validate message has required fields."""
        if not self.tokens:
            raise ValueError("At least one device token is required")
        if not self.title:
            raise ValueError("Title is required")
        non_string = [key for key, value in self.data.items() if not isinstance(value, str)]
        if non_string:
            raise ValueError(f"Data values must be strings: {', '.join(non_string)}")
        return True


@dataclass
class TokenOutcome:
    """Result of delivery to a single token."""
    token: str
    success: bool
    message_id: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None


@dataclass
class MulticastResult:
    """Result of a multicast delivery attempt."""
    outcomes: List[TokenOutcome]
    provider: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failure_count(self) -> int:
        return len(self.outcomes) - self.success_count

    @property
    def failed(self) -> List[TokenOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    @property
    def failed_tokens(self) -> List[str]:
        return [outcome.token for outcome in self.failed]


class PushProvider(ABC):
    """Abstract base class for push providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return provider name for logging."""
        pass

    @abstractmethod
    def send_multicast(self, message: PushMessage) -> MulticastResult:
        """
        Send one message to every token in it.

        Args:
            message: Push message to send

        Returns:
            MulticastResult with one outcome per token

        Raises:
            PushTransportError: If the call as a whole failed
        """
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if provider is properly configured."""
        pass


class NullPushProvider(PushProvider):
    """
    Null provider for testing/development.

    Logs pushes but doesn't send them.
    """

    @property
    def provider_name(self) -> str:
        return "null"

    def send_multicast(self, message: PushMessage) -> MulticastResult:
        """Log push without sending."""
        message.validate()
        logger.info(
            f"[NULL PROVIDER] Would send push to {len(message.tokens)} device(s): {message.title}"
        )
        stamp = datetime.now(timezone.utc).timestamp()
        return MulticastResult(
            outcomes=[
                TokenOutcome(token=token, success=True, message_id=f"null-{stamp}-{index}")
                for index, token in enumerate(message.tokens)
            ],
            provider=self.provider_name,
        )

    def is_configured(self) -> bool:
        """Always configured (it's a null provider)."""
        return True


# Global provider instance
_push_provider: Optional[PushProvider] = None


def get_push_provider() -> PushProvider:
    """
    Get the configured push provider.

    Selected by PUSH_PROVIDER: "fcm" (default) or "null".

    Returns:
        Configured PushProvider instance
    """
    global _push_provider

    if _push_provider is not None:
        return _push_provider

    from config.settings import get_settings

    push_settings = get_settings().push

    if push_settings.provider == "fcm":
        from .fcm_provider import FCMPushProvider
        _push_provider = FCMPushProvider(dry_run=push_settings.dry_run)
        logger.info(f"Push provider: FCM (dry_run={push_settings.dry_run})")
        return _push_provider

    logger.warning(
        "Null push provider selected. Pushes will be logged but not sent. "
        "Set PUSH_PROVIDER=fcm to enable delivery."
    )
    _push_provider = NullPushProvider()
    return _push_provider


def set_push_provider(provider: Optional[PushProvider]):
    """
    Set a custom push provider (for testing). None resets the selection.

    Args:
        provider: PushProvider instance to use
    """
    global _push_provider
    _push_provider = provider
    if provider is not None:
        logger.info(f"Push provider set to: {provider.provider_name}")


def delivery_hints_from_settings() -> DeliveryHints:
    """Delivery hints configured under PUSH_*."""
    from config.settings import get_settings

    push_settings = get_settings().push
    return DeliveryHints(
        android_priority=push_settings.android_priority,
        channel_id=push_settings.channel_id,
        icon=push_settings.icon,
        badge=push_settings.badge,
        sound=push_settings.sound,
    )
