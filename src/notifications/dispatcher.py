"""
Notification Dispatcher

Sends one multicast push to every device of a user and prunes the tokens
the backend rejected.

Delivery is best-effort: notify_user never raises. What happened is
returned as a DispatchResult and written to the log.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from domain.repositories import ITokenRepository

from .push_provider import (
    DeliveryHints,
    MulticastResult,
    PushMessage,
    PushProvider,
)

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Outcome of notifying one user."""
    user_id: str
    token_count: int = 0
    success_count: int = 0
    failed_tokens: List[str] = field(default_factory=list)
    deleted_tokens: List[str] = field(default_factory=list)
    deletion_errors: Dict[str, str] = field(default_factory=dict)
    transport_error: Optional[str] = None

    @property
    def skipped(self) -> bool:
        """No send was attempted (no tokens, or they could not be listed)."""
        return self.token_count == 0

    @property
    def delivered(self) -> bool:
        return self.success_count > 0


class NotificationDispatcher:
    """
    Multicast sender with invalid-token cleanup.

    Failed tokens are deleted one at a time after the whole response has
    been read; a failing deletion does not stop the others.
    """

    def __init__(
        self,
        tokens: ITokenRepository,
        provider: PushProvider,
        hints: Optional[DeliveryHints] = None,
    ):
        self._tokens = tokens
        self._provider = provider
        self._hints = hints or DeliveryHints()

    async def notify_user(
        self,
        user_id: str,
        title: str,
        body: str,
        data: Dict[str, str],
    ) -> DispatchResult:
        """
        Push a notification to all devices of a user.

        Args:
            user_id: Recipient
            title: Notification title
            body: Notification body
            data: String-valued data payload

        Returns:
            DispatchResult
        """
        result = DispatchResult(user_id=user_id)

        try:
            tokens = sorted(await self._tokens.list_tokens(user_id))
        except Exception as e:
            logger.error(f"Could not list tokens for user {user_id}: {e}", exc_info=True)
            result.transport_error = str(e)
            return result

        if not tokens:
            logger.info(f"No tokens found for user {user_id}")
            return result

        result.token_count = len(tokens)
        message = PushMessage(
            tokens=tokens,
            title=title,
            body=body,
            data=data,
            hints=self._hints,
        )

        try:
            response = await asyncio.to_thread(self._provider.send_multicast, message)
        except Exception as e:
            logger.error(f"Error sending notification to user {user_id}: {e}", exc_info=True)
            result.transport_error = str(e)
            return result

        result.success_count = response.success_count
        logger.info(
            f"Sent {response.success_count}/{len(tokens)} notifications to user {user_id}"
        )

        result.failed_tokens = self._collect_failed(response)
        await self._prune_tokens(user_id, result)
        return result

    def _collect_failed(self, response: MulticastResult) -> List[str]:
        failed = []
        for outcome in response.failed:
            failed.append(outcome.token)
            logger.warning(
                f"Token failed: {outcome.token} "
                f"({outcome.error_code or 'unknown'}: {outcome.error_message or '-'})"
            )
        return failed

    async def _prune_tokens(self, user_id: str, result: DispatchResult) -> None:
        for token in result.failed_tokens:
            try:
                await self._tokens.delete_token(user_id, token)
            except Exception as e:
                logger.error(
                    f"Failed to delete invalid token for user {user_id}: {e}",
                    exc_info=True,
                )
                result.deletion_errors[token] = str(e)
                continue
            result.deleted_tokens.append(token)
            logger.info(f"Deleted invalid token for user {user_id}")
