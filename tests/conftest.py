"""Pytest configuration and fixtures for test suite."""

import os
from typing import Dict, List, Optional, Set

import pytest

# Set test environment BEFORE any other imports
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("PUSH_PROVIDER", "null")

from domain.repositories import IDirectoryRepository, ITokenRepository
from notifications.push_provider import (
    MulticastResult,
    PushMessage,
    PushProvider,
    TokenOutcome,
)


# =============================================================================
# IN-MEMORY FAKES
# =============================================================================

class FakeTokenRepository(ITokenRepository):
    """In-memory token store recording every call."""

    def __init__(self, tokens: Optional[Dict[str, Set[str]]] = None, failing_deletes=()):
        self.tokens = {user: set(values) for user, values in (tokens or {}).items()}
        self.failing_deletes = set(failing_deletes)
        self.list_calls: List[str] = []
        self.delete_calls: List[tuple] = []

    async def list_tokens(self, user_id: str) -> Set[str]:
        self.list_calls.append(user_id)
        return set(self.tokens.get(user_id, set()))

    async def delete_token(self, user_id: str, token: str) -> bool:
        self.delete_calls.append((user_id, token))
        if token in self.failing_deletes:
            raise RuntimeError(f"store unavailable while deleting {token}")
        self.tokens.get(user_id, set()).discard(token)
        return True


class FakeDirectory(IDirectoryRepository):
    """Directory with fixed names and the Turkish fallbacks."""

    def __init__(self, users=None, workspaces=None):
        self.users = dict(users or {})
        self.workspaces = dict(workspaces or {})
        self.user_lookups: List[Optional[str]] = []
        self.workspace_lookups: List[Optional[str]] = []

    async def resolve_user_name(self, user_id: Optional[str]) -> str:
        self.user_lookups.append(user_id)
        return self.users.get(user_id, "Bilinmeyen")

    async def resolve_workspace_name(self, workspace_id: Optional[str]) -> str:
        self.workspace_lookups.append(workspace_id)
        return self.workspaces.get(workspace_id, "Workspace")


class RecordingPushProvider(PushProvider):
    """Push provider that records messages and fails the given tokens."""

    def __init__(self, failing_tokens=(), error: Optional[Exception] = None):
        self.failing_tokens = set(failing_tokens)
        self.error = error
        self.sent: List[PushMessage] = []

    @property
    def provider_name(self) -> str:
        return "recording"

    def send_multicast(self, message: PushMessage) -> MulticastResult:
        self.sent.append(message)
        if self.error is not None:
            raise self.error
        return MulticastResult(
            outcomes=[
                TokenOutcome(
                    token=token,
                    success=token not in self.failing_tokens,
                    message_id=None if token in self.failing_tokens else f"msg-{token}",
                    error_code="messaging/registration-token-not-registered"
                    if token in self.failing_tokens else None,
                )
                for token in message.tokens
            ],
            provider=self.provider_name,
        )

    def is_configured(self) -> bool:
        return True


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def token_repository():
    """Token store with three devices for user-b and none for user-c."""
    return FakeTokenRepository({"user-b": {"T1", "T2", "T3"}})


@pytest.fixture
def directory():
    """Directory knowing two users and one workspace."""
    return FakeDirectory(
        users={"user-a": "Ayşe", "user-c": "Can"},
        workspaces={"ws-1": "Mobil Ekip"},
    )


@pytest.fixture
def push_provider():
    """Provider where every send succeeds."""
    return RecordingPushProvider()


@pytest.fixture
def make_token_repository():
    """Factory for token stores with custom contents."""
    return FakeTokenRepository


@pytest.fixture
def make_push_provider():
    """Factory for recording providers with failing tokens or errors."""
    return RecordingPushProvider
