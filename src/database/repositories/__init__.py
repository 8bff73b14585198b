"""Firestore repository implementations."""

from .directory_repository import DirectoryRepository
from .token_repository import TokenRepository

__all__ = [
    "DirectoryRepository",
    "TokenRepository",
]
