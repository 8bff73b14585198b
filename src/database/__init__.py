"""
Firestore access layer.

This module provides:
- Async Firestore client creation per invocation
- Token and directory repositories
"""

from .firestore_client import create_async_client

__all__ = ["create_async_client"]
