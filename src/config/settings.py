"""Application settings using Pydantic Settings.

Centralized configuration for the assignment notifier functions.

Deployment knobs (region, instance cap) live in FunctionSettings and are
applied through firebase_functions global options at import time of main.py.
Push delivery hints are part of the client contract; change them only
together with the mobile clients.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class FunctionSettings(BaseSettings):
    """Cloud Functions deployment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FUNCTIONS_",
        extra="ignore",
    )

    region: str = Field(default="us-central1", description="Deployment region")
    max_instances: int = Field(
        default=10,
        ge=1,
        description="Cap on simultaneously running instances (cost control)",
    )
    item_document_path: str = Field(
        default="workspaces/{workspaceId}/items/{itemId}",
        description="Firestore document pattern the item triggers listen on",
    )


class PushSettings(BaseSettings):
    """Push delivery configuration (FCM)."""

    model_config = SettingsConfigDict(
        env_prefix="PUSH_",
        extra="ignore",
    )

    provider: Literal["fcm", "null"] = Field(
        default="fcm",
        description="Push backend: fcm for Firebase Cloud Messaging, null to log only",
    )
    dry_run: bool = Field(
        default=False,
        description="Validate messages with FCM without delivering them",
    )

    # Delivery hints
    android_priority: Literal["high", "normal"] = Field(default="high")
    channel_id: str = Field(default="task_assignment", description="Android notification channel")
    icon: str = Field(default="ic_notification", description="Android notification icon")
    badge: int = Field(default=1, ge=0, description="APNs badge count")
    sound: str = Field(default="default", description="APNs sound")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    name: str = Field(default="Assignment Notifier", description="Application name")
    environment: str = Field(default="development", description="Environment name")

    locale: Literal["tr", "en"] = Field(
        default="tr",
        description="Language of notification text and fallback names",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(
        default=True,
        description="One JSON object per line with a severity field (Cloud Logging)",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    # Nested settings (loaded separately)
    @property
    def functions(self) -> FunctionSettings:
        return FunctionSettings()

    @property
    def push(self) -> PushSettings:
        return PushSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Returns:
        Settings: Cached settings loaded from environment.
    """
    return Settings()
