"""Configuration module for the assignment notifier."""

from .settings import FunctionSettings, PushSettings, Settings, get_settings

__all__ = [
    "FunctionSettings",
    "PushSettings",
    "Settings",
    "get_settings",
]
