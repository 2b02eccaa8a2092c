"""Core app configuration and settings access."""

from userdir.core.config import get_settings, settings

__all__ = ["get_settings", "settings"]
