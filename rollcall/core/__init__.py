"""Core app configuration, security helpers and error taxonomy."""

from rollcall.core.config import get_settings, settings

__all__ = ["get_settings", "settings"]
