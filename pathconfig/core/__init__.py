"""Core: settings, constants, session context, and application bootstrap.

Single place for settings and shared constants.
"""

from pathconfig.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
