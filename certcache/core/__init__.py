"""Core: settings and shared constants."""

from certcache.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
