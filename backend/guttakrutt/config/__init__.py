"""
Configuration Module

Application configuration loaded from environment variables.

Usage:
======
    from guttakrutt.config.settings import settings

    dialect_name = settings.DB_TYPE
    is_dev = settings.is_development
"""

from guttakrutt.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]
