"""Application configuration module.

- **settings.py**: Environment-based settings (Pydantic BaseSettings)
  - Database URL, logging format, reminder lead time, calendar week start
  - Loaded from .env file via pydantic-settings, prefixed with ``FITCOACH_``
"""
from fitcoach.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
