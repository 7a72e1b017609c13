"""Settings management.

This package provides:
- UserSettings: credentials and transport options loaded from config.yaml or the environment
"""

from .user import UserSettings

__all__ = ["UserSettings"]
