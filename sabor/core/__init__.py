"""
Core module initialization.
Exports configuration and logging utilities.
"""

from sabor.core.config import get_settings, Settings, EnvironmentMode, StorageBackend

__all__ = ["get_settings", "Settings", "EnvironmentMode", "StorageBackend"]
