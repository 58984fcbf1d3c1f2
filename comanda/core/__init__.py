"""
Core module initialization.
Exports configuration and domain errors.
"""

from comanda.core.config import get_settings, Settings, EnvironmentMode, StorageBackend
from comanda.core.exceptions import ComandaError, ValidationError, NotFoundError

__all__ = [
    "get_settings",
    "Settings",
    "EnvironmentMode",
    "StorageBackend",
    "ComandaError",
    "ValidationError",
    "NotFoundError",
]
