"""Core utilities and shared components for pdf-catalog."""

from .config import Settings, settings
from .exceptions import CatalogError, ValidationError
from .observability import get_logger, get_tracer

__all__ = [
    "Settings",
    "settings",
    "CatalogError",
    "ValidationError",
    "get_logger",
    "get_tracer",
]
