"""HTTP facade for the PDF catalog."""

from .app import create_app

__all__ = ["create_app"]
