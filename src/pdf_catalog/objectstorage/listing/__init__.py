"""Object storage listing operations."""

from .catalog import CatalogLister, clamp_limit, is_pdf_key

__all__ = ["CatalogLister", "clamp_limit", "is_pdf_key"]
