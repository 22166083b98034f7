"""FastAPI dependencies resolving per-app handles from ``app.state``."""

from fastapi import Request

from pdf_catalog.core import Settings
from pdf_catalog.objectstorage.clients import BucketStore
from pdf_catalog.objectstorage.listing import CatalogLister


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> BucketStore:
    return request.app.state.store


def get_lister(request: Request) -> CatalogLister:
    return request.app.state.lister


def cache_headers(settings: Settings) -> dict[str, str]:
    """CORS and caching headers sent with every catalog response."""
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Cache-Control": settings.cache_control,
    }
