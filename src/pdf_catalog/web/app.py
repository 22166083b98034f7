"""FastAPI application factory for the PDF catalog."""

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from pdf_catalog import __version__
from pdf_catalog.core import CatalogError, Settings, get_logger
from pdf_catalog.core import settings as default_settings
from pdf_catalog.objectstorage.clients import BucketStore, S3ClientConfig
from pdf_catalog.objectstorage.listing import CatalogLister
from pdf_catalog.web.routes import router

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None, store: Optional[BucketStore] = None
) -> FastAPI:
    """Create the catalog application.

    Args:
        settings: Application settings; the environment-derived defaults
            are used when omitted
        store: Bucket handle; built from ``settings`` when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings
    if store is None:
        store = BucketStore(
            settings.bucket_name, S3ClientConfig.from_settings(settings)
        )

    app = FastAPI(
        title="PDF Catalog",
        description="Listing, preview and delivery of PDFs stored in a bucket.",
        version=__version__,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.lister = CatalogLister(store, settings.manifest_key)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> PlainTextResponse:
        logger.info(
            "Rejected invalid request", path=request.url.path, errors=exc.errors()
        )
        return PlainTextResponse(
            f"Invalid request: {exc.errors()}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(CatalogError)
    async def catalog_exception_handler(
        request: Request, exc: CatalogError
    ) -> JSONResponse:
        logger.error(
            "Catalog request failed",
            path=request.url.path,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            headers={"Access-Control-Allow-Origin": settings.cors_allow_origin},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception", path=request.url.path, error=str(exc), exc_info=exc
        )
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    app.include_router(router)

    logger.info("Catalog app created", bucket=store.bucket)
    return app
