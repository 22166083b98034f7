"""HTTP routes for the PDF catalog.

Routes (GET routes also answer HEAD):
    OPTIONS /{path}              CORS preflight
    GET     /api/pdf-manifest    raw manifest passthrough
    GET     /og, /api/og         Open Graph preview page
    POST    /api/files-by-keys   batch metadata lookup
    GET     /api/all-files       exhaustive listing
    GET     /api/files, /files   paginated listing
    GET     /{path}              serve one object, or redirect volume PDFs
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import (
    HTMLResponse,
    JSONResponse,
    PlainTextResponse,
    RedirectResponse,
    StreamingResponse,
)

from pdf_catalog.core import Settings, get_logger
from pdf_catalog.objectstorage.clients import BucketStore, ObjectSummary
from pdf_catalog.objectstorage.listing import CatalogLister
from pdf_catalog.objectstorage.listing.catalog import DEFAULT_LIMIT
from pdf_catalog.objectstorage.lookup import lookup_files
from pdf_catalog.schemas import (
    ErrorResponse,
    FileCollection,
    FilePage,
    FilesByKeysRequest,
)
from pdf_catalog.web.dependencies import (
    cache_headers,
    get_lister,
    get_settings,
    get_store,
)
from pdf_catalog.web.preview import render_preview_html, thumbnail_key
from pdf_catalog.web.redirects import external_document_url

logger = get_logger(__name__)

router = APIRouter()

SettingsDep = Annotated[Settings, Depends(get_settings)]
StoreDep = Annotated[BucketStore, Depends(get_store)]
ListerDep = Annotated[CatalogLister, Depends(get_lister)]


@router.options("/{path:path}", include_in_schema=False)
def preflight(path: str, settings: SettingsDep) -> Response:
    headers = cache_headers(settings)
    headers["Access-Control-Allow-Methods"] = "GET, HEAD, POST, OPTIONS"
    headers["Access-Control-Allow-Headers"] = "Content-Type"
    return Response(headers=headers)


@router.api_route(
    "/api/pdf-manifest",
    methods=["GET", "HEAD"],
    responses={404: {"model": ErrorResponse}},
)
def pdf_manifest(settings: SettingsDep, store: StoreDep) -> Response:
    """Return the manifest of externally hosted PDFs as stored."""
    obj = store.get(settings.manifest_key)
    if obj is None:
        logger.warning("Manifest not found", manifest_key=settings.manifest_key)
        return JSONResponse(
            ErrorResponse(error="Manifest not found").model_dump(),
            status_code=404,
            headers=cache_headers(settings),
        )

    return Response(
        content=obj.read(),
        media_type="application/json",
        headers=cache_headers(settings),
    )


@router.api_route("/og", methods=["GET", "HEAD"], response_class=HTMLResponse)
@router.api_route("/api/og", methods=["GET", "HEAD"], response_class=HTMLResponse)
def og_preview(
    request: Request,
    settings: SettingsDep,
    file: Annotated[Optional[str], Query(description="Key of the PDF")] = None,
) -> Response:
    """Render a social media preview page for one document."""
    if not file:
        return PlainTextResponse("Missing file parameter", status_code=400)

    origin = str(request.base_url).rstrip("/")
    thumbnail_url = f"{origin}/{thumbnail_key(file)}"
    html = render_preview_html(file, thumbnail_url, settings.site_url)

    return HTMLResponse(
        html,
        headers={"Cache-Control": settings.preview_cache_control},
    )


@router.post("/api/files-by-keys", response_model=FileCollection)
def files_by_keys(
    body: FilesByKeysRequest,
    settings: SettingsDep,
    store: StoreDep,
    response: Response,
) -> FileCollection:
    """Return metadata for the requested keys that exist, sorted by key."""
    response.headers.update(cache_headers(settings))
    return lookup_files(store, body.keys)


@router.api_route(
    "/api/all-files", methods=["GET", "HEAD"], response_model=FileCollection
)
def all_files(
    settings: SettingsDep, lister: ListerDep, response: Response
) -> FileCollection:
    """Return every PDF in the bucket plus manifest-only documents."""
    response.headers.update(cache_headers(settings))
    return lister.list_all()


@router.api_route("/api/files", methods=["GET", "HEAD"], response_model=FilePage)
@router.api_route("/files", methods=["GET", "HEAD"], response_model=FilePage)
def list_files(
    settings: SettingsDep,
    lister: ListerDep,
    response: Response,
    cursor: Annotated[
        Optional[str], Query(description="Continuation token from a previous page")
    ] = None,
    limit: Annotated[
        int, Query(ge=1, description="Page size; values above 1000 are clamped")
    ] = DEFAULT_LIMIT,
    prefix: Annotated[str, Query(description="Key prefix filter")] = "",
) -> FilePage:
    """Return one page of PDFs in key order."""
    response.headers.update(cache_headers(settings))
    return lister.list_page(prefix=prefix, cursor=cursor or None, limit=limit)


def _object_headers(
    settings: Settings, path: str, obj: ObjectSummary
) -> dict[str, str]:
    headers = cache_headers(settings)
    headers["Content-Type"] = obj.content_type or "application/pdf"
    headers["Content-Length"] = str(obj.size)
    headers["Content-Disposition"] = f'inline; filename="{path.split("/")[-1]}"'
    return headers


def _missing_object(settings: Settings, path: str) -> Response:
    redirect_url = external_document_url(path, settings.external_documents_url)
    if redirect_url:
        logger.info("Redirecting to external document", path=path, url=redirect_url)
        return RedirectResponse(redirect_url, status_code=302)

    return PlainTextResponse(
        "Not Found", status_code=404, headers=cache_headers(settings)
    )


@router.head("/{path:path}", include_in_schema=False)
def head_object(path: str, settings: SettingsDep, store: StoreDep) -> Response:
    summary = store.head(path) if path else None
    if summary is None:
        return _missing_object(settings, path)
    return Response(headers=_object_headers(settings, path, summary))


@router.get("/{path:path}", include_in_schema=False)
def serve_object(path: str, settings: SettingsDep, store: StoreDep) -> Response:
    """Stream one object from the bucket."""
    obj = store.get(path)
    if obj is None:
        return _missing_object(settings, path)

    headers = _object_headers(settings, path, obj.summary)
    return StreamingResponse(
        obj.iter_chunks(),
        media_type=headers.pop("Content-Type"),
        headers=headers,
    )
