"""Paginated and exhaustive PDF listings over a bucket."""

from datetime import datetime, timezone
from typing import Optional

from pdf_catalog.core import get_logger, get_tracer
from pdf_catalog.core.exceptions import CatalogError, StoreOperationError
from pdf_catalog.objectstorage.clients import BucketStore, ObjectSummary
from pdf_catalog.objectstorage.clients.bucket_store import MAX_LIST_KEYS
from pdf_catalog.objectstorage.manifest import load_manifest
from pdf_catalog.schemas import FileCollection, FileEntry, FilePage

logger = get_logger(__name__)
tracer = get_tracer(__name__)

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000
PDF_SUFFIX = ".pdf"


def is_pdf_key(key: str) -> bool:
    """Return True for keys ending in .pdf, ignoring case."""
    return key.lower().endswith(PDF_SUFFIX)


def clamp_limit(limit: int) -> int:
    """Clamp a requested page size to the supported maximum."""
    return min(limit, MAX_LIMIT)


def to_file_entry(obj: ObjectSummary) -> FileEntry:
    return FileEntry(key=obj.key, size=obj.size, uploaded=obj.last_modified)


class CatalogLister:
    """Lists PDFs in a bucket, optionally merged with the manifest."""

    def __init__(self, store: BucketStore, manifest_key: str):
        """Initialize catalog lister.

        Args:
            store: Bucket to list
            manifest_key: Key of the manifest of externally hosted files
        """
        self.store = store
        self.manifest_key = manifest_key

    def list_page(
        self,
        prefix: str = "",
        cursor: Optional[str] = None,
        limit: int = DEFAULT_LIMIT,
    ) -> FilePage:
        """List one page of PDFs in key order.

        Upstream pages are fetched until more than ``limit`` PDFs have been
        collected or the bucket is drained, so that ``truncated`` is exact
        even when the page ends on the last PDF.

        Args:
            prefix: Only keys starting with this prefix
            cursor: Opaque token from a previous page; listing resumes
                strictly after it
            limit: Maximum number of entries (clamped to 1000)

        Returns:
            FilePage with the entries, truncation flag and next cursor

        Raises:
            StoreOperationError: If an upstream listing fails
        """
        limit = clamp_limit(limit)
        logger.info("Listing catalog page", prefix=prefix, cursor=cursor, limit=limit)

        with tracer.start_as_current_span("catalog.list_page") as span:
            span.set_attribute("catalog.prefix", prefix)
            span.set_attribute("catalog.limit", limit)

            files: list[FileEntry] = []
            has_more_upstream = True
            continuation_token: Optional[str] = None
            upstream_pages = 0

            while len(files) <= limit and has_more_upstream:
                page = self.store.list_page(
                    prefix=prefix,
                    start_after=cursor if continuation_token is None else None,
                    continuation_token=continuation_token,
                    max_keys=MAX_LIST_KEYS,
                )
                upstream_pages += 1
                files.extend(
                    to_file_entry(obj) for obj in page.objects if is_pdf_key(obj.key)
                )

                has_more_upstream = page.truncated
                continuation_token = page.continuation_token
                if has_more_upstream and continuation_token is None:
                    # A truncated page without a token cannot be continued.
                    raise StoreOperationError(
                        "Truncated listing returned no continuation token"
                    )

            has_more = len(files) > limit or has_more_upstream
            files = files[:limit]
            next_cursor = files[-1].key if has_more and files else None

            span.set_attribute("catalog.upstream_pages", upstream_pages)

        logger.info(
            "Catalog page listed",
            prefix=prefix,
            file_count=len(files),
            truncated=has_more,
            upstream_pages=upstream_pages,
        )
        return FilePage(
            files=files,
            truncated=has_more,
            cursor=next_cursor,
            total_returned=len(files),
        )

    def list_all(self) -> FileCollection:
        """List every PDF in the bucket plus manifest-only keys.

        Store entries come first, in key order. Manifest keys missing from
        the bucket are appended with size 0 and the current time, since
        their real metadata lives with the external host. The manifest is
        best-effort: if it cannot be loaded, only store entries are
        returned.

        Raises:
            StoreOperationError: If an upstream listing fails
        """
        logger.info("Listing all catalog files")

        with tracer.start_as_current_span("catalog.list_all") as span:
            entries: dict[str, FileEntry] = {}
            continuation_token: Optional[str] = None

            while True:
                page = self.store.list_page(continuation_token=continuation_token)
                for obj in page.objects:
                    if is_pdf_key(obj.key):
                        entries[obj.key] = to_file_entry(obj)
                if not page.truncated:
                    break
                if page.continuation_token is None:
                    raise StoreOperationError(
                        "Truncated listing returned no continuation token"
                    )
                continuation_token = page.continuation_token

            store_count = len(entries)

            try:
                manifest = load_manifest(self.store, self.manifest_key)
            except CatalogError as e:
                logger.warning(
                    "Manifest unavailable, returning store entries only",
                    manifest_key=self.manifest_key,
                    error=str(e),
                )
                manifest = {}

            now = datetime.now(timezone.utc)
            for key in manifest:
                if key not in entries:
                    entries[key] = FileEntry(key=key, size=0, uploaded=now)

            span.set_attribute("catalog.store_count", store_count)
            span.set_attribute("catalog.total_count", len(entries))

        logger.info(
            "All catalog files listed",
            store_count=store_count,
            manifest_only_count=len(entries) - store_count,
        )
        return FileCollection.of(list(entries.values()))
