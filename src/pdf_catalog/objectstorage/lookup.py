"""Concurrent metadata lookup for a caller-supplied set of keys."""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

from pdf_catalog.core import get_logger, get_tracer
from pdf_catalog.objectstorage.clients import BucketStore, ObjectSummary
from pdf_catalog.objectstorage.listing.catalog import to_file_entry
from pdf_catalog.schemas import FileCollection

logger = get_logger(__name__)
tracer = get_tracer(__name__)


def lookup_files(store: BucketStore, keys: Iterable[str]) -> FileCollection:
    """HEAD every key concurrently and collect the ones that exist.

    Keys with no object are omitted. Every lookup runs to completion before
    the result is assembled; a failed lookup does not cancel the others,
    but the first failure is re-raised once all of them have finished.

    Args:
        store: Bucket to query
        keys: Object keys; duplicates are looked up once

    Returns:
        FileCollection sorted by key

    Raises:
        StoreOperationError: If any lookup failed for a reason other than
            the key being absent
    """
    unique_keys = list(dict.fromkeys(keys))
    logger.info("Looking up files by key", key_count=len(unique_keys))

    if not unique_keys:
        return FileCollection.of([])

    with tracer.start_as_current_span("catalog.lookup_files") as span:
        span.set_attribute("catalog.key_count", len(unique_keys))

        with ThreadPoolExecutor(max_workers=len(unique_keys)) as executor:
            futures = [executor.submit(store.head, key) for key in unique_keys]

        found: list[ObjectSummary] = []
        failure: Optional[BaseException] = None
        for future in futures:
            error = future.exception()
            if error is not None:
                failure = failure or error
                continue
            summary = future.result()
            if summary is not None:
                found.append(summary)

        if failure is not None:
            raise failure

        files = sorted((to_file_entry(obj) for obj in found), key=lambda f: f.key)
        span.set_attribute("catalog.found_count", len(files))

    logger.info(
        "Files looked up by key", key_count=len(unique_keys), found_count=len(files)
    )
    return FileCollection.of(files)
