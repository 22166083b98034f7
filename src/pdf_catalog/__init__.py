"""Catalog, preview and delivery of PDFs stored in an S3-compatible bucket.

The package lists PDFs in a bucket with cursor pagination, merges the live
listing with a manifest of externally hosted documents, looks up metadata
for batches of keys, and exposes all of it over HTTP together with Open
Graph preview pages and redirects for documents hosted elsewhere.

Recommended Usage:

    >>> from pdf_catalog import BucketStore, CatalogLister, S3ClientConfig
    >>> store = BucketStore("my-pdfs", S3ClientConfig(region_name="us-east-1"))
    >>> page = CatalogLister(store, "pdfs-as-jpegs/manifest.json").list_page(limit=10)

Serving over HTTP:

    >>> from pdf_catalog.web import create_app
    >>> app = create_app()
"""

__version__ = "0.1.0"

from .objectstorage import (
    BucketStore,
    CatalogLister,
    S3ClientConfig,
    load_manifest,
    lookup_files,
)
from .pdf import count_pages
from .schemas import FileCollection, FileEntry, FilePage

__all__ = [
    "BucketStore",
    "CatalogLister",
    "S3ClientConfig",
    "load_manifest",
    "lookup_files",
    "count_pages",
    "FileCollection",
    "FileEntry",
    "FilePage",
]
