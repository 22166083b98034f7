"""Object storage operations for S3-compatible services."""

from .clients import BucketStore, S3ClientConfig, S3ClientManager
from .listing import CatalogLister
from .lookup import lookup_files
from .manifest import load_manifest

__all__ = [
    "BucketStore",
    "CatalogLister",
    "S3ClientConfig",
    "S3ClientManager",
    "load_manifest",
    "lookup_files",
]
