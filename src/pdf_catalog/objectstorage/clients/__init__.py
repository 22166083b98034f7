"""S3 client management and bucket access."""

from .bucket_store import BucketStore, ListedPage, ObjectSummary, StoredObject
from .s3_client import S3ClientConfig, S3ClientManager

__all__ = [
    "BucketStore",
    "ListedPage",
    "ObjectSummary",
    "S3ClientConfig",
    "S3ClientManager",
    "StoredObject",
]
