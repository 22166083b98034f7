"""Bucket access primitives used by the catalog.

BucketStore wraps a single bucket and exposes the three operations the
catalog needs: list one page of keys, HEAD one key, and GET one key.
Missing objects are reported as ``None``; every other failure is wrapped
in StoreOperationError.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from pdf_catalog.core import get_logger
from pdf_catalog.core.exceptions import StoreOperationError
from pdf_catalog.objectstorage.clients.s3_client import S3ClientConfig, S3ClientManager

logger = get_logger(__name__)

# S3 returns at most 1000 keys per ListObjectsV2 call.
MAX_LIST_KEYS = 1000

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


@dataclass(frozen=True)
class ObjectSummary:
    """Listing or HEAD metadata for a single object."""

    key: str
    size: int
    last_modified: datetime
    content_type: Optional[str] = None


@dataclass(frozen=True)
class ListedPage:
    """One page returned by ListObjectsV2.

    Attributes:
        objects: Objects in key order
        truncated: Whether the store holds more keys after this page
        continuation_token: Token for the next page, set only when truncated
    """

    objects: list[ObjectSummary] = field(default_factory=list)
    truncated: bool = False
    continuation_token: Optional[str] = None


@dataclass(frozen=True)
class StoredObject:
    """A fetched object: metadata plus its streaming body."""

    summary: ObjectSummary
    body: Any

    def iter_chunks(self, chunk_size: int = 64 * 1024):
        """Yield the body in chunks and close it afterwards."""
        try:
            yield from self.body.iter_chunks(chunk_size=chunk_size)
        finally:
            self.body.close()

    def read(self) -> bytes:
        try:
            return self.body.read()
        finally:
            self.body.close()


def is_not_found(error: ClientError) -> bool:
    """Return True when a botocore error means the key does not exist."""
    code = str(error.response.get("Error", {}).get("Code", ""))
    return code in _NOT_FOUND_CODES


class BucketStore:
    """Read-only view of a single bucket."""

    def __init__(self, bucket: str, config: S3ClientConfig):
        """Initialize bucket store.

        Args:
            bucket: Bucket name
            config: S3 client configuration
        """
        self.bucket = bucket
        self.client_manager = S3ClientManager(config)
        logger.info("Bucket store initialized", bucket=bucket)

    @property
    def client(self):
        return self.client_manager.client

    def list_page(
        self,
        prefix: str = "",
        start_after: Optional[str] = None,
        continuation_token: Optional[str] = None,
        max_keys: int = MAX_LIST_KEYS,
    ) -> ListedPage:
        """List one page of objects under a prefix.

        Args:
            prefix: Key prefix to list under
            start_after: List keys strictly after this key
            continuation_token: Token from a previous truncated page
            max_keys: Maximum number of keys to return (at most 1000)

        Returns:
            ListedPage with objects in key order

        Raises:
            StoreOperationError: If the listing fails
        """
        kwargs: dict[str, Any] = {
            "Bucket": self.bucket,
            "Prefix": prefix,
            "MaxKeys": min(max_keys, MAX_LIST_KEYS),
        }
        if continuation_token:
            kwargs["ContinuationToken"] = continuation_token
        elif start_after:
            kwargs["StartAfter"] = start_after

        try:
            response = self.client.list_objects_v2(**kwargs)
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to list objects in '{self.bucket}/{prefix}': {e}"
            logger.error(error_msg, error=str(e))
            raise StoreOperationError(error_msg) from e

        objects = [
            ObjectSummary(
                key=obj["Key"],
                size=obj.get("Size", 0),
                last_modified=obj["LastModified"],
            )
            for obj in response.get("Contents", [])
        ]
        truncated = bool(response.get("IsTruncated"))

        logger.debug(
            "Listed bucket page",
            bucket=self.bucket,
            prefix=prefix,
            object_count=len(objects),
            truncated=truncated,
        )
        return ListedPage(
            objects=objects,
            truncated=truncated,
            continuation_token=(
                response.get("NextContinuationToken") if truncated else None
            ),
        )

    def head(self, key: str) -> Optional[ObjectSummary]:
        """Fetch metadata for a key without its body.

        Returns:
            ObjectSummary, or None if the key does not exist

        Raises:
            StoreOperationError: If the request fails for any other reason
        """
        try:
            response = self.client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if is_not_found(e):
                return None
            error_msg = f"Failed to head object '{key}': {e}"
            logger.error(error_msg, error=str(e))
            raise StoreOperationError(error_msg) from e
        except BotoCoreError as e:
            error_msg = f"Failed to head object '{key}': {e}"
            logger.error(error_msg, error=str(e))
            raise StoreOperationError(error_msg) from e

        return ObjectSummary(
            key=key,
            size=response.get("ContentLength", 0),
            last_modified=response["LastModified"],
            content_type=response.get("ContentType"),
        )

    def get(self, key: str) -> Optional[StoredObject]:
        """Fetch an object with its streaming body.

        Returns:
            StoredObject, or None if the key does not exist

        Raises:
            StoreOperationError: If the request fails for any other reason
        """
        if not key:
            return None

        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if is_not_found(e):
                return None
            error_msg = f"Failed to get object '{key}': {e}"
            logger.error(error_msg, error=str(e))
            raise StoreOperationError(error_msg) from e
        except BotoCoreError as e:
            error_msg = f"Failed to get object '{key}': {e}"
            logger.error(error_msg, error=str(e))
            raise StoreOperationError(error_msg) from e

        summary = ObjectSummary(
            key=key,
            size=response.get("ContentLength", 0),
            last_modified=response["LastModified"],
            content_type=response.get("ContentType"),
        )
        return StoredObject(summary=summary, body=response["Body"])
