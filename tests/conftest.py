"""Test configuration and fixtures for pdf-catalog."""

import json
from datetime import datetime, timezone

import boto3
import pytest
from moto import mock_aws

from pdf_catalog.core import Settings
from pdf_catalog.objectstorage.clients import (
    BucketStore,
    ListedPage,
    ObjectSummary,
    S3ClientConfig,
)

BUCKET = "test-bucket"
MANIFEST_KEY = "pdfs-as-jpegs/manifest.json"


@pytest.fixture
def s3_client():
    """Create a mocked S3 client with an empty test bucket."""
    with mock_aws():
        client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def store(s3_client):
    """Bucket store pointed at the mocked test bucket."""
    return BucketStore(
        BUCKET,
        S3ClientConfig(
            access_key_id="test_key",
            secret_access_key="test_secret",
            region_name="us-east-1",
        ),
    )


@pytest.fixture
def put_object(s3_client):
    """Upload an object to the test bucket."""

    def _put(key, body=b"%PDF-1.4 test", content_type="application/pdf"):
        s3_client.put_object(
            Bucket=BUCKET, Key=key, Body=body, ContentType=content_type
        )

    return _put


@pytest.fixture
def put_manifest(s3_client):
    """Upload a manifest mapping file keys to metadata."""

    def _put(entries):
        s3_client.put_object(
            Bucket=BUCKET,
            Key=MANIFEST_KEY,
            Body=json.dumps(entries).encode(),
            ContentType="application/json",
        )

    return _put


@pytest.fixture
def test_settings():
    """Settings for the mocked bucket."""
    return Settings(bucket_name=BUCKET, manifest_key=MANIFEST_KEY)


class PagedStore:
    """In-memory stand-in for BucketStore with a small fixed page size.

    Continuation tokens are list offsets, so pagination over several
    upstream pages can be exercised without uploading thousands of keys.
    """

    def __init__(self, keys, page_size=3):
        self.bucket = "paged"
        self.keys = sorted(keys)
        self.page_size = page_size
        self.calls = []
        self.uploaded = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def list_page(
        self, prefix="", start_after=None, continuation_token=None, max_keys=1000
    ):
        self.calls.append(
            {"prefix": prefix, "start_after": start_after, "token": continuation_token}
        )
        keys = [k for k in self.keys if k.startswith(prefix)]
        if continuation_token is not None:
            start = int(continuation_token)
        elif start_after is not None:
            start = next((i for i, k in enumerate(keys) if k > start_after), len(keys))
        else:
            start = 0
        end = min(start + self.page_size, len(keys))
        truncated = end < len(keys)
        return ListedPage(
            objects=[
                ObjectSummary(key=k, size=len(k), last_modified=self.uploaded)
                for k in keys[start:end]
            ],
            truncated=truncated,
            continuation_token=str(end) if truncated else None,
        )

    def get(self, key):
        return None


@pytest.fixture
def paged_store_factory():
    """Build a PagedStore over the given keys."""
    return PagedStore
