"""Tests for bucket access primitives."""

from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError

from pdf_catalog.core.exceptions import StoreOperationError
from pdf_catalog.objectstorage.clients import S3ClientConfig, S3ClientManager


class TestBucketStore:
    """Test list/head/get against a mocked bucket."""

    def test_list_page(self, store, put_object):
        put_object("b.pdf")
        put_object("a.pdf")

        page = store.list_page()

        assert [o.key for o in page.objects] == ["a.pdf", "b.pdf"]
        assert page.truncated is False
        assert page.continuation_token is None

    def test_list_page_truncated(self, store, put_object):
        for key in ["a.pdf", "b.pdf", "c.pdf"]:
            put_object(key)

        first = store.list_page(max_keys=2)
        second = store.list_page(continuation_token=first.continuation_token)

        assert [o.key for o in first.objects] == ["a.pdf", "b.pdf"]
        assert first.truncated is True
        assert first.continuation_token
        assert [o.key for o in second.objects] == ["c.pdf"]
        assert second.truncated is False

    def test_list_page_start_after_and_prefix(self, store, put_object):
        for key in ["VOL1/a.pdf", "VOL1/b.pdf", "VOL2/c.pdf"]:
            put_object(key)

        page = store.list_page(prefix="VOL1/", start_after="VOL1/a.pdf")

        assert [o.key for o in page.objects] == ["VOL1/b.pdf"]

    def test_head(self, store, put_object):
        put_object("a.pdf", body=b"12345")

        summary = store.head("a.pdf")

        assert summary.key == "a.pdf"
        assert summary.size == 5
        assert summary.content_type == "application/pdf"

    def test_head_missing(self, store):
        assert store.head("missing.pdf") is None

    def test_get(self, store, put_object):
        put_object("a.pdf", body=b"%PDF-data")

        obj = store.get("a.pdf")

        assert obj.summary.size == 9
        assert b"".join(obj.iter_chunks()) == b"%PDF-data"

    def test_get_missing(self, store):
        assert store.get("missing.pdf") is None

    def test_get_empty_key(self, store):
        assert store.get("") is None

    def test_list_failure_wrapped(self, store):
        error = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "ListObjectsV2"
        )
        with patch.object(store.client, "list_objects_v2", side_effect=error):
            with pytest.raises(StoreOperationError, match="Failed to list objects"):
                store.list_page()

    def test_head_failure_wrapped(self, store):
        error = ClientError({"Error": {"Code": "500", "Message": "oops"}}, "HeadObject")
        with patch.object(store.client, "head_object", side_effect=error):
            with pytest.raises(StoreOperationError, match="Failed to head object"):
                store.head("a.pdf")

    def test_missing_bucket(self, s3_client):
        from pdf_catalog.objectstorage.clients import BucketStore

        missing = BucketStore(
            "no-such-bucket",
            S3ClientConfig(access_key_id="test_key", secret_access_key="test_secret"),
        )
        with pytest.raises(StoreOperationError):
            missing.list_page()


class TestS3ClientManager:
    """Test client creation."""

    def test_client_is_cached(self, s3_client):
        manager = S3ClientManager(
            S3ClientConfig(access_key_id="test_key", secret_access_key="test_secret")
        )

        assert manager.client is manager.client

    def test_config_from_settings(self, test_settings):
        settings = test_settings.model_copy(
            update={"endpoint_url": "http://localhost:9000", "region_name": "auto"}
        )

        config = S3ClientConfig.from_settings(settings)

        assert config.endpoint_url == "http://localhost:9000"
        assert config.region_name == "auto"
