"""Tests for paginated and exhaustive catalog listings."""

from datetime import datetime, timezone

import pytest

from pdf_catalog.core.exceptions import StoreOperationError
from pdf_catalog.objectstorage.clients import ListedPage
from pdf_catalog.objectstorage.listing import CatalogLister, clamp_limit, is_pdf_key

MANIFEST_KEY = "pdfs-as-jpegs/manifest.json"


class TestHelpers:
    """Test key filtering and limit clamping."""

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("VOL1/a.pdf", True),
            ("VOL1/a.PDF", True),
            ("VOL1/a.Pdf", True),
            ("VOL1/a.jpg", False),
            ("VOL1/a.pdf.bak", False),
            ("pdf", False),
        ],
    )
    def test_is_pdf_key(self, key, expected):
        assert is_pdf_key(key) is expected

    def test_clamp_limit(self):
        assert clamp_limit(5) == 5
        assert clamp_limit(1000) == 1000
        assert clamp_limit(5000) == 1000


class TestListPageMultiplePages:
    """Test the pagination loop over several small upstream pages."""

    def test_limit_smaller_than_total(self, paged_store_factory):
        """Exactly limit entries, truncated, cursor is the last key."""
        keys = [f"VOL1/{i:03d}.pdf" for i in range(10)]
        lister = CatalogLister(paged_store_factory(keys), MANIFEST_KEY)

        page = lister.list_page(limit=4)

        assert [f.key for f in page.files] == keys[:4]
        assert page.truncated is True
        assert page.cursor == "VOL1/003.pdf"
        assert page.total_returned == 4

    def test_limit_covers_everything(self, paged_store_factory):
        keys = [f"VOL1/{i:03d}.pdf" for i in range(7)]
        lister = CatalogLister(paged_store_factory(keys), MANIFEST_KEY)

        page = lister.list_page(limit=7)

        assert [f.key for f in page.files] == keys
        assert page.truncated is False
        assert page.cursor is None

    def test_limit_above_total(self, paged_store_factory):
        keys = [f"VOL1/{i:03d}.pdf" for i in range(5)]
        lister = CatalogLister(paged_store_factory(keys), MANIFEST_KEY)

        page = lister.list_page(limit=100)

        assert len(page.files) == 5
        assert page.truncated is False
        assert page.cursor is None

    def test_cursor_continues_without_overlap_or_gap(self, paged_store_factory):
        keys = [f"VOL1/{i:03d}.pdf" for i in range(11)]
        lister = CatalogLister(paged_store_factory(keys), MANIFEST_KEY)

        seen = []
        cursor = None
        while True:
            page = lister.list_page(cursor=cursor, limit=4)
            seen.extend(f.key for f in page.files)
            if not page.truncated:
                break
            cursor = page.cursor

        assert seen == keys

    def test_cursor_used_only_on_first_upstream_fetch(self, paged_store_factory):
        keys = [f"VOL1/{i:03d}.pdf" for i in range(10)]
        store = paged_store_factory(keys)
        lister = CatalogLister(store, MANIFEST_KEY)

        lister.list_page(cursor="VOL1/001.pdf", limit=5)

        assert store.calls[0]["start_after"] == "VOL1/001.pdf"
        assert store.calls[0]["token"] is None
        for call in store.calls[1:]:
            assert call["start_after"] is None
            assert call["token"] is not None

    def test_non_pdf_keys_filtered(self, paged_store_factory):
        keys = ["a.pdf", "b.txt", "c.PDF", "d.jpg", "e.json", "f.pdf", "g.png"]
        lister = CatalogLister(paged_store_factory(keys), MANIFEST_KEY)

        page = lister.list_page(limit=10)

        assert [f.key for f in page.files] == ["a.pdf", "c.PDF", "f.pdf"]
        assert page.truncated is False

    def test_drains_pages_without_pdfs(self, paged_store_factory):
        """Pages with no qualifying keys are skipped until upstream ends."""
        keys = [f"thumbs/{i:03d}.jpg" for i in range(20)]
        store = paged_store_factory(keys)
        lister = CatalogLister(store, MANIFEST_KEY)

        page = lister.list_page(limit=5)

        assert page.files == []
        assert page.truncated is False
        assert page.cursor is None
        assert len(store.calls) == 7

    def test_exact_limit_then_only_non_pdfs(self, paged_store_factory):
        """Upstream is drained past the limit so truncation is exact."""
        keys = ["a.pdf", "b.pdf", "c.pdf", "d.txt", "e.txt", "f.txt", "g.txt"]
        store = paged_store_factory(keys, page_size=3)
        lister = CatalogLister(store, MANIFEST_KEY)

        page = lister.list_page(limit=3)

        assert [f.key for f in page.files] == ["a.pdf", "b.pdf", "c.pdf"]
        assert page.truncated is False
        assert page.cursor is None
        assert len(store.calls) == 3

    def test_exact_limit_then_more_pdfs(self, paged_store_factory):
        keys = ["a.pdf", "b.pdf", "c.pdf", "d.txt", "e.txt", "f.pdf"]
        lister = CatalogLister(paged_store_factory(keys, page_size=3), MANIFEST_KEY)

        page = lister.list_page(limit=3)

        assert [f.key for f in page.files] == ["a.pdf", "b.pdf", "c.pdf"]
        assert page.truncated is True
        assert page.cursor == "c.pdf"

    def test_prefix_passed_to_store(self, paged_store_factory):
        keys = ["VOL1/a.pdf", "VOL2/b.pdf", "VOL2/c.pdf"]
        store = paged_store_factory(keys)
        lister = CatalogLister(store, MANIFEST_KEY)

        page = lister.list_page(prefix="VOL2/")

        assert [f.key for f in page.files] == ["VOL2/b.pdf", "VOL2/c.pdf"]
        assert all(call["prefix"] == "VOL2/" for call in store.calls)

    def test_limit_clamped(self, paged_store_factory):
        keys = [f"{i:04d}.pdf" for i in range(5)]
        lister = CatalogLister(paged_store_factory(keys), MANIFEST_KEY)

        page = lister.list_page(limit=50_000)

        assert len(page.files) == 5


class TestListPageS3:
    """Test paginated listing against a mocked bucket."""

    def test_list_page(self, store, put_object):
        for key in ["VOL1/b.pdf", "VOL1/a.pdf", "VOL1/notes.txt", "VOL2/c.pdf"]:
            put_object(key)
        lister = CatalogLister(store, MANIFEST_KEY)

        page = lister.list_page(limit=2)

        assert [f.key for f in page.files] == ["VOL1/a.pdf", "VOL1/b.pdf"]
        assert page.truncated is True
        assert page.cursor == "VOL1/b.pdf"

        next_page = lister.list_page(cursor=page.cursor, limit=2)
        assert [f.key for f in next_page.files] == ["VOL2/c.pdf"]
        assert next_page.truncated is False
        assert next_page.cursor is None

    def test_entry_metadata(self, store, put_object):
        put_object("VOL1/a.pdf", body=b"x" * 42)
        lister = CatalogLister(store, MANIFEST_KEY)

        entry = lister.list_page().files[0]

        assert entry.size == 42
        assert entry.uploaded.tzinfo is not None

    def test_empty_bucket(self, store):
        page = CatalogLister(store, MANIFEST_KEY).list_page()

        assert page.files == []
        assert page.truncated is False
        assert page.cursor is None


class TestListAll:
    """Test the exhaustive listing merged with the manifest."""

    def test_merges_manifest_only_keys(self, store, put_object, put_manifest):
        put_object("VOL1/a.pdf", body=b"abc")
        put_object("VOL1/b.txt")
        put_manifest({"VOL1/a.pdf": {"pages": 1}, "VOL9/z.pdf": {"pages": 3}})
        before = datetime.now(timezone.utc)

        collection = CatalogLister(store, MANIFEST_KEY).list_all()

        keys = [f.key for f in collection.files]
        assert keys == ["VOL1/a.pdf", "VOL9/z.pdf"]
        assert collection.total_returned == 2

        store_entry, manifest_entry = collection.files
        assert store_entry.size == 3
        assert manifest_entry.size == 0
        assert manifest_entry.uploaded >= before

    def test_store_metadata_wins_for_duplicate_keys(
        self, store, put_object, put_manifest
    ):
        put_object("VOL1/a.pdf", body=b"12345")
        put_manifest({"VOL1/a.pdf": {"size": 999}})

        collection = CatalogLister(store, MANIFEST_KEY).list_all()

        assert [f.key for f in collection.files] == ["VOL1/a.pdf"]
        assert collection.files[0].size == 5

    def test_missing_manifest_returns_store_entries(self, store, put_object):
        put_object("VOL1/a.pdf")

        collection = CatalogLister(store, MANIFEST_KEY).list_all()

        assert [f.key for f in collection.files] == ["VOL1/a.pdf"]

    def test_invalid_manifest_returns_store_entries(
        self, store, put_object, s3_client
    ):
        put_object("VOL1/a.pdf")
        s3_client.put_object(Bucket="test-bucket", Key=MANIFEST_KEY, Body=b"{not json")

        collection = CatalogLister(store, MANIFEST_KEY).list_all()

        assert [f.key for f in collection.files] == ["VOL1/a.pdf"]

    def test_drains_every_upstream_page(self, paged_store_factory):
        keys = [f"VOL1/{i:03d}.pdf" for i in range(10)] + ["VOL1/x.txt"]
        store = paged_store_factory(keys)

        collection = CatalogLister(store, MANIFEST_KEY).list_all()

        assert len(collection.files) == 10
        assert len(store.calls) == 4

    def test_truncated_page_without_token_raises(self, paged_store_factory):
        store = paged_store_factory(["a.pdf", "b.pdf"])
        store.list_page = lambda **kwargs: ListedPage(
            objects=[], truncated=True, continuation_token=None
        )

        with pytest.raises(StoreOperationError, match="no continuation token"):
            CatalogLister(store, MANIFEST_KEY).list_all()
