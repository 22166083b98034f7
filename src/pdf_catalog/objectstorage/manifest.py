"""Reader for the externally maintained PDF manifest.

The manifest is a single JSON object stored in the bucket, mapping file
keys to arbitrary metadata. Keys listed there but absent from the bucket
belong to documents hosted elsewhere.
"""

import json
from typing import Any

from pdf_catalog.core import get_logger
from pdf_catalog.core.exceptions import ManifestError, ObjectNotFoundError
from pdf_catalog.objectstorage.clients import BucketStore

logger = get_logger(__name__)


def load_manifest(store: BucketStore, manifest_key: str) -> dict[str, Any]:
    """Fetch and parse the manifest object.

    Args:
        store: Bucket holding the manifest
        manifest_key: Key of the manifest object

    Returns:
        Mapping of file key to manifest metadata

    Raises:
        ObjectNotFoundError: If the manifest object does not exist
        ManifestError: If the manifest is not a JSON object
        StoreOperationError: If the fetch fails
    """
    obj = store.get(manifest_key)
    if obj is None:
        raise ObjectNotFoundError(f"Manifest not found: {manifest_key}")

    try:
        manifest = json.loads(obj.read())
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ManifestError(f"Manifest '{manifest_key}' is not valid JSON: {e}") from e

    if not isinstance(manifest, dict):
        raise ManifestError(
            f"Manifest '{manifest_key}' must be a JSON object, "
            f"got {type(manifest).__name__}"
        )

    logger.info("Manifest loaded", manifest_key=manifest_key, entry_count=len(manifest))
    return manifest
