"""Redirects for documents hosted outside the bucket."""

import re
from typing import Optional

VOLUME_PATTERN = re.compile(r"VOL(\d+)")


def external_document_url(path: str, base_url: str) -> Optional[str]:
    """Build the external URL for a PDF missing from the bucket.

    Paths follow ``VOL<n>/.../<file>.pdf``; the external repository groups
    files by data set number, e.g. ``VOL00007/IMAGES/0001/EFTA00000001.pdf``
    maps to ``<base_url>/DataSet%207/EFTA00000001.pdf``.

    Returns:
        Redirect URL, or None if the path is not a volume PDF path
    """
    if not path.endswith(".pdf"):
        return None

    parts = path.split("/")
    match = VOLUME_PATTERN.fullmatch(parts[0])
    if not match:
        return None

    volume = int(match.group(1))
    filename = parts[-1]
    return f"{base_url.rstrip('/')}/DataSet%20{volume}/{filename}"
