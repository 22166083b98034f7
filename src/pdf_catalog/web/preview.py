"""Open Graph preview pages for shared document links.

Social media crawlers do not run the browser app, so shared links point at
a small static page carrying Open Graph and Twitter card tags, with a meta
refresh that sends real visitors on to the app.
"""

import re
from html import escape
from urllib.parse import quote

FILE_ID_PATTERN = re.compile(r"EFTA\d+")
THUMBNAIL_PREFIX = "thumbnails/"
SITE_NAME = "Epstein Files Browser"

_PREVIEW_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{title}</title>

  <!-- Open Graph / Facebook -->
  <meta property="og:type" content="article">
  <meta property="og:url" content="{page_url}">
  <meta property="og:title" content="{title}">
  <meta property="og:description" content="{description}">
  <meta property="og:image" content="{thumbnail_url}">
  <meta property="og:image:width" content="300">
  <meta property="og:image:height" content="400">
  <meta property="og:site_name" content="{site_name}">

  <!-- Twitter -->
  <meta name="twitter:card" content="summary_large_image">
  <meta name="twitter:url" content="{page_url}">
  <meta name="twitter:title" content="{title}">
  <meta name="twitter:description" content="{description}">
  <meta name="twitter:image" content="{thumbnail_url}">

  <meta http-equiv="refresh" content="0;url={page_url}">
</head>
<body>
  <h1>{title}</h1>
  <p>{description}</p>
  <p><a href="{page_url}">View Document</a></p>
  <img src="{thumbnail_url}" alt="{file_id}">
</body>
</html>"""


def get_file_id(key: str) -> str:
    """Extract the document id from a key, falling back to its last segment."""
    match = FILE_ID_PATTERN.search(key)
    if match:
        return match.group(0)
    return key.split("/")[-1] or key


def thumbnail_key(file_path: str) -> str:
    """Key of the JPEG thumbnail rendered for a PDF."""
    if file_path.lower().endswith(".pdf"):
        file_path = file_path[: -len(".pdf")] + ".jpg"
    return f"{THUMBNAIL_PREFIX}{file_path}"


def render_preview_html(file_path: str, thumbnail_url: str, site_url: str) -> str:
    """Render the preview page for one document.

    Args:
        file_path: Key of the PDF being shared
        thumbnail_url: Absolute URL of its thumbnail image
        site_url: Base URL of the browser app

    Returns:
        HTML document
    """
    file_id = get_file_id(file_path)
    page_url = f"{site_url}?file={quote(file_path, safe='')}"

    return _PREVIEW_TEMPLATE.format(
        title=escape(f"Epstein Files - {file_id}"),
        description=escape(f"View document {file_id} from the Epstein Files archive"),
        page_url=escape(page_url),
        thumbnail_url=escape(thumbnail_url),
        site_name=escape(SITE_NAME),
        file_id=escape(file_id),
    )
