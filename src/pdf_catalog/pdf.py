"""Local PDF inspection helpers."""

from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from pdf_catalog.core import get_logger
from pdf_catalog.core.exceptions import ValidationError

logger = get_logger(__name__)


def count_pages(pdf_path: str | Path) -> int:
    """Open a PDF and return its number of pages.

    Raises:
        ValidationError: If the file is missing or is not a readable PDF
    """
    path = Path(pdf_path)
    if not path.is_file():
        raise ValidationError(f"PDF not found: {path}")

    try:
        reader = PdfReader(str(path))
        pages = len(reader.pages)
    except (PyPdfError, OSError, ValueError) as e:
        raise ValidationError(f"Failed to read PDF '{path}': {e}") from e

    logger.debug("PDF opened", path=str(path), pages=pages)
    return pages
