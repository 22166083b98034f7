"""Command-line interface for pdf-catalog.

Commands:
    - serve: Run the HTTP catalog
    - list: Print one page of the PDF listing
    - all-files: Print every PDF, including manifest-only documents
    - lookup: Print metadata for specific keys
    - page-count: Print the page count of a local PDF

Bucket and client options default to the PDF_CATALOG_* environment settings.
"""

from typing import Annotated, Optional

import typer
import uvicorn

from . import __version__
from .core import settings
from .core.config import Settings
from .objectstorage.clients import BucketStore, S3ClientConfig
from .objectstorage.listing import CatalogLister
from .objectstorage.lookup import lookup_files
from .pdf import count_pages
from .schemas import FileEntry

app = typer.Typer(
    name="pdf-catalog",
    help="List, preview and serve PDFs stored in an S3-compatible bucket.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"pdf-catalog {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    PDF Catalog: listing, preview pages and delivery for a bucket of PDFs.
    """
    pass


BucketOption = Annotated[
    Optional[str], typer.Option("--bucket", "-b", help="Bucket name")
]
EndpointOption = Annotated[
    Optional[str], typer.Option("--endpoint-url", help="Custom S3 endpoint URL")
]
RegionOption = Annotated[
    Optional[str], typer.Option("--region", help="AWS region name")
]
ProfileOption = Annotated[
    Optional[str], typer.Option("--aws-profile", help="AWS CLI profile name")
]


def _resolve_settings(
    bucket: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    region_name: Optional[str] = None,
    aws_profile: Optional[str] = None,
) -> Settings:
    """Overlay command-line options on the environment settings."""
    overrides = {
        "bucket_name": bucket,
        "endpoint_url": endpoint_url,
        "region_name": region_name,
        "aws_profile": aws_profile,
    }
    return settings.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )


def _create_store(resolved: Settings) -> BucketStore:
    return BucketStore(resolved.bucket_name, S3ClientConfig.from_settings(resolved))


def _echo_files(files: list[FileEntry]) -> None:
    for entry in files:
        typer.echo(
            f"  {entry.key}  {entry.size:,} bytes  {entry.uploaded.isoformat()}"
        )


@app.command("serve")
def serve_cmd(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Bind port")] = 8000,
    bucket: BucketOption = None,
    endpoint_url: EndpointOption = None,
    region_name: RegionOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Run the HTTP catalog with uvicorn.

    Example:
        pdf-catalog serve --bucket my-pdfs --port 8080
    """
    from .web import create_app

    resolved = _resolve_settings(bucket, endpoint_url, region_name, aws_profile)
    web_app = create_app(resolved, _create_store(resolved))
    uvicorn.run(web_app, host=host, port=port, log_level=resolved.log_level.lower())


@app.command("list")
def list_cmd(
    prefix: Annotated[str, typer.Option("--prefix", help="Key prefix filter")] = "",
    cursor: Annotated[
        Optional[str], typer.Option("--cursor", help="Cursor from a previous page")
    ] = None,
    limit: Annotated[
        int, typer.Option("--limit", min=1, help="Page size (at most 1000)")
    ] = 100,
    bucket: BucketOption = None,
    endpoint_url: EndpointOption = None,
    region_name: RegionOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    List one page of PDFs in key order.

    Example:
        pdf-catalog list --prefix VOL00001/ --limit 50
    """
    try:
        resolved = _resolve_settings(bucket, endpoint_url, region_name, aws_profile)
        lister = CatalogLister(_create_store(resolved), resolved.manifest_key)
        page = lister.list_page(prefix=prefix, cursor=cursor, limit=limit)

        if page.files:
            typer.echo(f"Found {page.total_returned} files:")
            _echo_files(page.files)
        else:
            typer.echo("No files found.")
        if page.cursor:
            typer.echo(f"Next cursor: {page.cursor}")

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("all-files")
def all_files_cmd(
    bucket: BucketOption = None,
    endpoint_url: EndpointOption = None,
    region_name: RegionOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    List every PDF in the bucket plus documents known only to the manifest.
    """
    try:
        resolved = _resolve_settings(bucket, endpoint_url, region_name, aws_profile)
        lister = CatalogLister(_create_store(resolved), resolved.manifest_key)
        collection = lister.list_all()

        typer.echo(f"Found {collection.total_returned} files:")
        _echo_files(collection.files)

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("lookup")
def lookup_cmd(
    keys: Annotated[list[str], typer.Argument(help="Object keys to look up")],
    bucket: BucketOption = None,
    endpoint_url: EndpointOption = None,
    region_name: RegionOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Print metadata for the given keys; missing keys are skipped.
    """
    try:
        resolved = _resolve_settings(bucket, endpoint_url, region_name, aws_profile)
        collection = lookup_files(_create_store(resolved), keys)

        typer.echo(f"Found {collection.total_returned} of {len(set(keys))} keys:")
        _echo_files(collection.files)

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("page-count")
def page_count_cmd(
    pdf_path: Annotated[str, typer.Argument(help="Path to a local PDF file")],
) -> None:
    """
    Print the number of pages in a local PDF.
    """
    try:
        typer.echo(f"Pages: {count_pages(pdf_path)}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
