"""Request and response schemas for the catalog HTTP surface."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileEntry(BaseModel):
    """Metadata for one PDF in the catalog."""

    key: str = Field(..., description="Object key in the bucket")
    size: int = Field(..., ge=0, description="Object size in bytes")
    uploaded: datetime = Field(..., description="Upload time (UTC)")


class FilePage(BaseModel):
    """One page of the paginated file listing."""

    model_config = ConfigDict(populate_by_name=True)

    files: list[FileEntry] = Field(default_factory=list)
    truncated: bool = Field(False, description="Whether more files follow")
    cursor: str | None = Field(
        None, description="Opaque continuation token for the next page"
    )
    total_returned: int = Field(0, alias="totalReturned")


class FileCollection(BaseModel):
    """Unpaginated set of files (exhaustive listing and batch lookup)."""

    model_config = ConfigDict(populate_by_name=True)

    files: list[FileEntry] = Field(default_factory=list)
    total_returned: int = Field(0, alias="totalReturned")

    @classmethod
    def of(cls, files: list[FileEntry]) -> "FileCollection":
        return cls(files=files, total_returned=len(files))


class FilesByKeysRequest(BaseModel):
    """Body of the batch metadata lookup."""

    keys: list[str] = Field(default_factory=list)

    @field_validator("keys", mode="before")
    @classmethod
    def null_keys_as_empty(cls, value):
        return [] if value is None else value


class ErrorResponse(BaseModel):
    error: str
