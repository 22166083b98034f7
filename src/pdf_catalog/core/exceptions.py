"""Exception hierarchy for pdf-catalog."""


class CatalogError(Exception):
    """Base exception for all pdf-catalog errors."""

    pass


class ValidationError(CatalogError):
    """Raised when validation fails."""

    pass


class ObjectNotFoundError(CatalogError):
    """Raised when an object is not present in the bucket."""

    pass


class ManifestError(CatalogError):
    """Raised when the manifest cannot be fetched or parsed."""

    pass


class StoreOperationError(CatalogError):
    """Raised when a bucket operation fails."""

    pass
