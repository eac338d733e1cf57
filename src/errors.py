"""
Error kinds raised by the catalog engine.

User-facing errors (validation, store, upload, fetch, variant sync) are
caught at the admin workflow boundary and turned into a message on the
draft. OutOfRangeError and WorkflowStateError are contract violations and
propagate to the caller.
"""


class CatalogError(Exception):
    """Base class for all catalog engine errors."""


class ParseError(CatalogError):
    """Stored image list could not be parsed.

    Decoding falls back to the legacy single-URL form instead of raising,
    so this is never raised by ``decode_images``.
    """


class ValidationError(CatalogError):
    """Draft data failed validation (price, images, variants, ...)."""


class StoreError(CatalogError):
    """A collection store call failed."""


class UploadError(CatalogError):
    """The image host failed or returned no URL."""


class FetchError(CatalogError):
    """Variant retrieval failed while opening a product for edit."""


class VariantSyncError(CatalogError):
    """Variants were deleted during an edit but re-inserting them failed.

    The product record keeps its updated fields but has no variants left.
    Kept separate from StoreError so the admin knows to re-add the colours.
    """

    def __init__(self, message: str, product_id: str):
        super().__init__(message)
        self.product_id = product_id


class OutOfRangeError(CatalogError):
    """A page beyond the computed total was requested."""


class WorkflowStateError(CatalogError):
    """An admin workflow transition was invoked from the wrong state."""
