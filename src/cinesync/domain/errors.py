"""Error taxonomy shared by the engine and its adapters.

Errors are classified by how far they reach:

- tick-fatal: :class:`SourceQueryError` aborts the current tick.
- record-fatal: :class:`InvalidReferenceError`, :class:`CatalogError`,
  :class:`PublishError` skip only the affected record.
- degradable: :class:`AssetError` publishes the record without an image.
- store failures: :class:`StoreError` leave the record unpersisted so the next tick
  repeats the publish decision.
"""

from __future__ import annotations


class CinesyncError(Exception):
    """Base class for all classified failures."""


class ExternalServiceError(CinesyncError):
    """A call to an external service failed."""

    def __init__(self, message: str, *, service: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.service = service
        self.status_code = status_code


class ServiceUnavailableError(ExternalServiceError):
    """Network failure, timeout or unexpected server response."""


class NotFoundError(ExternalServiceError):
    """The requested resource does not exist."""


class RateLimitedError(ExternalServiceError):
    """The service refused the call because of rate limiting."""

    def __init__(
        self,
        message: str,
        *,
        service: str,
        status_code: int | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, service=service, status_code=status_code)
        self.retry_after = retry_after


class SourceQueryError(CinesyncError):
    """The source record set could not be fetched."""


class CatalogError(CinesyncError):
    """Enrichment lookup failed for a single reference."""


class CatalogNotFoundError(CatalogError, NotFoundError):
    pass


class CatalogUnavailableError(CatalogError, ServiceUnavailableError):
    pass


class CatalogRateLimitedError(CatalogError, RateLimitedError):
    pass


class PublishError(CinesyncError):
    """The target platform rejected or did not answer a create/update call."""


class AssetError(CinesyncError):
    """An image could not be materialised."""


class InvalidReferenceError(CinesyncError):
    """A source record's link does not carry a catalog reference."""

    def __init__(self, link: str | None) -> None:
        super().__init__(f"No catalog reference in link {link!r}")
        self.link = link


class StoreError(CinesyncError):
    """Reading or writing sync state failed."""
