"""Errors raised while retrieving upstream version catalogs."""

from typing import Optional


class CatalogError(Exception):
    """Base class for fatal catalog failures."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, response_body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class CatalogFetchError(CatalogError):
    """Upstream could not be reached or answered with a non-success status."""


class CatalogParseError(CatalogError):
    """Upstream answered, but the body is not the expected JSON shape."""
