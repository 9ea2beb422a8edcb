# -*- coding: utf-8 -*-
"""
Exceptions shared by the catalog layers.

The service and repository raise these; only the HTTP layer (see
`catalog.app`) turns them into status codes.
"""


class CatalogError(Exception):
    """Base class for every error the catalog raises on purpose."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(CatalogError):
    """Request data is malformed or breaks a Product invariant."""


class ConstraintViolation(InvalidInput):
    """The store rejected a row (CHECK / NOT NULL / UNIQUE)."""


class NotFound(CatalogError):
    """No product exists with the requested id."""


class StoreUnavailable(CatalogError):
    """The database could not be reached or the statement failed."""


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
