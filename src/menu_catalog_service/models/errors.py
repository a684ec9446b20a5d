"""Error kinds raised by the menu catalog service.

Each error carries the HTTP status the API layer maps it to.
"""


class MenuCatalogError(Exception):
    """Base class for expected menu catalog failures."""

    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MenuCatalogError):
    """Missing or malformed required input."""

    http_status = 400


class NotFoundError(MenuCatalogError):
    """No menu item exists for the given id."""

    http_status = 404


class StorageError(MenuCatalogError):
    """Attachment file could not be written or removed."""


class PersistenceError(MenuCatalogError):
    """Menu item record store failure."""
