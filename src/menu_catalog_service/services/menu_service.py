"""Menu service for creating, searching and deleting menu items.

This is the only component that knows a menu item and its attachment files
belong together: files are stored before the record is written, and removed
after the record is deleted.
"""

import logging
from decimal import Decimal, InvalidOperation

from menu_catalog_service.models.errors import NotFoundError, StorageError, ValidationError
from menu_catalog_service.models.menu_models import MenuItem, MenuItemCreate, UploadedFile
from menu_catalog_service.observability import metrics
from menu_catalog_service.observability.decorators import traced
from menu_catalog_service.repositories.menu_repository import MenuItemRepository
from menu_catalog_service.storage.file_store import LocalFileStore

logger = logging.getLogger(__name__)


class MenuService:
    """Service orchestrating the menu item lifecycle.

    Composes the record repository and the attachment file store. Neither
    collaborator is aware of the other.
    """

    def __init__(self, repository: MenuItemRepository, file_store: LocalFileStore) -> None:
        """Initialize the MenuService.

        Args:
            repository: Repository for menu item records
            file_store: Store for uploaded image and model files
        """
        self.repository = repository
        self.file_store = file_store

    @traced("add_menu_item")
    async def add_item(self, data: MenuItemCreate) -> MenuItem:
        """Validate input, store attachments and persist a new menu item.

        Files stored before a later failure are not rolled back.

        Args:
            data: Raw input for the new item

        Returns:
            The stored menu item

        Raises:
            ValidationError: If name, price or description is missing, or price is not a number
            StorageError: If an attachment could not be stored
            PersistenceError: If the record could not be written
        """
        # Whitespace-only counts as missing; stored text is kept as sent
        raw_price = (data.price or "").strip()
        if not (data.name or "").strip() or not raw_price or not (data.description or "").strip():
            raise ValidationError("Name, price, and description are required")

        price = self._parse_price(raw_price)

        references: dict[str, str] = {}
        for kind, upload in (("image", data.image), ("model", data.model)):
            references[kind] = self._store_upload(kind, upload)

        item = self.repository.create(
            name=data.name,
            price=price,
            description=data.description,
            image=references["image"],
            model=references["model"],
        )

        metrics.record_item_created(len(item.file_references))
        logger.info(f"Created menu item {item.id} ({item.name})")
        return item

    @traced("search_menu_items")
    async def search_items(self, query: str | None = None) -> list[MenuItem]:
        """List menu items whose name contains query, case-insensitively.

        Args:
            query: Substring to match; empty or None returns every item

        Returns:
            Matching menu items in store order
        """
        metrics.record_search(filtered=bool(query))
        return self.repository.find_by_substring(query)

    @traced("get_menu_item")
    async def get_item(self, item_id: str) -> MenuItem:
        """Fetch a single menu item.

        Raises:
            ValidationError: If item_id is not a well-formed id
            NotFoundError: If no item has this id
        """
        item_id = self._check_id(item_id)

        item = self.repository.find_by_id(item_id)
        if item is None:
            raise NotFoundError("Menu item not found")
        return item

    @traced("delete_menu_item")
    async def delete_item(self, item_id: str) -> MenuItem:
        """Delete a menu item and its attachment files.

        The record is authoritative: once it is deleted, failure to remove an
        attachment is logged but does not fail the operation.

        Args:
            item_id: Id of the item to delete

        Returns:
            The deleted menu item

        Raises:
            ValidationError: If item_id is not a well-formed id
            NotFoundError: If no item has this id
            PersistenceError: If the record could not be deleted
        """
        item_id = self._check_id(item_id)

        deleted = self.repository.delete_by_id(item_id)
        if deleted is None:
            raise NotFoundError("Menu item not found")

        for kind, reference in (("image", deleted.image), ("model", deleted.model)):
            if not reference:
                continue
            try:
                self.file_store.delete(reference)
            except StorageError as e:
                metrics.record_file_cleanup_failure(kind)
                logger.warning(f"Menu item {item_id} deleted but {kind} {reference} was not: {e}")

        metrics.record_item_deleted()
        logger.info(f"Deleted menu item {item_id}")
        return deleted

    def _check_id(self, item_id: str) -> str:
        """Return item_id in the lower-case form records are keyed by."""
        if not self.repository.is_valid_id(item_id):
            raise ValidationError("Invalid menu ID")
        return item_id.lower()

    @staticmethod
    def _parse_price(raw_price: str) -> Decimal:
        try:
            price = Decimal(raw_price)
        except InvalidOperation as e:
            raise ValidationError("Price must be a number") from e

        if not price.is_finite():
            raise ValidationError("Price must be a number")
        return price

    def _store_upload(self, kind: str, upload: UploadedFile | None) -> str:
        if upload is None or not upload.filename:
            return ""

        reference = self.file_store.store(upload.content, upload.filename)
        metrics.record_upload(kind, len(upload.content))
        return reference
