"""Unit tests for MenuService."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from menu_catalog_service.models.errors import (
    NotFoundError,
    PersistenceError,
    StorageError,
    ValidationError,
)
from menu_catalog_service.models.menu_models import MenuItem, MenuItemCreate, UploadedFile
from menu_catalog_service.repositories.menu_repository import MenuItemRepository
from menu_catalog_service.services.menu_service import MenuService
from menu_catalog_service.storage.file_store import LocalFileStore


@pytest.mark.unit
class TestMenuService:
    """Test suite for MenuService."""

    @pytest.fixture
    def mock_repository(self) -> MagicMock:
        """Create a mock MenuItemRepository that echoes created items."""
        repo = MagicMock(spec=MenuItemRepository)
        repo.is_valid_id.side_effect = MenuItemRepository.is_valid_id

        def create(**kwargs: object) -> MenuItem:
            return MenuItem(id="3f2b8c1e-7a4d-4e9b-9c1a-2d5e6f708192", **kwargs)

        repo.create.side_effect = create
        return repo

    @pytest.fixture
    def menu_service(self, mock_repository: MagicMock, file_store: LocalFileStore) -> MenuService:
        """Create a MenuService with a mocked repository and a temp file store."""
        return MenuService(repository=mock_repository, file_store=file_store)

    @pytest.mark.asyncio
    async def test_add_item_without_files(
        self, menu_service: MenuService, mock_repository: MagicMock
    ) -> None:
        """Test adding an item with no attachments."""
        item = await menu_service.add_item(
            MenuItemCreate(name="Tacos", price="5", description="Spicy")
        )

        assert item.name == "Tacos"
        assert item.price == Decimal("5")
        assert item.image == ""
        assert item.model == ""
        mock_repository.create.assert_called_once_with(
            name="Tacos", price=Decimal("5"), description="Spicy", image="", model=""
        )

    @pytest.mark.asyncio
    async def test_add_item_stores_files_before_record(
        self, menu_service: MenuService, file_store: LocalFileStore
    ) -> None:
        """Test that uploads are stored and referenced by the new record."""
        item = await menu_service.add_item(
            MenuItemCreate(
                name="Tacos",
                price="5.25",
                description="Spicy",
                image=UploadedFile(filename="tacos.jpg", content=b"jpeg"),
                model=UploadedFile(filename="tacos.glb", content=b"gltf"),
            )
        )

        assert item.image.endswith(".jpg")
        assert item.model.endswith(".glb")
        assert file_store.path_for(item.image).read_bytes() == b"jpeg"
        assert file_store.path_for(item.model).read_bytes() == b"gltf"

    @pytest.mark.asyncio
    async def test_add_item_ignores_upload_without_filename(
        self, menu_service: MenuService, file_store: LocalFileStore
    ) -> None:
        """Test that an empty file part is treated as no upload."""
        item = await menu_service.add_item(
            MenuItemCreate(
                name="Tacos",
                price="5",
                description="Spicy",
                image=UploadedFile(filename="", content=b""),
            )
        )

        assert item.image == ""
        assert list(file_store.root.iterdir()) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "data",
        [
            MenuItemCreate(price="5", description="Spicy"),
            MenuItemCreate(name="Tacos", description="Spicy"),
            MenuItemCreate(name="Tacos", price="5"),
            MenuItemCreate(name="   ", price="5", description="Spicy"),
            MenuItemCreate(name="Tacos", price="", description="Spicy"),
        ],
    )
    async def test_add_item_missing_required_field(
        self,
        menu_service: MenuService,
        mock_repository: MagicMock,
        file_store: LocalFileStore,
        data: MenuItemCreate,
    ) -> None:
        """Test that a missing field fails before anything is written."""
        data.image = UploadedFile(filename="tacos.jpg", content=b"jpeg")

        with pytest.raises(ValidationError, match="required"):
            await menu_service.add_item(data)

        mock_repository.create.assert_not_called()
        assert list(file_store.root.iterdir()) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", ["five", "NaN", "Infinity"])
    async def test_add_item_non_numeric_price(
        self, menu_service: MenuService, mock_repository: MagicMock, price: str
    ) -> None:
        """Test that a price that is not a finite number is rejected."""
        with pytest.raises(ValidationError, match="Price"):
            await menu_service.add_item(
                MenuItemCreate(name="Tacos", price=price, description="Spicy")
            )

        mock_repository.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_item_zero_price_is_present(self, menu_service: MenuService) -> None:
        """Test that "0" counts as a supplied price."""
        item = await menu_service.add_item(
            MenuItemCreate(name="Water", price="0", description="Tap water")
        )

        assert item.price == Decimal("0")

    @pytest.mark.asyncio
    async def test_add_item_keeps_text_as_sent(
        self, menu_service: MenuService, mock_repository: MagicMock
    ) -> None:
        """Test that surrounding whitespace in name and description is persisted."""
        item = await menu_service.add_item(
            MenuItemCreate(name="  Tacos ", price=" 5 ", description="Spicy\n")
        )

        assert item.name == "  Tacos "
        assert item.description == "Spicy\n"
        mock_repository.create.assert_called_once_with(
            name="  Tacos ", price=Decimal("5"), description="Spicy\n", image="", model=""
        )

    @pytest.mark.asyncio
    async def test_add_item_storage_failure_creates_no_record(
        self, mock_repository: MagicMock
    ) -> None:
        """Test that a failed upload aborts without a record and keeps earlier files."""
        mock_store = MagicMock(spec=LocalFileStore)
        mock_store.store.side_effect = ["/uploads/first.jpg", StorageError("disk full")]
        service = MenuService(repository=mock_repository, file_store=mock_store)

        with pytest.raises(StorageError):
            await service.add_item(
                MenuItemCreate(
                    name="Tacos",
                    price="5",
                    description="Spicy",
                    image=UploadedFile(filename="tacos.jpg", content=b"jpeg"),
                    model=UploadedFile(filename="tacos.glb", content=b"gltf"),
                )
            )

        mock_repository.create.assert_not_called()
        mock_store.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_item_persistence_failure(
        self, menu_service: MenuService, mock_repository: MagicMock
    ) -> None:
        """Test that repository failures propagate."""
        mock_repository.create.side_effect = PersistenceError("Failed to create menu item")

        with pytest.raises(PersistenceError):
            await menu_service.add_item(
                MenuItemCreate(name="Tacos", price="5", description="Spicy")
            )

    @pytest.mark.asyncio
    async def test_search_items_delegates(
        self, menu_service: MenuService, mock_repository: MagicMock, mock_menu_item: MenuItem
    ) -> None:
        """Test that search returns the repository results unchanged."""
        mock_repository.find_by_substring.return_value = [mock_menu_item]

        items = await menu_service.search_items("pizza")

        assert items == [mock_menu_item]
        mock_repository.find_by_substring.assert_called_once_with("pizza")

    @pytest.mark.asyncio
    async def test_search_items_without_query(
        self, menu_service: MenuService, mock_repository: MagicMock
    ) -> None:
        """Test that no query is passed through as match-all."""
        mock_repository.find_by_substring.return_value = []

        assert await menu_service.search_items() == []
        mock_repository.find_by_substring.assert_called_once_with(None)

    @pytest.mark.asyncio
    async def test_get_item(
        self, menu_service: MenuService, mock_repository: MagicMock, mock_menu_item: MenuItem
    ) -> None:
        """Test fetching an existing item."""
        mock_repository.find_by_id.return_value = mock_menu_item

        assert await menu_service.get_item(mock_menu_item.id) == mock_menu_item

    @pytest.mark.asyncio
    async def test_get_item_upper_case_id(
        self, menu_service: MenuService, mock_repository: MagicMock, mock_menu_item: MenuItem
    ) -> None:
        """Test that an upper-case id is looked up by its stored lower-case key."""
        mock_repository.find_by_id.return_value = mock_menu_item

        assert await menu_service.get_item(mock_menu_item.id.upper()) == mock_menu_item
        mock_repository.find_by_id.assert_called_once_with(mock_menu_item.id)

    @pytest.mark.asyncio
    async def test_get_item_not_found(
        self, menu_service: MenuService, mock_repository: MagicMock, mock_item_id: str
    ) -> None:
        """Test fetching an unknown item."""
        mock_repository.find_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await menu_service.get_item(mock_item_id)

    @pytest.mark.asyncio
    async def test_get_item_invalid_id(
        self, menu_service: MenuService, mock_repository: MagicMock
    ) -> None:
        """Test that a malformed id is rejected before lookup."""
        with pytest.raises(ValidationError):
            await menu_service.get_item("not-an-id")

        mock_repository.find_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_item_removes_files(
        self,
        menu_service: MenuService,
        mock_repository: MagicMock,
        file_store: LocalFileStore,
        mock_item_id: str,
    ) -> None:
        """Test that deleting an item removes both attachments."""
        image = file_store.store(b"jpeg", "pizza.jpg")
        model = file_store.store(b"gltf", "pizza.glb")
        mock_repository.delete_by_id.return_value = MenuItem(
            id=mock_item_id,
            name="Pizza",
            price=Decimal("10"),
            description="Cheesy",
            image=image,
            model=model,
        )

        deleted = await menu_service.delete_item(mock_item_id)

        assert deleted.id == mock_item_id
        assert not file_store.exists(image)
        assert not file_store.exists(model)
        mock_repository.delete_by_id.assert_called_once_with(mock_item_id)

    @pytest.mark.asyncio
    async def test_delete_item_upper_case_id(
        self, menu_service: MenuService, mock_repository: MagicMock, mock_item_id: str
    ) -> None:
        """Test that an upper-case id deletes the record stored under the lower-case key."""
        mock_repository.delete_by_id.return_value = MenuItem(
            id=mock_item_id, name="Pizza", price=Decimal("10"), description="Cheesy"
        )

        deleted = await menu_service.delete_item(mock_item_id.upper())

        assert deleted.id == mock_item_id
        mock_repository.delete_by_id.assert_called_once_with(mock_item_id)

    @pytest.mark.asyncio
    async def test_delete_item_without_files(
        self, mock_repository: MagicMock, mock_item_id: str
    ) -> None:
        """Test that items without attachments touch no files."""
        mock_store = MagicMock(spec=LocalFileStore)
        service = MenuService(repository=mock_repository, file_store=mock_store)
        mock_repository.delete_by_id.return_value = MenuItem(
            id=mock_item_id, name="Pizza", price=Decimal("10"), description="Cheesy"
        )

        await service.delete_item(mock_item_id)

        mock_store.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_item_tolerates_missing_files(
        self, menu_service: MenuService, mock_repository: MagicMock, mock_menu_item: MenuItem
    ) -> None:
        """Test that already-absent files do not fail the deletion."""
        mock_repository.delete_by_id.return_value = mock_menu_item

        deleted = await menu_service.delete_item(mock_menu_item.id)

        assert deleted == mock_menu_item

    @pytest.mark.asyncio
    async def test_delete_item_file_failure_is_not_fatal(
        self, mock_repository: MagicMock, mock_menu_item: MenuItem
    ) -> None:
        """Test that a failed file removal still reports the record as deleted."""
        mock_store = MagicMock(spec=LocalFileStore)
        mock_store.delete.side_effect = [StorageError("permission denied"), True]
        service = MenuService(repository=mock_repository, file_store=mock_store)
        mock_repository.delete_by_id.return_value = mock_menu_item

        deleted = await service.delete_item(mock_menu_item.id)

        assert deleted == mock_menu_item
        assert mock_store.delete.call_count == 2

    @pytest.mark.asyncio
    async def test_delete_item_not_found(
        self, mock_repository: MagicMock, mock_item_id: str
    ) -> None:
        """Test that an unknown id raises NotFoundError and removes no files."""
        mock_store = MagicMock(spec=LocalFileStore)
        service = MenuService(repository=mock_repository, file_store=mock_store)
        mock_repository.delete_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.delete_item(mock_item_id)

        mock_store.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_item_invalid_id(
        self, menu_service: MenuService, mock_repository: MagicMock
    ) -> None:
        """Test that a malformed id is a validation error, not a miss."""
        with pytest.raises(ValidationError, match="Invalid menu ID"):
            await menu_service.delete_item("507f1f77bcf86cd799439011")

        mock_repository.delete_by_id.assert_not_called()
