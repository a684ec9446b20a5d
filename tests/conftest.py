"""Shared pytest fixtures and configuration for all tests."""

import os
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

# Must be set before main / lambda_handler are imported so they skip building the real app
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402

from menu_catalog_service.models.menu_models import MenuItem  # noqa: E402
from menu_catalog_service.storage.file_store import LocalFileStore  # noqa: E402


@pytest.fixture
def mock_item_id() -> str:
    """Fixture providing a well-formed menu item id."""
    return "3f2b8c1e-7a4d-4e9b-9c1a-2d5e6f708192"


@pytest.fixture
def mock_menu_item(mock_item_id: str) -> MenuItem:
    """Fixture providing a stored menu item with both attachments."""
    return MenuItem(
        id=mock_item_id,
        name="Margherita Pizza",
        price=Decimal("12.99"),
        description="Tomato, mozzarella and basil",
        image="/uploads/0a1b2c3d4e5f60718293a4b5c6d7e8f9.jpg",
        model="/uploads/f9e8d7c6b5a4392817065f4e3d2c1b0a.glb",
    )


@pytest.fixture
def mock_dynamodb_items() -> list[dict]:
    """Fixture providing raw DynamoDB menu item records."""
    return [
        {
            "id": "3f2b8c1e-7a4d-4e9b-9c1a-2d5e6f708192",
            "name": "Margherita Pizza",
            "name_lower": "margherita pizza",
            "price": Decimal("12.99"),
            "description": "Tomato, mozzarella and basil",
            "image": "/uploads/0a1b2c3d4e5f60718293a4b5c6d7e8f9.jpg",
            "model": "",
            "created_at": "2024-01-15T10:30:00+00:00",
        },
        {
            "id": "9c0d1e2f-3a4b-4c5d-8e6f-708192a3b4c5",
            "name": "Caesar Salad",
            "name_lower": "caesar salad",
            "price": Decimal("9"),
            "description": "Fresh romaine with caesar dressing",
            "image": "",
            "model": "",
        },
    ]


@pytest.fixture
def mock_dynamodb() -> MagicMock:
    """Create a mock DynamoDB resource."""
    return MagicMock()


@pytest.fixture
def file_store(tmp_path: Path) -> LocalFileStore:
    """Create a LocalFileStore rooted in a temporary directory."""
    return LocalFileStore(root=tmp_path / "uploads")
