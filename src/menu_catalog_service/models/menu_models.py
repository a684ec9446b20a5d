"""Menu data models.

These models represent menu items as stored in DynamoDB and returned by the API,
plus the typed input accepted by the "add item" operation.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_serializer


class MenuItem(BaseModel):
    """Menu item model."""

    id: str = Field(..., description="Unique identifier for the menu item")
    name: str = Field(..., description="Item name", min_length=1)
    price: Decimal = Field(..., description="Item price")
    description: str = Field(..., description="Item description", min_length=1)
    image: str = Field(default="", description="Reference to the stored image file")
    model: str = Field(default="", description="Reference to the stored 3D model file")
    created_at: datetime | None = Field(None, exclude=True, description="Creation timestamp")

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> int | float:
        """Serialize price as a JSON number."""
        if price == price.to_integral_value():
            return int(price)
        return float(price)

    @property
    def file_references(self) -> list[str]:
        """Non-empty attachment references held by this item."""
        return [ref for ref in (self.image, self.model) if ref]

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "name_lower": self.name.lower(),
            "price": self.price,
            "description": self.description,
            "image": self.image,
            "model": self.model,
        }

        if self.created_at is not None:
            item["created_at"] = self.created_at.isoformat()

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "MenuItem":
        """Create MenuItem from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            MenuItem: Parsed model instance
        """
        data: dict[str, Any] = {
            "id": item["id"],
            "name": item["name"],
            "price": Decimal(str(item["price"])),
            "description": item["description"],
            "image": item.get("image", ""),
            "model": item.get("model", ""),
        }

        if "created_at" in item:
            data["created_at"] = datetime.fromisoformat(item["created_at"])

        return cls(**data)


@dataclass
class UploadedFile:
    """An uploaded attachment as received from the client.

    Attributes:
        filename: Original file name supplied by the client
        content: Raw file bytes
    """

    filename: str
    content: bytes


@dataclass
class MenuItemCreate:
    """Input for the "add item" operation.

    Required fields are kept as raw optional strings so presence can be
    checked by the service before anything is written.
    """

    name: str | None = None
    price: str | None = None
    description: str | None = None
    image: UploadedFile | None = None
    model: UploadedFile | None = None
