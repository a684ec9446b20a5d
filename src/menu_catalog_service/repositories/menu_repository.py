"""DynamoDB repository for menu items.

Expected misses (unknown id) are reported as None. Store failures are logged
and raised as PersistenceError so the API can answer with a 500 rather than a
misleading empty result.
"""

import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

from menu_catalog_service.models.errors import PersistenceError
from menu_catalog_service.models.menu_models import MenuItem

logger = logging.getLogger(__name__)


class MenuItemRepository:
    """Repository for menu item CRUD operations.

    Manages menu item records in DynamoDB with id as partition key.
    """

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)

    @staticmethod
    def is_valid_id(item_id: str) -> bool:
        """Check that an id has the canonical UUID shape the repository assigns."""
        try:
            return str(uuid.UUID(item_id)) == item_id.lower()
        except (ValueError, AttributeError, TypeError):
            return False

    def create(
        self,
        name: str,
        price: Any,
        description: str,
        image: str = "",
        model: str = "",
    ) -> MenuItem:
        """Persist a new menu item under a freshly assigned id.

        Args:
            name: Item name
            price: Item price
            description: Item description
            image: Reference to the stored image, empty if none
            model: Reference to the stored 3D model, empty if none

        Returns:
            The stored MenuItem including its generated id

        Raises:
            PersistenceError: If the item could not be written
        """
        item = MenuItem(
            id=str(uuid.uuid4()),
            name=name,
            price=price,
            description=description,
            image=image,
            model=model,
            created_at=datetime.now(UTC),
        )

        try:
            self.table.put_item(
                Item=item.to_dynamodb_item(),
                ConditionExpression="attribute_not_exists(id)",
            )
        except ClientError as e:
            logger.error(f"Failed to create menu item: {e}")
            raise PersistenceError("Failed to create menu item") from e

        return item

    def find_by_substring(self, query: str | None) -> list[MenuItem]:
        """List items whose name contains query, ignoring case.

        An empty or missing query matches every item.

        Args:
            query: Substring to look for in item names

        Returns:
            list: Matching MenuItem objects (empty list if none found)

        Raises:
            PersistenceError: If the scan failed
        """
        scan_kwargs: dict[str, Any] = {}
        if query:
            scan_kwargs["FilterExpression"] = Attr("name_lower").contains(query.lower())

        items: list[MenuItem] = []
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                items.extend(MenuItem.from_dynamodb_item(i) for i in response.get("Items", []))

                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key

        except ClientError as e:
            logger.error(f"Failed to search menu items: {e}")
            raise PersistenceError("Failed to search menu items") from e

        return items

    def find_by_id(self, item_id: str) -> MenuItem | None:
        """Retrieve a menu item by id.

        Args:
            item_id: Menu item identifier

        Returns:
            MenuItem if found, None otherwise

        Raises:
            PersistenceError: If the lookup failed
        """
        try:
            response = self.table.get_item(Key={"id": item_id})
        except ClientError as e:
            logger.error(f"Failed to get menu item {item_id}: {e}")
            raise PersistenceError("Failed to get menu item") from e

        if "Item" not in response:
            return None

        return MenuItem.from_dynamodb_item(response["Item"])

    def delete_by_id(self, item_id: str) -> MenuItem | None:
        """Delete a menu item and return what was stored.

        Args:
            item_id: Menu item identifier

        Returns:
            The deleted MenuItem, or None if no item had this id

        Raises:
            PersistenceError: If the delete failed
        """
        try:
            response = self.table.delete_item(Key={"id": item_id}, ReturnValues="ALL_OLD")
        except ClientError as e:
            logger.error(f"Failed to delete menu item {item_id}: {e}")
            raise PersistenceError("Failed to delete menu item") from e

        if "Attributes" not in response:
            return None

        return MenuItem.from_dynamodb_item(response["Attributes"])
