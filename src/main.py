"""Main application entry point for the menu catalog service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os
from typing import Any

import boto3
from fastapi import FastAPI

from menu_catalog_service.handlers.api_handler import create_app
from menu_catalog_service.observability import configure_logging, setup_observability
from menu_catalog_service.repositories.menu_repository import MenuItemRepository
from menu_catalog_service.services.menu_service import MenuService
from menu_catalog_service.storage.file_store import LocalFileStore

logger = logging.getLogger(__name__)


def get_dynamodb_resource() -> Any:
    """Create DynamoDB resource with appropriate configuration.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        # Local DynamoDB takes credentials from the environment
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        return boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        )

    logger.info(f"Using AWS DynamoDB in region {region}")
    return boto3.resource("dynamodb", region_name=region)


def get_allowed_origins() -> list[str]:
    """Read CORS origins from ALLOWED_ORIGINS (comma separated, "*" if unset)."""
    origins = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()]
    return origins or ["*"]


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the DynamoDB resource and menu item repository
    3. Creates the attachment file store
    4. Creates the menu service
    5. Creates the FastAPI app and sets up observability

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing menu catalog service...")

    table_name = os.getenv("DYNAMODB_MENU_TABLE", "restaurant-menu-items")
    repository = MenuItemRepository(dynamodb_resource=get_dynamodb_resource(), table_name=table_name)
    logger.info(f"Menu item repository configured - table: {table_name}")

    upload_dir = os.getenv("UPLOAD_DIR", "uploads")
    upload_url_prefix = os.getenv("UPLOAD_URL_PREFIX", "/uploads")
    file_store = LocalFileStore(root=upload_dir, url_prefix=upload_url_prefix)
    logger.info(f"File store configured - root: {upload_dir}, prefix: {file_store.url_prefix}")

    menu_service = MenuService(repository=repository, file_store=file_store)

    app = create_app(
        menu_service=menu_service,
        upload_dir=upload_dir,
        upload_url_prefix=file_store.url_prefix,
        allowed_origins=get_allowed_origins(),
    )

    setup_observability(app)

    logger.info("Menu catalog service initialized successfully")
    return app


# Skip building the real app during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "5000"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting server on {host}:{port}")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
