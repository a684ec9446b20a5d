"""Shared dependency factory for the Lambda handler.

Dependencies are created once per Lambda container and reused across
invocations to keep warm starts cheap.
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

# Module-level caches for Lambda container reuse
_dynamodb_resource: Any | None = None
_file_store: LocalFileStore | None = None
_menu_service: MenuService | None = None
_fastapi_app: FastAPI | None = None


def get_dynamodb_resource() -> Any:
    """Create or retrieve cached DynamoDB resource.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    global _dynamodb_resource

    if _dynamodb_resource is not None:
        return _dynamodb_resource

    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        _dynamodb_resource = boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        )
    else:
        logger.info(f"Using AWS DynamoDB in region {region}")
        _dynamodb_resource = boto3.resource("dynamodb", region_name=region)

    return _dynamodb_resource


def get_file_store() -> LocalFileStore:
    """Create or retrieve cached attachment file store.

    Lambda only allows writes under /tmp, which is the default root here.
    """
    global _file_store

    if _file_store is not None:
        return _file_store

    _file_store = LocalFileStore(
        root=os.getenv("UPLOAD_DIR", "/tmp/uploads"),
        url_prefix=os.getenv("UPLOAD_URL_PREFIX", "/uploads"),
    )

    logger.info(f"File store initialized at {_file_store.root}")
    return _file_store


def get_menu_service() -> MenuService:
    """Create or retrieve cached menu service.

    Returns:
        Configured MenuService instance
    """
    global _menu_service

    if _menu_service is not None:
        return _menu_service

    table_name = os.getenv("DYNAMODB_MENU_TABLE", "restaurant-menu-items")
    repository = MenuItemRepository(dynamodb_resource=get_dynamodb_resource(), table_name=table_name)

    _menu_service = MenuService(repository=repository, file_store=get_file_store())

    logger.info("Menu service initialized")
    return _menu_service


def get_fastapi_app() -> FastAPI:
    """Create or retrieve cached FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    global _fastapi_app

    if _fastapi_app is not None:
        return _fastapi_app

    file_store = get_file_store()
    origins = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()]

    _fastapi_app = create_app(
        menu_service=get_menu_service(),
        upload_dir=str(file_store.root),
        upload_url_prefix=file_store.url_prefix,
        allowed_origins=origins or None,
    )
    setup_observability(_fastapi_app)

    logger.info("FastAPI application initialized")
    return _fastapi_app


def initialize_lambda_environment() -> None:
    """Configure logging once during Lambda cold start."""
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Lambda environment initialized")
