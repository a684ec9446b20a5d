"""FastAPI application exposing the menu catalog API."""

import logging

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, Field

from menu_catalog_service.models.errors import MenuCatalogError, ValidationError
from menu_catalog_service.models.menu_models import MenuItem, MenuItemCreate, UploadedFile
from menu_catalog_service.services.menu_service import MenuService

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class MenuCreatedResponse(BaseModel):
    """Response model for a created menu item."""

    message: str
    menu: MenuItem


class MenuDeletedResponse(BaseModel):
    """Response model for a deleted menu item."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    deleted_item: MenuItem = Field(..., alias="deletedItem")


async def _read_upload(upload: UploadFile | None) -> UploadedFile | None:
    # Browsers send an empty part with no filename for an untouched file input
    if upload is None or not upload.filename:
        return None
    return UploadedFile(filename=upload.filename, content=await upload.read())


def create_app(
    menu_service: MenuService,
    upload_dir: str,
    upload_url_prefix: str = "/uploads",
    allowed_origins: list[str] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        menu_service: Service handling the menu item lifecycle
        upload_dir: Directory holding stored attachments, served as static files
        upload_url_prefix: Path prefix the attachments are served under
        allowed_origins: CORS origins (defaults to any origin)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Menu Catalog API",
        description="Manage restaurant menu items with image and 3D model attachments",
        version="1.0.0",
    )

    app.state.menu_service = menu_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MenuCatalogError)
    async def menu_catalog_error_handler(request: Request, exc: MenuCatalogError) -> JSONResponse:
        if exc.http_status >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
            return JSONResponse(status_code=exc.http_status, content={"error": "Internal server error"})
        return JSONResponse(status_code=exc.http_status, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/", response_class=PlainTextResponse, tags=["Health"])
    async def root() -> str:
        """Liveness text for uptime checks."""
        return "Backend is live"

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint.

        Returns:
            Health status indicating service is running
        """
        return HealthResponse(status="healthy")

    @app.post("/api/menu", status_code=201, response_model=MenuCreatedResponse, tags=["Menu"])
    async def add_menu_item(
        name: str | None = Form(None),
        price: str | None = Form(None),
        description: str | None = Form(None),
        image: UploadFile | None = File(None),
        model: UploadFile | None = File(None),
    ) -> MenuCreatedResponse:
        """Add a menu item with optional image and 3D model uploads.

        Returns:
            The stored menu item
        """
        data = MenuItemCreate(
            name=name,
            price=price,
            description=description,
            image=await _read_upload(image),
            model=await _read_upload(model),
        )

        item = await app.state.menu_service.add_item(data)
        return MenuCreatedResponse(message="Menu item added", menu=item)

    @app.get("/api/menu", response_model=list[MenuItem], tags=["Menu"])
    async def list_menu_items(search: str | None = None) -> list[MenuItem]:
        """List menu items, optionally filtered by a name substring.

        Args:
            search: Case-insensitive substring of the item name

        Returns:
            Matching menu items (all items when search is empty)
        """
        items: list[MenuItem] = await app.state.menu_service.search_items(search)
        return items

    @app.get("/api/search", response_model=list[MenuItem], tags=["Menu"])
    async def search_menu_items(query: str | None = None) -> list[MenuItem]:
        """Search menu items by a name substring.

        Args:
            query: Case-insensitive substring of the item name (required)

        Returns:
            Matching menu items

        Raises:
            ValidationError: If query is missing or empty
        """
        if not query:
            raise ValidationError("Search query is required")

        items: list[MenuItem] = await app.state.menu_service.search_items(query)
        return items

    @app.get("/api/menu/{item_id}", response_model=MenuItem, tags=["Menu"])
    async def get_menu_item(item_id: str) -> MenuItem:
        """Fetch one menu item by id."""
        item: MenuItem = await app.state.menu_service.get_item(item_id)
        return item

    @app.delete(
        "/api/menu/{item_id}",
        response_model=MenuDeletedResponse,
        response_model_by_alias=True,
        tags=["Menu"],
    )
    async def delete_menu_item(item_id: str) -> MenuDeletedResponse:
        """Delete a menu item and its attachment files.

        Args:
            item_id: The menu item to delete

        Returns:
            The deleted menu item
        """
        deleted = await app.state.menu_service.delete_item(item_id)
        return MenuDeletedResponse(
            message="Menu item and associated files deleted", deleted_item=deleted
        )

    app.mount(upload_url_prefix, StaticFiles(directory=upload_dir), name="uploads")

    return app
