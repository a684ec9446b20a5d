"""Custom metrics for the menu catalog service."""

from opentelemetry import metrics

meter = metrics.get_meter("menu-catalog-svc")

menu_items_created_counter = meter.create_counter(
    name="menu_items_created_total",
    description="Total number of menu items created",
    unit="1",
)

menu_items_deleted_counter = meter.create_counter(
    name="menu_items_deleted_total",
    description="Total number of menu items deleted",
    unit="1",
)

menu_searches_counter = meter.create_counter(
    name="menu_searches_total",
    description="Total number of menu list/search requests",
    unit="1",
)

file_cleanup_failure_counter = meter.create_counter(
    name="menu_file_cleanup_failures_total",
    description="Attachment files that could not be removed after item deletion",
    unit="1",
)

upload_size_histogram = meter.create_histogram(
    name="menu_upload_size_bytes",
    description="Size of uploaded menu item attachments",
    unit="By",
)


def record_item_created(attachment_count: int) -> None:
    """Record a created menu item.

    Args:
        attachment_count: Number of files stored with the item (0-2)
    """
    menu_items_created_counter.add(1, {"attachments": attachment_count})


def record_item_deleted() -> None:
    """Record a deleted menu item."""
    menu_items_deleted_counter.add(1)


def record_search(filtered: bool) -> None:
    """Record a list/search request.

    Args:
        filtered: Whether a non-empty query narrowed the results
    """
    menu_searches_counter.add(1, {"filtered": filtered})


def record_file_cleanup_failure(kind: str) -> None:
    """Record an attachment left behind after its item was deleted.

    Args:
        kind: Attachment kind ("image" or "model")
    """
    file_cleanup_failure_counter.add(1, {"kind": kind})


def record_upload(kind: str, size_bytes: int) -> None:
    """Record an uploaded attachment.

    Args:
        kind: Attachment kind ("image" or "model")
        size_bytes: Size of the uploaded file
    """
    upload_size_histogram.record(size_bytes, {"kind": kind})
