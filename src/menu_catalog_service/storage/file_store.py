"""Filesystem-backed store for menu item attachments.

Uploaded images and 3D models are written under a single storage root and
addressed by references of the form ``<url_prefix>/<name>``, which the API
serves directly as static file URLs.
"""

import logging
import uuid
from pathlib import Path, PurePosixPath

from menu_catalog_service.models.errors import StorageError

logger = logging.getLogger(__name__)


class LocalFileStore:
    """Stores attachment bytes on local disk under a fixed root directory."""

    def __init__(self, root: str | Path, url_prefix: str = "/uploads") -> None:
        """Initialize the file store, creating the root directory if needed.

        Args:
            root: Directory that holds all stored files
            url_prefix: Public path prefix prepended to stored file names
        """
        self.root = Path(root)
        self.url_prefix = "/" + url_prefix.strip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def store(self, content: bytes, original_name: str) -> str:
        """Write bytes under a freshly generated name.

        Args:
            content: File bytes
            original_name: Client-supplied file name, used only for its extension

        Returns:
            Reference to the stored file

        Raises:
            StorageError: If the file could not be written
        """
        name = f"{uuid.uuid4().hex}{PurePosixPath(original_name).suffix.lower()}"
        path = self.root / name

        try:
            # "xb" refuses to overwrite an existing file
            with open(path, "xb") as fh:
                fh.write(content)
        except OSError as e:
            logger.error(f"Failed to store file {original_name}: {e}")
            raise StorageError(f"Failed to store file {original_name}") from e

        reference = f"{self.url_prefix}/{name}"
        logger.info(f"Stored file {reference} ({len(content)} bytes)")
        return reference

    def path_for(self, reference: str) -> Path:
        """Resolve a reference to its path inside the storage root."""
        # Only the final component is used so a reference never escapes the root
        return self.root / PurePosixPath(reference).name

    def exists(self, reference: str) -> bool:
        """Check whether the referenced file is present."""
        return self.path_for(reference).is_file()

    def delete(self, reference: str) -> bool:
        """Remove a stored file.

        Args:
            reference: Reference returned by store()

        Returns:
            True if the file was removed, False if it was already absent

        Raises:
            StorageError: If the file exists but could not be removed
        """
        path = self.path_for(reference)

        try:
            path.unlink()
        except FileNotFoundError:
            logger.info(f"File {reference} already absent, nothing to delete")
            return False
        except OSError as e:
            logger.error(f"Failed to delete file {reference}: {e}")
            raise StorageError(f"Failed to delete file {reference}") from e

        logger.info(f"Deleted file {reference}")
        return True
