import os
import re
import uuid
import logging
from typing import List, Optional

from ...core.config import settings
from ...application.ports.storage_repo import StorageRepository, UploadedImage, StoredImage
from ...exceptions import FileTooLarge, UnsupportedFileType, StorageWriteFailed

logger = logging.getLogger(__name__)

_EXTENSION_RE = re.compile(r"[a-z0-9]{1,10}")

_MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def extension_for(filename: Optional[str]) -> Optional[str]:
    """Lower-cased extension of an uploaded filename, or None if it has no usable one."""
    if not filename:
        return None
    ext = os.path.splitext(os.path.basename(filename))[1].lstrip(".").lower()
    if not _EXTENSION_RE.fullmatch(ext):
        return None
    return ext


class LocalImageStorage(StorageRepository):
    """Writes accepted images under a public directory served at route_prefix."""

    def __init__(
        self,
        root_dir: Optional[str] = None,
        route_prefix: Optional[str] = None,
        max_size: Optional[int] = None,
        allowed_types: Optional[List[str]] = None,
    ) -> None:
        self.root_dir = root_dir or settings.IMAGE_UPLOAD_DIR
        self.route_prefix = (route_prefix or settings.IMAGE_ROUTE_PREFIX).rstrip("/")
        self.max_size = max_size if max_size is not None else settings.MAX_FILE_SIZE
        self.allowed_types = allowed_types or settings.ALLOWED_IMAGE_TYPES

    def validate(self, image: UploadedImage) -> None:
        if image.size > self.max_size:
            raise FileTooLarge(f"File too large: {image.size} bytes (max {self.max_size})")
        if image.content_type not in self.allowed_types:
            raise UnsupportedFileType(f"File type {image.content_type} not allowed")

    def save(self, image: UploadedImage) -> StoredImage:
        self.validate(image)

        ext = extension_for(image.filename) or _MIME_EXTENSIONS.get(image.content_type, "bin")
        new_filename = f"{uuid.uuid4()}.{ext}"

        try:
            os.makedirs(self.root_dir, exist_ok=True)
            file_path = os.path.join(self.root_dir, new_filename)
            # "x" never clobbers an existing file
            with open(file_path, "xb") as f:
                f.write(image.data)
        except OSError as e:
            logger.error(f"Error saving image: {e}")
            raise StorageWriteFailed(f"Failed to write {new_filename}: {e}") from e

        logger.info(f"Saved image {new_filename} ({image.size} bytes)")
        return StoredImage(
            filename=new_filename,
            original_name=image.filename,
            path=f"{self.route_prefix}/{new_filename}",
            size=image.size,
            content_type=image.content_type,
        )
