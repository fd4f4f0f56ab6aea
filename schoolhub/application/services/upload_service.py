from dataclasses import dataclass
import logging

from ..ports.storage_repo import StorageRepository, StoredImage, UploadedImage
from ...exceptions import APIException, FileTooLarge, UnsupportedFileType, StorageWriteFailed
from ...infrastructure.storage.local_storage import extension_for

logger = logging.getLogger(__name__)

MAX_SIZE_LABEL = "5MB"


@dataclass
class UploadService:
    storage: StorageRepository
    allowed_types: list

    def upload(self, image: UploadedImage) -> StoredImage:
        try:
            self.storage.validate(image)
        except FileTooLarge:
            raise APIException(
                status_code=400,
                detail=f"File size too large. Maximum size is {MAX_SIZE_LABEL}",
                extra={
                    "maxSize": MAX_SIZE_LABEL,
                    "receivedSize": f"{image.size / (1024 * 1024):.2f}MB",
                },
            )
        except UnsupportedFileType:
            raise APIException(
                status_code=400,
                detail="Invalid file type. Only JPEG, PNG, and WebP images are allowed",
                extra={"allowedTypes": list(self.allowed_types)},
            )

        if not extension_for(image.filename):
            raise APIException(status_code=400, detail="Invalid file name")

        try:
            return self.storage.save(image)
        except StorageWriteFailed as e:
            logger.error(f"Failed to save file: {e.message}")
            raise APIException(status_code=500, detail="Failed to save file to server")
