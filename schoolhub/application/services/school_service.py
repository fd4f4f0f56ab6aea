from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from ..ports.school_repo import SchoolRepository, SchoolDto
from ..ports.storage_repo import StorageRepository, UploadedImage
from ...exceptions import (
    APIException,
    DatabaseError,
    SchoolNotFound,
    FileStorageError,
)
from ...schemas.schools.school import validate_school_data, validate_school_update

logger = logging.getLogger(__name__)


@dataclass
class SchoolService:
    repo: SchoolRepository
    storage: StorageRepository

    def _store_image(self, image: Optional[UploadedImage]) -> Optional[str]:
        if image is None or image.size == 0:
            return None
        try:
            return self.storage.save(image).path
        except FileStorageError as e:
            # The class decides the status; its detail stays out of the response
            if e.status_code >= 500:
                logger.error(f"Failed to save image file: {e.message}")
            raise APIException(status_code=e.status_code, detail=e.default_message)

    def create(self, fields: Dict[str, Any], image: Optional[UploadedImage] = None) -> SchoolDto:
        # The image is written before validation; a rejected form leaves it orphaned
        image_path = self._store_image(image)

        validation = validate_school_data({**fields, "image": image_path})
        if not validation.success:
            raise APIException(status_code=400, detail="Validation failed", details=validation.errors)

        try:
            return self.repo.create(validation.data)
        except DatabaseError as e:
            logger.error(f"Error creating school: {e.message}")
            raise APIException(status_code=500, detail=f"Database error: {e.message}")

    def list_schools(self, city: Optional[str] = None, state: Optional[str] = None) -> List[SchoolDto]:
        try:
            if city:
                return self.repo.list_by_city(city)
            if state:
                return self.repo.list_by_state(state)
            return self.repo.list_all()
        except DatabaseError as e:
            logger.error(f"Error fetching schools: {e.message}")
            raise APIException(status_code=500, detail=f"Database error: {e.message}")

    def get(self, school_id: int) -> SchoolDto:
        try:
            return self.repo.get_by_id(school_id)
        except SchoolNotFound:
            raise APIException(status_code=404, detail="School not found")
        except DatabaseError as e:
            raise APIException(status_code=500, detail=f"Database error: {e.message}")

    def update(self, school_id: int, fields: Dict[str, Any], image: Optional[UploadedImage] = None) -> SchoolDto:
        image_path = self._store_image(image)
        if image_path:
            fields = {**fields, "image": image_path}

        validation = validate_school_update(fields)
        if not validation.success:
            raise APIException(status_code=400, detail="Validation failed", details=validation.errors)
        if validation.data.is_empty():
            raise APIException(status_code=400, detail="No fields to update")

        try:
            return self.repo.update(school_id, validation.data)
        except SchoolNotFound:
            raise APIException(status_code=404, detail="School not found")
        except DatabaseError as e:
            logger.error(f"Error updating school {school_id}: {e.message}")
            raise APIException(status_code=500, detail=f"Database error: {e.message}")

    def delete(self, school_id: int) -> None:
        try:
            removed = self.repo.delete(school_id)
        except DatabaseError as e:
            logger.error(f"Error deleting school {school_id}: {e.message}")
            raise APIException(status_code=500, detail=f"Database error: {e.message}")
        if not removed:
            raise APIException(status_code=404, detail="School not found")
