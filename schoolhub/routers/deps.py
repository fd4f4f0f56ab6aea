from fastapi import Depends

from ..core.config import settings
from ..db.session import engine
from ..application.services.school_service import SchoolService
from ..application.services.upload_service import UploadService
from ..infrastructure.persistence.sqlalchemy.repositories.school_repository_sql import SqlSchoolRepository
from ..infrastructure.storage.local_storage import LocalImageStorage


def get_school_repository() -> SqlSchoolRepository:
    return SqlSchoolRepository(engine)


def get_image_storage() -> LocalImageStorage:
    return LocalImageStorage()


def get_school_service(
    repo: SqlSchoolRepository = Depends(get_school_repository),
    storage: LocalImageStorage = Depends(get_image_storage),
) -> SchoolService:
    return SchoolService(repo=repo, storage=storage)


def get_upload_service(storage: LocalImageStorage = Depends(get_image_storage)) -> UploadService:
    return UploadService(storage=storage, allowed_types=settings.ALLOWED_IMAGE_TYPES)
