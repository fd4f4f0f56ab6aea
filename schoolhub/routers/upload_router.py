from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile
import logging

from ..core.config import settings
from ..application.ports.storage_repo import UploadedImage
from ..application.services.upload_service import UploadService, MAX_SIZE_LABEL
from ..exceptions import APIException
from ..schemas.common.common import UploadResponse, UploadedFileInfo, UploadLimits
from .deps import get_upload_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["Upload"])


@router.post("", response_model=UploadResponse, status_code=201)
def upload_file(
    file: Optional[UploadFile] = File(None),
    service: UploadService = Depends(get_upload_service),
):
    if file is None:
        raise APIException(status_code=400, detail="No file provided")

    data = file.file.read()
    stored = service.upload(UploadedImage(data=data, content_type=file.content_type, filename=file.filename))

    logger.info(f"Uploaded {file.filename} as {stored.filename}")
    return UploadResponse(
        message="File uploaded successfully",
        data=UploadedFileInfo(
            filename=stored.filename,
            originalName=stored.original_name or "",
            path=stored.path,
            size=stored.size,
            type=stored.content_type,
            url=f"{settings.BASE_URL.rstrip('/')}{stored.path}",
        ),
    )


@router.get("", response_model=UploadLimits)
def upload_info():
    return UploadLimits(
        message="File upload endpoint",
        methods=["POST"],
        maxFileSize=MAX_SIZE_LABEL,
        allowedTypes=settings.ALLOWED_IMAGE_TYPES,
        uploadPath=f"{settings.IMAGE_ROUTE_PREFIX.rstrip('/')}/",
    )
