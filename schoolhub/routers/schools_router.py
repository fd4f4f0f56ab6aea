from dataclasses import asdict
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
import logging

from ..application.ports.school_repo import SchoolDto
from ..application.ports.storage_repo import UploadedImage
from ..application.services.school_service import SchoolService
from ..schemas.common.common import ErrorResponse, MessageResponse, SchoolEnvelope, SchoolListResponse
from ..schemas.schools.school import SchoolResponse
from .deps import get_school_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/schools",
    tags=["Schools"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def _to_response(school: SchoolDto) -> SchoolResponse:
    return SchoolResponse(**asdict(school))


def _read_image(image: Optional[UploadFile]) -> Optional[UploadedImage]:
    if image is None:
        return None
    data = image.file.read()
    image.file.seek(0)
    return UploadedImage(data=data, content_type=image.content_type, filename=image.filename)


@router.post("", response_model=SchoolEnvelope, status_code=201)
def create_school(
    name: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    contact: Optional[str] = Form(None),
    email_id: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: SchoolService = Depends(get_school_service),
):
    fields = {
        "name": name,
        "address": address,
        "city": city,
        "state": state,
        "contact": contact,
        "email_id": email_id,
    }
    try:
        school = service.create(fields, _read_image(image))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating school: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
    return SchoolEnvelope(message="School created successfully", data=_to_response(school))


@router.get("", response_model=SchoolListResponse)
def list_schools(
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    service: SchoolService = Depends(get_school_service),
):
    try:
        schools = service.list_schools(city=city, state=state)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching schools: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
    return SchoolListResponse(data=[_to_response(s) for s in schools], count=len(schools))


@router.get("/{school_id}", response_model=SchoolEnvelope)
def get_school(school_id: int, service: SchoolService = Depends(get_school_service)):
    return SchoolEnvelope(data=_to_response(service.get(school_id)))


@router.patch("/{school_id}", response_model=SchoolEnvelope)
def update_school(
    school_id: int,
    name: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    contact: Optional[str] = Form(None),
    email_id: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: SchoolService = Depends(get_school_service),
):
    fields = {
        "name": name,
        "address": address,
        "city": city,
        "state": state,
        "contact": contact,
        "email_id": email_id,
    }
    school = service.update(school_id, fields, _read_image(image))
    return SchoolEnvelope(message="School updated successfully", data=_to_response(school))


@router.delete("/{school_id}", response_model=MessageResponse)
def delete_school(school_id: int, service: SchoolService = Depends(get_school_service)):
    service.delete(school_id)
    return MessageResponse(message="School deleted successfully")
