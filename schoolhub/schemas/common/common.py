# schoolhub/schemas/common/common.py
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from ..schools.school import SchoolResponse

class ErrorResponse(BaseModel):
    error: str
    details: Optional[Dict[str, Any]] = None

class MessageResponse(BaseModel):
    success: bool = True
    message: str

class SchoolEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: SchoolResponse

class SchoolListResponse(BaseModel):
    success: bool = True
    data: List[SchoolResponse]
    count: int

class UploadedFileInfo(BaseModel):
    filename: str
    originalName: str
    path: str
    size: int
    type: str
    url: str

class UploadResponse(BaseModel):
    success: bool = True
    message: str
    data: UploadedFileInfo

class UploadLimits(BaseModel):
    message: str
    methods: List[str]
    maxFileSize: str
    allowedTypes: List[str]
    uploadPath: str
