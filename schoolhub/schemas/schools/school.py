# schoolhub/schemas/schools/school.py
import re
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

# File validation constants
MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
ACCEPTED_IMAGE_TYPES = ["image/jpeg", "image/jpg", "image/png", "image/webp"]

PHONE_NUMBER_REGEX = re.compile(r"\+?[\d\s\-()]{7,20}", re.ASCII)
EMAIL_REGEX = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

PHONE_MESSAGE = "Please enter a valid phone number (e.g., +1-234-567-8900 or (234) 567-8900)"
EMAIL_MESSAGE = "Please enter a valid email address"

SCHOOL_FIELDS = ("name", "address", "city", "state", "contact", "email_id", "image")


def validate_phone_number(phone: str) -> bool:
    return PHONE_NUMBER_REGEX.fullmatch(phone.strip()) is not None


def validate_email(email: str) -> bool:
    return EMAIL_REGEX.fullmatch(email.strip().lower()) is not None


def validate_image_file(size: int, content_type: Optional[str]) -> Tuple[bool, Optional[str]]:
    if size > MAX_FILE_SIZE:
        return False, "File size must be less than 5MB"
    if content_type not in ACCEPTED_IMAGE_TYPES:
        return False, "Only JPEG, PNG, and WebP images are allowed"
    return True, None


def _fail(message: str):
    raise PydanticCustomError("school_field", message)


def _required_text(value: Any, required_message: str) -> str:
    if not isinstance(value, str):
        _fail(required_message)
    return value.strip()


def _bounded(value: Any, label: str, min_length: int, max_length: int) -> str:
    text = _required_text(value, f"{label} is required")
    if len(text) < min_length:
        _fail(f"{label} must be at least {min_length} characters")
    if len(text) > max_length:
        _fail(f"{label} must not exceed {max_length} characters")
    return text


class SchoolFields(BaseModel):
    """Shared field rules. Every field reports at most one message."""

    model_config = ConfigDict(extra="ignore", validate_default=True)

    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def _name(cls, v):
        return _bounded(v, "School name", 2, 255)

    @field_validator("address", mode="before", check_fields=False)
    @classmethod
    def _address(cls, v):
        return _bounded(v, "Address", 5, 500)

    @field_validator("city", mode="before", check_fields=False)
    @classmethod
    def _city(cls, v):
        return _bounded(v, "City", 2, 100)

    @field_validator("state", mode="before", check_fields=False)
    @classmethod
    def _state(cls, v):
        return _bounded(v, "State", 2, 100)

    @field_validator("contact", mode="before", check_fields=False)
    @classmethod
    def _contact(cls, v):
        phone = _required_text(v, "Contact number is required")
        if not phone:
            _fail("Contact number is required")
        if not validate_phone_number(phone):
            _fail(PHONE_MESSAGE)
        return phone

    @field_validator("email_id", mode="before", check_fields=False)
    @classmethod
    def _email(cls, v):
        email = _required_text(v, "Email is required").lower()
        if not email:
            _fail("Email is required")
        if not validate_email(email):
            _fail(EMAIL_MESSAGE)
        return email

    @field_validator("image", mode="before", check_fields=False)
    @classmethod
    def _image(cls, v):
        if v is None:
            return None
        if not isinstance(v, str):
            _fail("Image must be a file path")
        return v.strip() or None


class SchoolCreate(SchoolFields):
    # Defaults route missing keys through the validators above
    name: str = None
    address: str = None
    city: str = None
    state: str = None
    contact: str = None
    email_id: str = None
    image: Optional[str] = None


class SchoolPatch(SchoolFields):
    # Unset fields keep their default and skip validation
    model_config = ConfigDict(extra="ignore", validate_default=False)

    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    contact: Optional[str] = None
    email_id: Optional[str] = None
    image: Optional[str] = None


class SchoolResponse(BaseModel):
    id: int
    name: str
    address: str
    city: str
    state: str
    contact: str
    email_id: str
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime


@dataclass
class SchoolUpdate:
    """Partial update: only fields that are not None are written."""

    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    contact: Optional[str] = None
    email_id: Optional[str] = None
    image: Optional[str] = None

    def changes(self) -> Iterator[Tuple[str, str]]:
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                yield f.name, value

    def is_empty(self) -> bool:
        return next(self.changes(), None) is None


@dataclass
class ValidationResult:
    success: bool
    data: Any = None
    errors: Dict[str, str] = field(default_factory=dict)


def format_validation_errors(error: ValidationError) -> Dict[str, str]:
    formatted: Dict[str, str] = {}
    for issue in error.errors():
        path = ".".join(str(p) for p in issue["loc"])
        formatted.setdefault(path, issue["msg"])
    return formatted


def validate_school_data(data: Any) -> ValidationResult:
    if not isinstance(data, dict):
        data = {}
    try:
        return ValidationResult(success=True, data=SchoolCreate.model_validate(data))
    except ValidationError as e:
        return ValidationResult(success=False, errors=format_validation_errors(e))


def validate_school_update(data: Dict[str, Any]) -> ValidationResult:
    """Validate only the keys present; None values count as absent."""
    present = {k: v for k, v in data.items() if k in SCHOOL_FIELDS and v is not None}
    try:
        patch = SchoolPatch.model_validate(present)
    except ValidationError as e:
        return ValidationResult(success=False, errors=format_validation_errors(e))
    return ValidationResult(success=True, data=SchoolUpdate(**patch.model_dump(include=set(present))))


def get_field_error(errors: Dict[str, str], field_name: str) -> Optional[str]:
    return errors.get(field_name)


def has_field_error(errors: Dict[str, str], field_name: str) -> bool:
    return bool(errors.get(field_name))


def format_error_message(error: str) -> str:
    return error[:1].upper() + error[1:]


def get_error_messages(errors: Dict[str, str]) -> List[str]:
    return [format_error_message(e) for e in errors.values()]


def has_any_errors(errors: Dict[str, str]) -> bool:
    return len(errors) > 0
