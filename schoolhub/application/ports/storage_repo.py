from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class UploadedImage:
    data: bytes
    content_type: Optional[str]
    filename: Optional[str]

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class StoredImage:
    filename: str
    original_name: Optional[str]
    path: str
    size: int
    content_type: str


class StorageRepository(Protocol):
    def validate(self, image: UploadedImage) -> None:
        ...

    def save(self, image: UploadedImage) -> StoredImage:
        ...
