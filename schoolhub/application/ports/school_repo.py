from dataclasses import dataclass
from typing import List, Optional, Protocol
from datetime import datetime

from ...schemas.schools.school import SchoolCreate, SchoolUpdate


@dataclass
class SchoolDto:
    id: int
    name: str
    address: str
    city: str
    state: str
    contact: str
    email_id: str
    image: Optional[str]
    created_at: datetime
    updated_at: datetime


class SchoolRepository(Protocol):
    def create(self, data: SchoolCreate) -> SchoolDto:
        ...

    def get_by_id(self, school_id: int) -> SchoolDto:
        ...

    def list_all(self) -> List[SchoolDto]:
        ...

    def update(self, school_id: int, changes: SchoolUpdate) -> SchoolDto:
        ...

    def delete(self, school_id: int) -> bool:
        ...

    def list_by_city(self, city: str) -> List[SchoolDto]:
        ...

    def list_by_state(self, state: str) -> List[SchoolDto]:
        ...
