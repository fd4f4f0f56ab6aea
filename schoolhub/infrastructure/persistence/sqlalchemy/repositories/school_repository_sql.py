import logging
from typing import List

from sqlalchemy import delete, update
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from .....db.models import School
from .....db.models.schools.school import utcnow
from .....exceptions import DatabaseError, SchoolNotFound
from .....application.ports.school_repo import SchoolRepository, SchoolDto
from .....schemas.schools.school import SchoolCreate, SchoolUpdate

logger = logging.getLogger(__name__)


class SqlSchoolRepository(SchoolRepository):
    """The only code path that issues SQL against the schools table.

    Every call runs in its own Session, so the pooled connection goes back to
    the pool on every exit path. Any failure leaves as DatabaseError.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def _to_dto(self, s: School) -> SchoolDto:
        return SchoolDto(
            id=s.id,
            name=s.name,
            address=s.address,
            city=s.city,
            state=s.state,
            contact=s.contact,
            email_id=s.email_id,
            image=s.image,
            created_at=s.created_at,
            updated_at=s.updated_at,
        )

    def _fetch(self, session: Session, school_id: int) -> SchoolDto:
        s = session.exec(select(School).where(School.id == school_id)).first()
        if s is None:
            raise SchoolNotFound(f"School with ID {school_id} not found")
        return self._to_dto(s)

    def create(self, data: SchoolCreate) -> SchoolDto:
        try:
            with Session(self.engine) as session:
                now = utcnow()
                school = School(
                    name=data.name,
                    address=data.address,
                    city=data.city,
                    state=data.state,
                    contact=data.contact,
                    email_id=data.email_id,
                    image=data.image,
                    created_at=now,
                    updated_at=now,
                )
                session.add(school)
                session.commit()
                if school.id is None:
                    raise DatabaseError("Failed to create school: No data returned")
                created = self._fetch(session, school.id)
            logger.info(f"Created school {created.id}")
            return created
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"Error creating school: {e}")
            raise DatabaseError("Failed to create school", e) from e

    def get_by_id(self, school_id: int) -> SchoolDto:
        try:
            with Session(self.engine) as session:
                return self._fetch(session, school_id)
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"Error getting school {school_id}: {e}")
            raise DatabaseError(f"Failed to get school by ID {school_id}", e) from e

    def list_all(self) -> List[SchoolDto]:
        try:
            with Session(self.engine) as session:
                rows = session.exec(
                    select(School).order_by(School.created_at.desc(), School.id.desc())
                ).all()
                return [self._to_dto(r) for r in rows]
        except Exception as e:
            logger.error(f"Error getting all schools: {e}")
            raise DatabaseError("Failed to get all schools", e) from e

    def update(self, school_id: int, changes: SchoolUpdate) -> SchoolDto:
        values = dict(changes.changes())
        if not values:
            raise DatabaseError("No fields to update")
        values["updated_at"] = utcnow()
        try:
            with Session(self.engine) as session:
                result = session.execute(
                    update(School).where(School.id == school_id).values(**values)
                )
                session.commit()
                if result.rowcount == 0:
                    raise SchoolNotFound(f"School with ID {school_id} not found")
                updated = self._fetch(session, school_id)
            logger.info(f"Updated school {school_id}: {sorted(values)}")
            return updated
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"Error updating school {school_id}: {e}")
            raise DatabaseError(f"Failed to update school with ID {school_id}", e) from e

    def delete(self, school_id: int) -> bool:
        # The referenced image file is left on disk
        try:
            with Session(self.engine) as session:
                result = session.execute(delete(School).where(School.id == school_id))
                session.commit()
                removed = result.rowcount > 0
            if removed:
                logger.info(f"Deleted school {school_id}")
            return removed
        except Exception as e:
            logger.error(f"Error deleting school {school_id}: {e}")
            raise DatabaseError(f"Failed to delete school with ID {school_id}", e) from e

    def list_by_city(self, city: str) -> List[SchoolDto]:
        try:
            with Session(self.engine) as session:
                rows = session.exec(
                    select(School).where(School.city == city).order_by(School.name)
                ).all()
                return [self._to_dto(r) for r in rows]
        except Exception as e:
            logger.error(f"Error getting schools by city {city}: {e}")
            raise DatabaseError(f"Failed to get schools by city {city}", e) from e

    def list_by_state(self, state: str) -> List[SchoolDto]:
        try:
            with Session(self.engine) as session:
                rows = session.exec(
                    select(School).where(School.state == state).order_by(School.city, School.name)
                ).all()
                return [self._to_dto(r) for r in rows]
        except Exception as e:
            logger.error(f"Error getting schools by state {state}: {e}")
            raise DatabaseError(f"Failed to get schools by state {state}", e) from e
