import os
import tempfile

# Keep the app's default database and image root out of the working tree
_scratch = tempfile.mkdtemp(prefix="schoolhub-tests-")
os.environ.setdefault("SQLITE_PATH", os.path.join(_scratch, "default.db"))
os.environ.setdefault("IMAGE_UPLOAD_DIR", os.path.join(_scratch, "schoolImages"))

import pytest
from sqlmodel import SQLModel

from schoolhub.db.session import build_engine, DatabaseReadiness
from schoolhub.infrastructure.persistence.sqlalchemy.repositories.school_repository_sql import SqlSchoolRepository
from schoolhub.infrastructure.storage.local_storage import LocalImageStorage


VALID_SCHOOL = {
    "name": "Test School",
    "address": "123 Main Street",
    "city": "Test City",
    "state": "Test State",
    "contact": "(555) 123-4567",
    "email_id": "test@school.edu",
}


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'schools.db'}")
    SQLModel.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def repo(engine):
    return SqlSchoolRepository(engine)


@pytest.fixture
def image_root(tmp_path):
    return tmp_path / "schoolImages"


@pytest.fixture
def storage(image_root):
    return LocalImageStorage(root_dir=str(image_root), route_prefix="/schoolImages")


@pytest.fixture
def client(engine, repo, storage):
    from fastapi.testclient import TestClient
    from schoolhub.main import app
    from schoolhub.db.session import get_readiness
    from schoolhub.routers.deps import get_school_repository, get_image_storage

    app.dependency_overrides[get_school_repository] = lambda: repo
    app.dependency_overrides[get_image_storage] = lambda: storage
    app.dependency_overrides[get_readiness] = lambda: DatabaseReadiness(engine)
    yield TestClient(app)
    app.dependency_overrides.clear()
