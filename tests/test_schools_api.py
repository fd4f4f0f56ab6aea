import os

from schoolhub.db.session import DatabaseReadiness
from schoolhub.exceptions import DatabaseError

from conftest import VALID_SCHOOL

SIX_MB = 6 * 1024 * 1024
ELEVEN_MB = 11 * 1024 * 1024


def test_create_without_image_then_list(client):
    res = client.post("/api/schools", data=VALID_SCHOOL)
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "School created successfully"
    school_id = body["data"]["id"]
    assert isinstance(school_id, int) and school_id > 0
    assert body["data"]["image"] is None

    res = client.get("/api/schools")
    assert res.status_code == 200
    listing = res.json()
    assert listing["success"] is True
    assert listing["count"] == 1
    assert [s["id"] for s in listing["data"]] == [school_id]


def test_oversized_image_is_rejected_without_a_row(client, image_root):
    files = {"image": ("big.jpg", b"\0" * SIX_MB, "image/jpeg")}
    res = client.post("/api/schools", data=VALID_SCHOOL, files=files)
    assert res.status_code == 400
    assert res.json() == {"error": "Image file size must be less than 5MB"}
    assert client.get("/api/schools").json()["count"] == 0
    assert not image_root.exists()


def test_image_over_request_cap_still_gets_size_message(client):
    files = {"image": ("big.jpg", b"\0" * ELEVEN_MB, "image/jpeg")}
    res = client.post("/api/schools", data=VALID_SCHOOL, files=files)
    assert res.status_code == 400
    assert res.json() == {"error": "Image file size must be less than 5MB"}

    res = client.post("/api/upload", files={"file": ("big.png", b"\0" * ELEVEN_MB, "image/png")})
    assert res.status_code == 400
    assert res.json()["error"] == "File size too large. Maximum size is 5MB"


def test_oversized_non_multipart_body_is_refused(client):
    res = client.post(
        "/api/schools",
        content=b"x" * ELEVEN_MB,
        headers={"content-type": "application/x-www-form-urlencoded"},
    )
    assert res.status_code == 413
    assert res.json() == {"error": "Request entity too large"}


def test_wrong_image_type_is_rejected(client):
    files = {"image": ("doc.pdf", b"%PDF", "application/pdf")}
    res = client.post("/api/schools", data=VALID_SCHOOL, files=files)
    assert res.status_code == 400
    assert res.json() == {"error": "Only JPEG, PNG, and WebP images are allowed"}


def test_create_with_image_serves_public_path(client, image_root):
    files = {"image": ("logo.PNG", b"\x89PNG....", "image/png")}
    res = client.post("/api/schools", data=VALID_SCHOOL, files=files)
    assert res.status_code == 201
    image = res.json()["data"]["image"]
    assert image.startswith("/schoolImages/")
    assert image.endswith(".png")
    assert os.path.exists(image_root / image.rsplit("/", 1)[1])


def test_validation_failure_returns_field_errors(client, image_root):
    files = {"image": ("logo.png", b"png", "image/png")}
    res = client.post("/api/schools", data={**VALID_SCHOOL, "contact": "123", "name": "A"}, files=files)
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Validation failed"
    assert body["details"] == {
        "name": "School name must be at least 2 characters",
        "contact": "Please enter a valid phone number (e.g., +1-234-567-8900 or (234) 567-8900)",
    }
    # The image was written before validation ran and stays behind
    assert len(os.listdir(image_root)) == 1


def test_missing_fields_are_validation_errors(client):
    res = client.post("/api/schools", data={"name": "Only Name"})
    assert res.status_code == 400
    assert set(res.json()["details"]) == {"address", "city", "state", "contact", "email_id"}


def test_database_error_maps_to_500(client):
    from schoolhub.main import app
    from schoolhub.routers.deps import get_school_repository

    class BrokenRepo:
        def create(self, data):
            raise DatabaseError("Failed to create school")

        def list_all(self):
            raise DatabaseError("Failed to get all schools")

    app.dependency_overrides[get_school_repository] = lambda: BrokenRepo()
    res = client.post("/api/schools", data=VALID_SCHOOL)
    assert res.status_code == 500
    assert res.json() == {"error": "Database error: Failed to create school"}

    res = client.get("/api/schools")
    assert res.status_code == 500
    assert res.json() == {"error": "Database error: Failed to get all schools"}


def test_unhandled_exception_maps_to_500(client):
    from schoolhub.main import app
    from schoolhub.routers.deps import get_school_repository

    class ExplodingRepo:
        def list_all(self):
            raise RuntimeError("unexpected")

    app.dependency_overrides[get_school_repository] = lambda: ExplodingRepo()
    res = client.get("/api/schools")
    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error"}


def test_record_routes(client):
    created = client.post("/api/schools", data=VALID_SCHOOL).json()["data"]
    school_id = created["id"]

    res = client.get(f"/api/schools/{school_id}")
    assert res.status_code == 200
    assert res.json()["data"]["name"] == "Test School"

    res = client.patch(f"/api/schools/{school_id}", data={"city": "Springfield"})
    assert res.status_code == 200
    assert res.json()["data"]["city"] == "Springfield"
    assert res.json()["data"]["name"] == "Test School"

    res = client.patch(f"/api/schools/{school_id}", data={"email_id": "bad"})
    assert res.status_code == 400
    assert res.json()["details"] == {"email_id": "Please enter a valid email address"}

    res = client.delete(f"/api/schools/{school_id}")
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "School deleted successfully"}

    assert client.get(f"/api/schools/{school_id}").status_code == 404
    assert client.delete(f"/api/schools/{school_id}").status_code == 404
    assert client.patch(f"/api/schools/{school_id}", data={"city": "Nowhere"}).status_code == 404


def test_list_filters(client):
    client.post("/api/schools", data={**VALID_SCHOOL, "name": "Beta", "city": "Austin", "state": "Texas"})
    client.post("/api/schools", data={**VALID_SCHOOL, "name": "Alpha", "city": "Austin", "state": "Texas"})
    client.post("/api/schools", data={**VALID_SCHOOL, "name": "Gamma", "city": "Boston", "state": "Massachusetts"})

    res = client.get("/api/schools", params={"city": "Austin"})
    assert [s["name"] for s in res.json()["data"]] == ["Alpha", "Beta"]
    res = client.get("/api/schools", params={"state": "Massachusetts"})
    assert res.json()["count"] == 1


def test_generic_upload(client, image_root):
    files = {"file": ("photo.JPG", b"jpegbytes", "image/jpeg")}
    res = client.post("/api/upload", files=files)
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["originalName"] == "photo.JPG"
    assert data["path"] == f"/schoolImages/{data['filename']}"
    assert data["size"] == len(b"jpegbytes")
    assert data["type"] == "image/jpeg"
    assert data["url"].endswith(data["path"])
    assert (image_root / data["filename"]).read_bytes() == b"jpegbytes"


def test_generic_upload_rejections(client):
    res = client.post("/api/upload")
    assert res.status_code == 400
    assert res.json() == {"error": "No file provided"}

    res = client.post("/api/upload", files={"file": ("a.gif", b"GIF89a", "image/gif")})
    assert res.status_code == 400
    assert res.json()["allowedTypes"] == ["image/jpeg", "image/jpg", "image/png", "image/webp"]

    res = client.post("/api/upload", files={"file": ("big.png", b"\0" * SIX_MB, "image/png")})
    assert res.status_code == 400
    assert res.json()["error"] == "File size too large. Maximum size is 5MB"
    assert res.json()["receivedSize"] == "6.00MB"

    res = client.post("/api/upload", files={"file": ("noext", b"x", "image/png")})
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid file name"}


def test_upload_info(client):
    res = client.get("/api/upload")
    assert res.status_code == 200
    assert res.json()["uploadPath"] == "/schoolImages/"


def test_health_connected(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["initialized"] is True
    assert "timestamp" in body


def test_health_disconnected(client, engine):
    from schoolhub.main import app
    from schoolhub.db.session import get_readiness

    class OfflineReadiness(DatabaseReadiness):
        def ensure_schema(self):
            raise ConnectionError("refused")

        def ping(self):
            return False

    app.dependency_overrides[get_readiness] = lambda: OfflineReadiness(engine)
    res = client.get("/api/health")
    assert res.status_code == 503
    assert res.json()["database"] == "disconnected"
    assert res.headers["cache-control"] == "no-cache, no-store, must-revalidate"


def test_health_unexpected_failure(client, engine):
    from schoolhub.main import app
    from schoolhub.db.session import get_readiness

    class BrokenReadiness(DatabaseReadiness):
        def status(self):
            raise RuntimeError("boom")

    app.dependency_overrides[get_readiness] = lambda: BrokenReadiness(engine)
    res = client.get("/api/health")
    assert res.status_code == 500
    assert res.json()["database"] == "error"
