import pytest
from fastapi.testclient import TestClient

from academy.app.core.security import get_password_hash
from academy.app.db.base import Base
from academy.app.db.session import SessionLocal, engine
from academy.app.main import app
from academy.app.models.user import User


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def staff_headers(client: TestClient, email: str = "desk@example.com", role: str = "STAFF") -> dict:
    db = SessionLocal()
    db.add(User(email=email, hashed_password=get_password_hash("secret"), name="Desk", role=role))
    db.commit()
    db.close()
    response = client.post("/auth/login", json={"email": email, "password": "secret"})
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def submit(client: TestClient, **fields):
    payload = {"student_name": "김철수", "parent_phone": "010-1234-5678"}
    payload.update(fields)
    return client.post("/signup-requests/", json=payload)


def test_public_submission_normalizes_phone():
    client = TestClient(app)
    response = submit(client, student_phone="010 2222 3333", grade="M1")
    assert response.status_code == 201
    request_id = response.json()["id"]

    headers = staff_headers(client, email="admin@example.com", role="ADMIN")
    listed = client.get("/signup-requests/", headers=headers).json()
    assert [r["id"] for r in listed] == [request_id]
    assert listed[0]["parent_phone"] == "01012345678"
    assert listed[0]["student_phone"] == "01022223333"
    assert listed[0]["status"] == "PENDING"


def test_submission_requires_name_and_parent_phone():
    client = TestClient(app)
    assert submit(client, student_name=" ").status_code == 400
    response = submit(client, parent_phone="--")
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"


def test_only_admins_review_requests():
    client = TestClient(app)
    request_id = submit(client).json()["id"]
    teacher = staff_headers(client, email="teacher@example.com", role="TEACHER")
    assert client.get("/signup-requests/", headers=teacher).status_code == 403
    assert client.patch(f"/signup-requests/{request_id}", json={"status": "APPROVED"}, headers=teacher).status_code == 403
    assert client.delete(f"/signup-requests/{request_id}", headers=teacher).status_code == 403


def test_admin_decides_and_deletes():
    client = TestClient(app)
    request_id = submit(client).json()["id"]
    headers = staff_headers(client, email="admin@example.com", role="ADMIN")

    decided = client.patch(
        f"/signup-requests/{request_id}",
        json={"status": "APPROVED", "admin_notes": "3월 등록"},
        headers=headers,
    )
    assert decided.status_code == 200
    assert decided.json()["status"] == "APPROVED"
    assert client.get("/signup-requests/", params={"status": "PENDING"}, headers=headers).json() == []

    bad = client.patch(f"/signup-requests/{request_id}", json={"status": "PENDING"}, headers=headers)
    assert bad.status_code == 422

    assert client.delete(f"/signup-requests/{request_id}", headers=headers).status_code == 200
    assert client.delete(f"/signup-requests/{request_id}", headers=headers).status_code == 404
