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


def test_monthly_list_includes_students_without_payment():
    client = TestClient(app)
    headers = staff_headers(client)
    kim = client.post("/students/", json={"name": "김철수"}, headers=headers).json()["id"]
    client.post("/students/", json={"name": "이영희"}, headers=headers)
    client.post("/students/", json={"name": "박민", "status": "WITHDRAWN"}, headers=headers)
    client.post(
        "/payments/",
        json={"student_id": kim, "year_month": "2024-03", "tuition_fee": 300000, "special_fee": 50000},
        headers=headers,
    )

    response = client.get("/payments/", params={"year_month": "2024-03"}, headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["year_month"] == "2024-03"
    rows = {row["student_name"]: row for row in data["data"]}
    assert set(rows) == {"김철수", "이영희"}
    assert rows["김철수"]["payment"]["total_fee"] == 350000
    assert rows["김철수"]["payment"]["status"] == "INPUT_DONE"
    assert rows["이영희"]["payment"] is None


def test_upsert_updates_existing_month():
    client = TestClient(app)
    headers = staff_headers(client)
    kim = client.post("/students/", json={"name": "김철수"}, headers=headers).json()["id"]
    first = client.post(
        "/payments/",
        json={"student_id": kim, "year_month": "2024-03", "tuition_fee": 300000, "other_fee": 20000},
        headers=headers,
    ).json()
    second = client.post(
        "/payments/",
        json={"student_id": kim, "year_month": "2024-03", "special_fee": 10000, "status": "BILLED"},
        headers=headers,
    ).json()
    assert second["id"] == first["id"]
    assert second["tuition_fee"] == 300000
    assert second["total_fee"] == 330000
    assert second["status"] == "BILLED"


def test_patch_recomputes_total_and_history_is_newest_first():
    client = TestClient(app)
    headers = staff_headers(client)
    kim = client.post("/students/", json={"name": "김철수"}, headers=headers).json()["id"]
    march = client.post("/payments/", json={"student_id": kim, "year_month": "2024-03", "tuition_fee": 300000}, headers=headers).json()
    client.post("/payments/", json={"student_id": kim, "year_month": "2024-04", "tuition_fee": 310000}, headers=headers)

    patched = client.patch(f"/payments/{march['id']}", json={"other_fee": 5000, "status": "PAID"}, headers=headers)
    assert patched.status_code == 200
    assert patched.json()["total_fee"] == 305000
    assert patched.json()["status"] == "PAID"

    history = client.get("/payments/history", params={"student_id": kim}, headers=headers).json()
    assert [p["year_month"] for p in history] == ["2024-04", "2024-03"]


def test_bad_month_and_unknown_payment():
    client = TestClient(app)
    headers = staff_headers(client)
    kim = client.post("/students/", json={"name": "김철수"}, headers=headers).json()["id"]
    assert client.post("/payments/", json={"student_id": kim, "year_month": "March"}, headers=headers).status_code == 422
    assert client.patch("/payments/999", json={"tuition_fee": 1}, headers=headers).status_code == 404
    assert client.delete("/payments/999", headers=headers).status_code == 404
