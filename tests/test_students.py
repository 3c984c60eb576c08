import pytest
from fastapi.testclient import TestClient

from academy.app.core.security import get_password_hash
from academy.app.core.time import utc_now
from academy.app.db.base import Base
from academy.app.db.session import SessionLocal, engine
from academy.app.main import app
from academy.app.models.student import Student
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


def create_student(client: TestClient, headers: dict, **fields):
    payload = {"name": "김철수"}
    payload.update(fields)
    return client.post("/students/", json=payload, headers=headers)


def test_create_student_assigns_number_and_normalizes_phones():
    client = TestClient(app)
    headers = staff_headers(client)
    response = create_student(client, headers, phone="010-1234-5678", parent_phone="010 9876 5432", grade="M2")
    assert response.status_code == 201
    data = response.json()
    year = str(utc_now().year)
    assert data["student_number"] == f"{year}001"
    assert data["phone"] == "01012345678"
    assert data["parent_phone"] == "01098765432"
    assert data["status"] == "ACTIVE"
    assert data["parents"] == []
    assert data["classes"] == []

    second = create_student(client, headers, name="이영희")
    assert second.json()["student_number"] == f"{year}002"


def test_explicit_student_number_must_be_unique():
    client = TestClient(app)
    headers = staff_headers(client)
    assert create_student(client, headers, student_number="S-1").status_code == 201
    response = create_student(client, headers, name="이영희", student_number="S-1")
    assert response.status_code == 400


def test_blank_name_rejected():
    client = TestClient(app)
    headers = staff_headers(client)
    assert create_student(client, headers, name="  ").status_code == 400


def test_list_students_filters_by_status():
    client = TestClient(app)
    headers = staff_headers(client)
    create_student(client, headers, name="김철수")
    create_student(client, headers, name="이영희", status="WITHDRAWN")

    everyone = client.get("/students/", headers=headers)
    assert everyone.status_code == 200
    assert len(everyone.json()) == 2

    withdrawn = client.get("/students/", params={"status": "WITHDRAWN"}, headers=headers)
    assert [s["name"] for s in withdrawn.json()] == ["이영희"]


def test_update_student_is_partial():
    client = TestClient(app)
    headers = staff_headers(client)
    student_id = create_student(client, headers, school="Hanbit", grade="M1").json()["id"]

    response = client.put(
        f"/students/{student_id}",
        json={"grade": "M2", "parent_phone": "010-5555-6666"},
        headers=headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["grade"] == "M2"
    assert data["school"] == "Hanbit"
    assert data["parent_phone"] == "01055556666"


def test_get_and_delete_student():
    client = TestClient(app)
    headers = staff_headers(client)
    student_id = create_student(client, headers).json()["id"]

    assert client.get(f"/students/{student_id}", headers=headers).status_code == 200
    assert client.delete(f"/students/{student_id}", headers=headers).status_code == 200
    assert client.get(f"/students/{student_id}", headers=headers).status_code == 404


def test_student_detail_lists_linked_parents():
    client = TestClient(app)
    headers = staff_headers(client)
    student_id = create_student(client, headers, name="이영희", parent_phone="01012345678").json()["id"]

    login = TestClient(app).post(
        "/auth/phone-login/confirm",
        json={"phone": "01012345678", "student_id": student_id, "student_name": "이영희"},
    )
    assert login.status_code == 200

    detail = client.get(f"/students/{student_id}", headers=headers).json()
    assert detail["user_id"] is None
    assert [p["name"] for p in detail["parents"]] == ["이영희 학부모"]
    assert detail["parents"][0]["phone"] == "01012345678"


def test_students_require_authentication():
    client = TestClient(app)
    assert client.get("/students/").status_code == 401


def student_login(student_id: int, name: str, phone: str):
    return TestClient(app).post(
        "/auth/phone-login/confirm",
        json={"phone": phone, "student_id": student_id, "student_name": name, "login_as": "STUDENT"},
    )


def test_reissued_student_number_gets_a_fresh_account():
    client = TestClient(app)
    headers = staff_headers(client)
    first = create_student(client, headers, name="김철수", phone="01011112222").json()
    login = student_login(first["id"], "김철수", "01011112222")
    assert login.status_code == 200
    old_token = login.json()["access_token"]
    old_user_id = login.json()["user"]["id"]

    assert client.delete(f"/students/{first['id']}", headers=headers).status_code == 200
    second = create_student(client, headers, name="이영희", phone="01033334444").json()
    assert second["student_number"] == first["student_number"]

    relogin = student_login(second["id"], "이영희", "01033334444")
    assert relogin.status_code == 200
    assert relogin.json()["user"]["id"] != old_user_id
    assert relogin.json()["user"]["name"] == "이영희"

    stale = TestClient(app).get(
        "/mobile/student-profile", headers={"Authorization": f"Bearer {old_token}"}
    )
    assert stale.status_code == 401

    db = SessionLocal()
    assert db.get(User, old_user_id).is_active is False
    db.close()


def test_student_number_sequence_grows_past_999():
    year = str(utc_now().year)
    db = SessionLocal()
    db.add(Student(name="김철수", student_number=f"{year}999"))
    db.add(Student(name="박민수", student_number=f"{year}-special"))
    db.commit()
    db.close()

    client = TestClient(app)
    headers = staff_headers(client)
    first = create_student(client, headers, name="이영희").json()
    assert first["student_number"] == f"{year}1000"
    second = create_student(client, headers, name="최지우").json()
    assert second["student_number"] == f"{year}1001"
