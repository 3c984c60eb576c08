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


def login_staff(client: TestClient) -> tuple[dict, int]:
    db = SessionLocal()
    db.add(User(email="teacher@example.com", hashed_password=get_password_hash("secret"), name="박선생", role="TEACHER"))
    db.commit()
    db.close()
    data = client.post("/auth/login", json={"email": "teacher@example.com", "password": "secret"}).json()
    return {"Authorization": f"Bearer {data['access_token']}"}, data["user"]["id"]


def class_with_students(client: TestClient, headers: dict, teacher_id: int, names: list[str]) -> tuple[int, list[int]]:
    subject = client.post("/subjects/", json={"name": "수학"}, headers=headers).json()
    class_id = client.post(
        "/classes/",
        json={"name": "중2 수학 A", "subject_id": subject["id"], "teacher_id": teacher_id},
        headers=headers,
    ).json()["id"]
    student_ids = []
    for name in names:
        student_id = client.post("/students/", json={"name": name}, headers=headers).json()["id"]
        client.post(f"/classes/{class_id}/enroll", json={"student_id": student_id}, headers=headers)
        student_ids.append(student_id)
    return class_id, student_ids


def test_save_attendance_upserts_per_day():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, (kim, lee) = class_with_students(client, headers, teacher_id, ["김철수", "이영희"])

    first = client.post(
        "/attendance/",
        json={
            "class_id": class_id,
            "date": "2024-03-04",
            "records": [
                {"student_id": kim, "status": "PRESENT", "check_in_time": "15:58"},
                {"student_id": lee, "status": "ABSENT"},
            ],
        },
        headers=headers,
    )
    assert first.status_code == 200
    assert len(first.json()) == 2

    # Second roll call on the same day corrects the earlier entry
    second = client.post(
        "/attendance/",
        json={"class_id": class_id, "date": "2024-03-04", "records": [{"student_id": lee, "status": "LATE", "remarks": "bus"}]},
        headers=headers,
    )
    assert second.status_code == 200

    records = client.get("/attendance/", params={"class_id": class_id, "date": "2024-03-04"}, headers=headers).json()
    assert len(records) == 2
    by_student = {r["student_id"]: r for r in records}
    assert by_student[kim]["status"] == "PRESENT"
    assert by_student[kim]["check_in_time"] == "15:58"
    assert by_student[lee]["status"] == "LATE"
    assert by_student[lee]["remarks"] == "bus"
    assert by_student[lee]["student_name"] == "이영희"


def test_invalid_status_rejected():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, (kim,) = class_with_students(client, headers, teacher_id, ["김철수"])
    response = client.post(
        "/attendance/",
        json={"class_id": class_id, "date": "2024-03-04", "records": [{"student_id": kim, "status": "SLEEPING"}]},
        headers=headers,
    )
    assert response.status_code == 422


def test_attendance_for_unknown_class_is_404():
    client = TestClient(app)
    headers, _ = login_staff(client)
    response = client.post("/attendance/", json={"class_id": 42, "date": "2024-03-04", "records": []}, headers=headers)
    assert response.status_code == 404


def test_monthly_summary_counts_statuses():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, (kim, lee) = class_with_students(client, headers, teacher_id, ["김철수", "이영희"])

    days = [
        ("2024-03-04", "PRESENT", "ABSENT"),
        ("2024-03-06", "LATE", "EXCUSED"),
        ("2024-03-08", "EARLY_LEAVE", "PRESENT"),
        ("2024-04-01", "ABSENT", "ABSENT"),
    ]
    for day, kim_status, lee_status in days:
        client.post(
            "/attendance/",
            json={
                "class_id": class_id,
                "date": day,
                "records": [
                    {"student_id": kim, "status": kim_status},
                    {"student_id": lee, "status": lee_status},
                ],
            },
            headers=headers,
        )

    response = client.get("/attendance/summary", params={"class_id": class_id, "month": "2024-03"}, headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["month"] == "2024-03"
    overall = data["overall"]
    assert overall["total"] == 6
    assert overall["present"] == 2
    assert overall["absent"] == 1
    assert overall["late"] == 1
    assert overall["early_leave"] == 1
    assert overall["excused"] == 1

    students = {s["student_name"]: s for s in data["students"]}
    assert students["김철수"]["attendance_rate"] == 100.0
    assert students["이영희"]["attendance_rate"] == pytest.approx(33.3)


def test_summary_rejects_bad_month():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, _ = class_with_students(client, headers, teacher_id, [])
    response = client.get("/attendance/summary", params={"class_id": class_id, "month": "2024-13"}, headers=headers)
    assert response.status_code == 400


def test_student_listed_twice_keeps_last_entry():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, (kim,) = class_with_students(client, headers, teacher_id, ["김철수"])

    response = client.post(
        "/attendance/",
        json={
            "class_id": class_id,
            "date": "2024-03-04",
            "records": [
                {"student_id": kim, "status": "ABSENT"},
                {"student_id": kim, "status": "PRESENT"},
            ],
        },
        headers=headers,
    )
    assert response.status_code == 200
    assert len(response.json()) == 1
    assert response.json()[0]["status"] == "PRESENT"

    records = client.get("/attendance/", params={"class_id": class_id, "date": "2024-03-04"}, headers=headers).json()
    assert len(records) == 1
    assert records[0]["status"] == "PRESENT"
