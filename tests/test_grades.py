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


def record_test(client, headers, class_id, test_name, test_date, scores):
    return client.post(
        "/grades/",
        json={
            "class_id": class_id,
            "test_name": test_name,
            "test_date": test_date,
            "grades": [{"student_id": sid, "score": score} for sid, score in scores],
        },
        headers=headers,
    )


def test_record_and_list_grades():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, (kim, lee) = class_with_students(client, headers, teacher_id, ["김철수", "이영희"])

    response = record_test(client, headers, class_id, "3월 모의고사", "2024-03-20", [(kim, 90), (lee, 70)])
    assert response.status_code == 201
    assert [g["max_score"] for g in response.json()] == [100, 100]

    record_test(client, headers, class_id, "단원평가", "2024-03-10", [(kim, 45)])
    grades = client.get("/grades/", params={"class_id": class_id}, headers=headers).json()
    assert len(grades) == 3
    assert grades[0]["test_name"] == "3월 모의고사"

    filtered = client.get("/grades/", params={"class_id": class_id, "test_name": "단원평가"}, headers=headers).json()
    assert [(g["student_name"], g["score"]) for g in filtered] == [("김철수", 45)]


def test_grade_summary_per_test():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, (kim, lee) = class_with_students(client, headers, teacher_id, ["김철수", "이영희"])
    record_test(client, headers, class_id, "단원평가", "2024-03-10", [(kim, 40), (lee, 30)])
    record_test(client, headers, class_id, "3월 모의고사", "2024-03-20", [(kim, 90), (lee, 70)])

    summary = client.get("/grades/summary", params={"class_id": class_id}, headers=headers).json()
    assert [s["test_name"] for s in summary] == ["3월 모의고사", "단원평가"]
    latest = summary[0]
    assert latest["count"] == 2
    assert latest["average_score"] == 80
    assert latest["average_percentage"] == 80
    assert latest["highest_score"] == 90
    assert latest["lowest_score"] == 70


def test_summary_percentage_uses_max_score():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, (kim,) = class_with_students(client, headers, teacher_id, ["김철수"])
    client.post(
        "/grades/",
        json={
            "class_id": class_id,
            "test_name": "쪽지시험",
            "test_date": "2024-03-05",
            "grades": [{"student_id": kim, "score": 15, "max_score": 20}],
        },
        headers=headers,
    )
    summary = client.get("/grades/summary", params={"class_id": class_id}, headers=headers).json()
    assert summary[0]["average_percentage"] == 75


def test_update_and_delete_grade():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, (kim,) = class_with_students(client, headers, teacher_id, ["김철수"])
    grade_id = record_test(client, headers, class_id, "단원평가", "2024-03-10", [(kim, 40)]).json()[0]["id"]

    updated = client.put(f"/grades/{grade_id}", json={"score": 44, "remarks": "재채점"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["score"] == 44
    assert updated.json()["remarks"] == "재채점"

    assert client.delete(f"/grades/{grade_id}", headers=headers).status_code == 200
    assert client.put(f"/grades/{grade_id}", json={"score": 1}, headers=headers).status_code == 404


def test_non_positive_max_score_rejected():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, (kim,) = class_with_students(client, headers, teacher_id, ["김철수"])
    response = client.post(
        "/grades/",
        json={
            "class_id": class_id,
            "test_name": "쪽지시험",
            "test_date": "2024-03-05",
            "grades": [{"student_id": kim, "score": 5, "max_score": 0}],
        },
        headers=headers,
    )
    assert response.status_code == 400
