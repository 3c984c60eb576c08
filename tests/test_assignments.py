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


def create_assignment(client, headers, class_id, title="워크북 p.10-15", due_date="2024-03-15"):
    return client.post(
        "/assignments/",
        json={"class_id": class_id, "title": title, "assignment_date": "2024-03-08", "due_date": due_date},
        headers=headers,
    )


def test_new_assignment_tracks_every_enrolled_student():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, (kim, lee) = class_with_students(client, headers, teacher_id, ["김철수", "이영희"])
    # Withdrawn students get no submission row
    client.delete(f"/classes/{class_id}/enroll/{lee}", headers=headers)

    response = create_assignment(client, headers, class_id)
    assert response.status_code == 201
    data = response.json()
    assert data["total_count"] == 1
    assert data["submission_count"] == 0
    assert [(s["student_id"], s["status"]) for s in data["submissions"]] == [(kim, "NOT_SUBMITTED")]


def test_due_date_before_assignment_date_rejected():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, _ = class_with_students(client, headers, teacher_id, [])
    assert create_assignment(client, headers, class_id, due_date="2024-03-01").status_code == 400


def test_submission_status_sets_and_clears_timestamp():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, (kim,) = class_with_students(client, headers, teacher_id, ["김철수"])
    assignment_id = create_assignment(client, headers, class_id).json()["id"]

    submitted = client.put(
        f"/assignments/{assignment_id}/submissions",
        json={"student_id": kim, "status": "GRADED", "score": 95, "feedback": "good"},
        headers=headers,
    )
    assert submitted.status_code == 200
    assert submitted.json()["submitted_at"] is not None
    assert submitted.json()["score"] == 95

    detail = client.get(f"/assignments/{assignment_id}", headers=headers).json()
    assert detail["submission_count"] == 1

    reverted = client.put(
        f"/assignments/{assignment_id}/submissions",
        json={"student_id": kim, "status": "NOT_SUBMITTED"},
        headers=headers,
    )
    assert reverted.json()["submitted_at"] is None


def test_submission_for_unenrolled_student_is_404():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, _ = class_with_students(client, headers, teacher_id, ["김철수"])
    assignment_id = create_assignment(client, headers, class_id).json()["id"]
    response = client.put(
        f"/assignments/{assignment_id}/submissions",
        json={"student_id": 999, "status": "SUBMITTED"},
        headers=headers,
    )
    assert response.status_code == 404


def test_by_student_groups_submissions():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, (lee, kim) = class_with_students(client, headers, teacher_id, ["이영희", "김철수"])
    first = create_assignment(client, headers, class_id, title="숙제 1").json()["id"]
    create_assignment(client, headers, class_id, title="숙제 2", due_date="2024-03-20")
    client.put(f"/assignments/{first}/submissions", json={"student_id": lee, "status": "SUBMITTED"}, headers=headers)

    groups = client.get("/assignments/by-student", params={"class_id": class_id}, headers=headers).json()
    assert [g["student_name"] for g in groups] == ["김철수", "이영희"]
    by_name = {g["student_name"]: g for g in groups}
    assert by_name["이영희"]["submitted_count"] == 1
    assert by_name["이영희"]["total_count"] == 2
    assert by_name["김철수"]["submitted_count"] == 0


def test_update_list_and_delete_assignment():
    client = TestClient(app)
    headers, teacher_id = login_staff(client)
    class_id, _ = class_with_students(client, headers, teacher_id, ["김철수"])
    assignment_id = create_assignment(client, headers, class_id).json()["id"]

    updated = client.put(f"/assignments/{assignment_id}", json={"title": "워크북 p.10-20"}, headers=headers)
    assert updated.json()["title"] == "워크북 p.10-20"
    listed = client.get("/assignments/", params={"class_id": class_id}, headers=headers).json()
    assert [a["id"] for a in listed] == [assignment_id]

    assert client.delete(f"/assignments/{assignment_id}", headers=headers).status_code == 200
    assert client.get(f"/assignments/{assignment_id}", headers=headers).status_code == 404
