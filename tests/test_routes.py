from pymongo.errors import PyMongoError

from database import get_db
from main import app


def add_student(client, course_id, name, **fields):
    payload = {"name": name, "email": f"{name.lower()}@example.com", "courseId": course_id}
    payload.update(fields)
    response = client.post("/api/students", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_course_returns_empty_students(client):
    response = client.post(
        "/api/courses",
        json={
            "title": "Math 101",
            "description": "Numbers",
            "startDate": "2024-01-01",
            "endDate": "2024-02-01",
            "language": "",
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["students"] == []
    assert body["language"] == "English"
    assert body["startDate"] == "2024-01-01"
    assert body["durationDays"] == 31


def test_create_course_without_title(client):
    response = client.post("/api/courses", json={"description": "No title"})
    assert response.status_code == 400
    assert "title" in response.json()["message"]


def test_math_101_scenario(client, math_course):
    alice = add_student(client, math_course["id"], "Alice", totalFee=18000, paidAmount=18000)
    bob = add_student(client, math_course["id"], "Bob", totalFee=18000, paidAmount=5000)

    courses = client.get("/api/courses").json()
    assert len(courses) == 1
    students = {s["id"]: s for s in courses[0]["students"]}
    assert len(students) == 2
    assert students[alice["id"]]["isPaid"] is True
    assert students[bob["id"]]["isPaid"] is False
    assert students[bob["id"]]["pendingAmount"] == 13000

    stats = client.get("/api/dashboard").json()
    assert stats["totalPendingFees"] == 13000
    assert stats["remindersCount"] == 1
    assert stats["totalStudents"] == 2
    assert stats["totalCourses"] == 1

    response = client.delete(f"/api/courses/{math_course['id']}")
    assert response.status_code == 200
    assert response.json()["deletedStudents"] == 2
    assert client.get("/api/courses").json() == []
    assert client.get(f"/api/students/{alice['id']}").status_code == 404
    assert client.get(f"/api/students/{bob['id']}").status_code == 404


def test_update_course(client, math_course):
    response = client.put(f"/api/courses/{math_course['id']}", json={"description": "Updated"})
    assert response.status_code == 200
    assert response.json()["description"] == "Updated"
    assert response.json()["title"] == "Math 101"


def test_update_course_blank_title(client, math_course):
    response = client.put(f"/api/courses/{math_course['id']}", json={"title": ""})
    assert response.status_code == 400


def test_update_unknown_course(client):
    response = client.put("/api/courses/missing", json={"title": "x"})
    assert response.status_code == 404
    assert response.json()["message"] == "Course not found"


def test_student_defaults_and_phone(client, math_course):
    student = add_student(client, math_course["id"], "Alice", phone="9876543210", joinDate="")
    assert student["phone"] == "+919876543210"
    assert student["totalFee"] == 18000
    assert student["paidAmount"] == 0
    assert student["reminderMessage"] == ""
    assert student["joinDate"] is None


def test_create_student_unknown_course(client):
    response = client.post(
        "/api/students", json={"name": "Ghost", "email": "g@example.com", "courseId": "missing"}
    )
    assert response.status_code == 400
    assert client.get("/api/courses").json() == []


def test_create_student_missing_email(client, math_course):
    response = client.post("/api/students", json={"name": "Alice", "courseId": math_course["id"]})
    assert response.status_code == 400


def test_update_student_and_reminder(client, math_course):
    bob = add_student(client, math_course["id"], "Bob", phone="9876543210", paidAmount=5000)
    reminder = client.get(f"/api/students/{bob['id']}/reminder").json()
    assert "*₹13,000*" in reminder["message"]

    response = client.put(f"/api/students/{bob['id']}", json={"reminderMessage": "Hi Bob"})
    assert response.status_code == 200
    assert response.json()["reminderMessage"] == "Hi Bob"

    reminder = client.get(f"/api/students/{bob['id']}/reminder").json()
    assert reminder["message"] == "Hi Bob"
    assert reminder["whatsappUrl"] == "https://wa.me/+919876543210?text=Hi%20Bob"


def test_update_student_blank_email(client, math_course):
    bob = add_student(client, math_course["id"], "Bob")
    response = client.put(f"/api/students/{bob['id']}", json={"email": ""})
    assert response.status_code == 400
    assert response.json()["message"] == "email is required"


def test_update_student_normalizes_phone(client, math_course):
    bob = add_student(client, math_course["id"], "Bob", phone="+19876543210")
    response = client.put(f"/api/students/{bob['id']}", json={"phone": "9876543210"})
    assert response.status_code == 200
    assert response.json()["phone"] == "+919876543210"
    assert client.get(f"/api/students/{bob['id']}").json()["phone"] == "+919876543210"


def test_update_unknown_student(client):
    assert client.put("/api/students/missing", json={"paidAmount": 1}).status_code == 404


def test_delete_student_twice(client, math_course):
    alice = add_student(client, math_course["id"], "Alice")
    bob = add_student(client, math_course["id"], "Bob")
    assert client.delete(f"/api/students/{alice['id']}").status_code == 200
    assert client.delete(f"/api/students/{alice['id']}").status_code == 200
    remaining = client.get("/api/courses").json()[0]["students"]
    assert [s["id"] for s in remaining] == [bob["id"]]


class UnreachableCollection:
    def find(self, *args, **kwargs):
        raise PyMongoError("server selection timeout")

    async def delete_many(self, *args, **kwargs):
        raise PyMongoError("server selection timeout")

    async def delete_one(self, *args, **kwargs):
        raise PyMongoError("server selection timeout")


class UnreachableDb:
    courses = UnreachableCollection()
    students = UnreachableCollection()

    async def command(self, *args, **kwargs):
        raise PyMongoError("server selection timeout")


def test_storage_failures_map_to_500(client):
    app.dependency_overrides[get_db] = lambda: UnreachableDb()
    assert client.get("/api/courses").status_code == 500
    assert client.delete("/api/courses/any").status_code == 500
    assert client.delete("/api/students/any").status_code == 500
    response = client.get("/api/health")
    assert response.status_code == 500
    assert "Database unavailable" in response.json()["message"]
