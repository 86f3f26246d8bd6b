import pytest


@pytest.fixture
def make_subject(client):
    def _make(name, code):
        response = client.post("/api/subjects", json={"name": name, "code": code})
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_class(client):
    def _make(name="JHS 1", level="JHS", academic_year="2024/2025", capacity=None):
        payload = {"name": name, "level": level, "academic_year": academic_year}
        if capacity is not None:
            payload["capacity"] = capacity
        response = client.post("/api/classes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_teacher(client):
    def _make(staff_number="TCH001", name="Kwame Asante", **extra):
        payload = {
            "staff_number": staff_number,
            "name": name,
            "phone": "0201234567",
            "address": "5 Castle Road, Accra",
            "email": "",
        }
        payload.update(extra)
        response = client.post("/api/teachers", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


# Subjects

def test_subject_crud(client, make_subject):
    subject = make_subject("Mathematics", "MATH")

    assert client.post("/api/subjects", json={"name": "Maths", "code": "MATH"}).status_code == 400

    response = client.put(f"/api/subjects/{subject['id']}", json={"description": "Core subject"})
    assert response.status_code == 200
    assert response.json()["description"] == "Core subject"
    assert response.json()["code"] == "MATH"

    assert client.delete(f"/api/subjects/{subject['id']}").status_code == 200
    assert client.get(f"/api/subjects/{subject['id']}").status_code == 404


def test_subject_listing_search_and_sort(client, make_subject):
    make_subject("Science", "SCI")
    make_subject("English Language", "ENG")
    make_subject("French", "FRE")

    names = [s["name"] for s in client.get("/api/subjects").json()]
    assert names == ["English Language", "French", "Science"]

    codes = [s["code"] for s in client.get("/api/subjects", params={"sort_by": "code", "sort_order": "desc"}).json()]
    assert codes == ["SCI", "FRE", "ENG"]

    found = client.get("/api/subjects", params={"search": "fre"}).json()
    assert [s["code"] for s in found] == ["FRE"]

    assert client.get("/api/subjects", params={"sort_by": "colour"}).status_code == 422


# Classes

def test_class_student_assignment(client, make_class, make_student):
    school_class = make_class()
    first = make_student("STD001")
    second = make_student("STD002", full_name="Jane Smith")
    url = f"/api/classes/{school_class['id']}/students"

    response = client.post(url, json={"student_ids": [first["id"], second["id"]]})
    assert response.status_code == 200
    assert {s["id"] for s in response.json()["students"]} == {first["id"], second["id"]}
    assert response.json()["student_count"] == 2

    # assigning again is a no-op
    response = client.post(url, json={"student_ids": [first["id"]]})
    assert response.json()["student_count"] == 2

    response = client.request("DELETE", url, json={"student_ids": [first["id"]]})
    assert response.status_code == 200
    assert [s["id"] for s in response.json()["students"]] == [second["id"]]

    listed = client.get("/api/classes").json()
    assert listed[0]["student_count"] == 1


def test_class_assignment_errors(client, make_class, make_student):
    school_class = make_class(capacity=1)
    first = make_student("STD001")
    second = make_student("STD002", full_name="Jane Smith")
    url = f"/api/classes/{school_class['id']}/students"

    assert client.post(url, json={"student_ids": [9999]}).status_code == 404
    assert client.post(url, json={"student_ids": "nope"}).status_code == 422
    assert client.post(url, json={"student_ids": [first["id"], second["id"]]}).status_code == 400
    assert client.post("/api/classes/9999/students", json={"student_ids": [first["id"]]}).status_code == 404


def test_class_listing_filters(client, make_class):
    make_class("JHS 1", "JHS", "2024/2025")
    make_class("Primary 1", "Primary", "2024/2025")
    make_class("JHS 1", "JHS", "2023/2024")

    jhs = client.get("/api/classes", params={"level": "JHS"}).json()
    assert len(jhs) == 2

    current = client.get("/api/classes", params={"level": "JHS", "academic_year": "2024/2025"}).json()
    assert len(current) == 1

    assert client.post("/api/classes", json={"name": "X", "level": "JHS", "academic_year": "2024"}).status_code == 422


def test_class_capacity_cannot_drop_below_enrolment(client, make_class, make_student):
    school_class = make_class()
    first = make_student("STD001")
    second = make_student("STD002", full_name="Jane Smith")
    client.post(f"/api/classes/{school_class['id']}/students", json={"student_ids": [first["id"], second["id"]]})

    response = client.put(f"/api/classes/{school_class['id']}", json={"capacity": 1})
    assert response.status_code == 400


# Teachers

def test_teacher_subject_and_class_assignment(client, make_teacher, make_subject, make_class):
    teacher = make_teacher()
    maths = make_subject("Mathematics", "MATH")
    science = make_subject("Science", "SCI")
    jhs1 = make_class()
    subjects_url = f"/api/teachers/{teacher['id']}/subjects"

    response = client.post(subjects_url, json={"subject_ids": [maths["id"], science["id"]]})
    assert response.status_code == 200
    assert {s["code"] for s in response.json()["subjects"]} == {"MATH", "SCI"}

    response = client.request("DELETE", subjects_url, json={"subject_ids": [science["id"]]})
    assert [s["code"] for s in response.json()["subjects"]] == ["MATH"]

    response = client.post(f"/api/teachers/{teacher['id']}/classes", json={"class_ids": [jhs1["id"]]})
    assert [c["name"] for c in response.json()["classes"]] == ["JHS 1"]

    detail = client.get(f"/api/classes/{jhs1['id']}").json()
    assert [t["name"] for t in detail["teachers"]] == ["Kwame Asante"]

    response = client.request("DELETE", f"/api/teachers/{teacher['id']}/classes", json={"class_ids": [jhs1["id"]]})
    assert response.json()["classes"] == []


def test_teacher_assignment_unknown_ids(client, make_teacher):
    teacher = make_teacher()
    assert client.post(f"/api/teachers/{teacher['id']}/subjects", json={"subject_ids": [42]}).status_code == 404
    assert client.post(f"/api/teachers/{teacher['id']}/classes", json={"class_ids": [42]}).status_code == 404
    assert client.post("/api/teachers/42/subjects", json={"subject_ids": [1]}).status_code == 404


def test_teacher_listing_filters(client, make_teacher, make_subject):
    ama = make_teacher("TCH001", "Ama Owusu", email="ama@school.edu.gh")
    make_teacher("TCH002", "Kofi Boateng")
    french = make_subject("French", "FRE")
    client.post(f"/api/teachers/{ama['id']}/subjects", json={"subject_ids": [french["id"]]})

    assert client.get("/api/teachers").json()["total"] == 2

    by_subject = client.get("/api/teachers", params={"subject": "fren"}).json()
    assert [t["staff_number"] for t in by_subject["teachers"]] == ["TCH001"]

    by_email = client.get("/api/teachers", params={"search": "school.edu"}).json()
    assert by_email["total"] == 1


def test_teacher_update_and_delete(client, make_teacher):
    teacher = make_teacher()
    make_teacher("TCH002", "Kofi Boateng")

    response = client.put(f"/api/teachers/{teacher['id']}", json={"experience": 7, "qualification": "B.Ed"})
    assert response.status_code == 200
    assert response.json()["experience"] == 7

    assert client.put(f"/api/teachers/{teacher['id']}", json={"staff_number": "TCH002"}).status_code == 400
    assert client.delete(f"/api/teachers/{teacher['id']}").status_code == 200
    assert client.get(f"/api/teachers/{teacher['id']}").status_code == 404


def test_teacher_employment_details(client, make_teacher):
    teacher = make_teacher(employment_date="2019-01-07", employment_type="Full-time")
    assert teacher["employment_date"] == "2019-01-07"
    assert teacher["employment_type"] == "Full-time"

    response = client.put(f"/api/teachers/{teacher['id']}", json={"employment_type": "Part-time"})
    assert response.json()["employment_type"] == "Part-time"
    assert response.json()["employment_date"] == "2019-01-07"


def test_blank_teacher_email_on_update_clears_it(client, make_teacher):
    teacher = make_teacher(email="kwame@school.edu.gh")
    url = f"/api/teachers/{teacher['id']}"

    response = client.put(url, json={"email": ""})
    assert response.status_code == 200
    assert response.json()["email"] is None

    assert client.put(url, json={"email": "nope"}).status_code == 422
