def scores(**overrides):
    entries = {
        "English Language": {"class_score": 25, "exam_score": 65, "remarks": "Excellent"},
        "Mathematics": {"class_score": 20, "exam_score": 50},
    }
    entries.update(overrides)
    return entries


def test_roster_lists_subjects_terms_and_bands(client):
    response = client.get("/api/reports/roster")
    assert response.status_code == 200
    data = response.json()
    assert data["subjects"][:2] == ["English Language", "Mathematics"]
    assert "ICT" in data["subjects"]
    assert data["terms"] == ["1st Term", "2nd Term", "3rd Term"]
    assert data["grade_bands"][0] == {"grade": "A", "min_score": 90.0}
    assert data["class_score_max"] == 30
    assert data["exam_score_max"] == 70


def test_save_report_aggregates_scores(client, make_student):
    make_student("STD001")

    response = client.post(
        "/api/reports",
        json={"student_id": "STD001", "term": "1st Term", "subjects": scores()},
    )
    assert response.status_code == 201, response.text
    report = response.json()
    assert report["total_score"] == 160
    assert report["average_score"] == 80
    assert report["overall_grade"] == "B+"
    assert [s["grade"] for s in report["subjects"]] == ["A", "B"]
    assert report["subjects"][0]["remarks"] == "Excellent"


def test_save_report_orders_subjects_by_roster(client, make_student):
    make_student("STD001")
    entries = {
        "Music": {"class_score": 10, "exam_score": 10},
        "Mathematics": {"class_score": 10, "exam_score": 10},
        "English Language": {"class_score": 10, "exam_score": 10},
    }
    response = client.post("/api/reports", json={"student_id": "STD001", "term": "2nd Term", "subjects": entries})
    assert [s["subject"] for s in response.json()["subjects"]] == ["English Language", "Mathematics", "Music"]


def test_save_report_rejects_out_of_range_scores(client, make_student):
    make_student("STD001")
    bad_class = scores(Science={"class_score": 31, "exam_score": 10})
    bad_exam = scores(Science={"class_score": 10, "exam_score": 71})

    for entries in (bad_class, bad_exam):
        response = client.post("/api/reports", json={"student_id": "STD001", "term": "1st Term", "subjects": entries})
        assert response.status_code == 422


def test_save_report_rejects_unknown_term(client, make_student):
    make_student("STD001")
    response = client.post("/api/reports", json={"student_id": "STD001", "term": "4th Term", "subjects": scores()})
    assert response.status_code == 422


def test_save_report_for_unknown_student_is_404(client):
    response = client.post("/api/reports", json={"student_id": "NOPE", "term": "1st Term", "subjects": scores()})
    assert response.status_code == 404


def test_subject_names_that_collide_once_trimmed_are_rejected(client, make_student):
    make_student("STD001")
    entries = {
        "Mathematics": {"class_score": 30, "exam_score": 70},
        "Mathematics ": {"class_score": 0, "exam_score": 0},
    }
    response = client.post("/api/reports", json={"student_id": "STD001", "term": "1st Term", "subjects": entries})
    assert response.status_code == 422
    assert client.get("/api/reports/student/STD001").json() == []


def test_subject_names_are_trimmed(client, make_student):
    make_student("STD001")
    entries = {"  Mathematics ": {"class_score": 30, "exam_score": 70}}
    response = client.post("/api/reports", json={"student_id": "STD001", "term": "1st Term", "subjects": entries})
    assert response.status_code == 201
    assert [s["subject"] for s in response.json()["subjects"]] == ["Mathematics"]

    blank = client.post("/api/reports", json={"student_id": "STD001", "term": "1st Term", "subjects": {" ": {}}})
    assert blank.status_code == 422


def test_save_report_with_no_subjects_grades_f(client, make_student):
    make_student("STD001")
    response = client.post("/api/reports", json={"student_id": "STD001", "term": "1st Term", "subjects": {}})
    assert response.status_code == 201
    assert response.json()["total_score"] == 0
    assert response.json()["overall_grade"] == "F"


def test_resaving_a_term_replaces_the_report(client, make_student):
    make_student("STD001")
    client.post("/api/reports", json={"student_id": "STD001", "term": "1st Term", "subjects": scores()})
    client.post(
        "/api/reports",
        json={
            "student_id": "STD001",
            "term": "1st Term",
            "subjects": {"Mathematics": {"class_score": 30, "exam_score": 70}},
        },
    )

    reports = client.get("/api/reports/student/STD001").json()
    assert len(reports) == 1
    assert reports[0]["total_score"] == 100
    assert reports[0]["overall_grade"] == "A"


def test_get_report_by_student_and_term(client, make_student):
    make_student("STD001")
    client.post("/api/reports", json={"student_id": "STD001", "term": "2nd Term", "subjects": scores()})

    response = client.get("/api/reports/student/STD001/term/2nd Term")
    assert response.status_code == 200
    assert response.json()["term"] == "2nd Term"

    assert client.get("/api/reports/student/STD001/term/1st Term").status_code == 404
    assert client.get("/api/reports/student/STD001/term/Summer").status_code == 422


def test_list_reports_filters_through_students(client, make_student):
    make_student("STD001", full_name="John Doe", class_name="JHS 1")
    make_student("STD002", full_name="Jane Smith", class_name="JHS 2")
    make_student("STD003", full_name="Ama Mensah", class_name="JHS 1", academic_year="2023/2024")

    for student_id in ("STD001", "STD002", "STD003"):
        for term in ("1st Term", "2nd Term"):
            client.post("/api/reports", json={"student_id": student_id, "term": term, "subjects": scores()})

    everything = client.get("/api/reports").json()
    assert everything["total"] == 6

    response = client.get("/api/reports", params={"class_name": "JHS 1", "term": "1st Term"})
    data = response.json()
    assert [(r["student_id"], r["term"]) for r in data["reports"]] == [("STD001", "1st Term"), ("STD003", "1st Term")]
    assert data["reports"][0]["student_name"] == "John Doe"
    assert data["reports"][0]["class_name"] == "JHS 1"

    by_year = client.get("/api/reports", params={"academic_year": "2023/2024"}).json()
    assert {r["student_id"] for r in by_year["reports"]} == {"STD003"}

    blank = client.get("/api/reports", params={"class_name": "", "term": ""}).json()
    assert blank["total"] == 6


def test_reports_of_deleted_students_drop_out_of_filtered_lists(client, make_student):
    student = make_student("STD001")
    client.post("/api/reports", json={"student_id": "STD001", "term": "1st Term", "subjects": scores()})
    client.delete(f"/api/students/{student['id']}")

    assert client.get("/api/reports").json()["total"] == 1
    assert client.get("/api/reports", params={"term": "1st Term"}).json()["total"] == 0


def test_dashboard_counts_reports_and_grades(client, make_student):
    make_student("STD001", class_name="JHS 1")
    make_student("STD002", full_name="Ama Mensah", gender="Female", class_name="JHS 1")
    make_student("STD003", full_name="Kojo Asare", class_name="JHS 2")
    client.post("/api/reports", json={"student_id": "STD001", "term": "1st Term", "subjects": scores()})
    client.post("/api/reports", json={"student_id": "STD002", "term": "1st Term", "subjects": {}})

    client.post("/api/classes", json={"name": "JHS 1", "level": "JHS", "academic_year": "2024/2025", "capacity": 30})
    client.post("/api/classes", json={"name": "JHS 2", "level": "JHS", "academic_year": "2024/2025", "capacity": 40})
    client.post("/api/classes", json={"name": "Primary 6", "level": "Primary", "academic_year": "2023/2024"})

    teacher = client.post(
        "/api/teachers",
        json={"staff_number": "TCH001", "name": "Kwame Asante", "phone": "0201234567",
              "address": "5 Castle Road, Accra", "qualification": "B.Ed", "experience": 6},
    ).json()
    client.post(
        "/api/teachers",
        json={"staff_number": "TCH002", "name": "Efua Ansah", "phone": "0207654321",
              "address": "9 Oxford Street, Osu", "experience": 2},
    )
    maths = client.post("/api/subjects", json={"name": "Mathematics", "code": "MATH"}).json()
    client.post("/api/subjects", json={"name": "Science", "code": "SCI"})
    client.post(f"/api/teachers/{teacher['id']}/subjects", json={"subject_ids": [maths["id"]]})

    response = client.get("/api/dashboard")
    assert response.status_code == 200
    data = response.json()

    students = data["stats"]["students"]
    assert students["total"] == 3
    assert students["by_class"] == [{"class_name": "JHS 1", "count": 2}, {"class_name": "JHS 2", "count": 1}]
    assert students["by_gender"] == [{"gender": "Female", "count": 1}, {"gender": "Male", "count": 2}]
    assert students["recent_admissions"] == 3

    classes = data["stats"]["classes"]
    assert classes["total"] == 3
    assert classes["by_level"] == [{"level": "JHS", "count": 2}, {"level": "Primary", "count": 1}]
    assert classes["by_academic_year"] == [
        {"academic_year": "2023/2024", "count": 1},
        {"academic_year": "2024/2025", "count": 2},
    ]
    assert classes["average_capacity"] == 35.0

    teachers = data["stats"]["teachers"]
    assert teachers["total"] == 2
    assert teachers["by_qualification"] == [{"qualification": "B.Ed", "count": 1}]
    assert teachers["average_experience"] == 4.0
    assert teachers["recent_hires"] == 2

    assert data["stats"]["subjects"] == {"total": 2, "average_teachers_per_subject": 0.5}
    assert data["stats"]["reports"] == 2
    assert data["grade_distribution"]["B+"] == 1
    assert data["grade_distribution"]["F"] == 1

    recent = data["recent_activities"]
    assert [s["admission_number"] for s in recent["students"]] == ["STD003", "STD002", "STD001"]
    assert [t["staff_number"] for t in recent["teachers"]] == ["TCH002", "TCH001"]


def test_recent_activities_are_limited_to_five(client, make_student):
    for n in range(7):
        make_student(f"STD{n:03d}")

    recent = client.get("/api/dashboard").json()["recent_activities"]["students"]
    assert [s["admission_number"] for s in recent] == ["STD006", "STD005", "STD004", "STD003", "STD002"]
