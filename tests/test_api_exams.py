"""Exam taking API tests"""
import pytest
import pytest_asyncio

from faris.models import Exam, Question, Result

OPTIONS = ["مرفوع", "منصوب", "مجرور", "مجزوم"]


@pytest_asyncio.fixture
async def mcq_exam(add_rows):
    (exam,) = await add_rows(
        Exam(
            title="امتحان الإعراب",
            description="امتحان قصير في الإعراب",
            grade="sec_2",
            type="mcq",
            duration=15,
            question_count=2,
        )
    )
    await add_rows(
        Question(exam_id=exam.id, text="إعراب الفاعل؟", options=OPTIONS, correct_answer="مرفوع"),
        Question(exam_id=exam.id, text="إعراب المفعول به؟", options=OPTIONS, correct_answer="منصوب"),
    )
    return exam


@pytest_asyncio.fixture
async def file_exam(add_rows):
    (exam,) = await add_rows(
        Exam(
            title="بحث البلاغة",
            description="اكتب بحثاً عن التشبيه",
            grade="sec_2",
            type="file",
            file_url="/files/exams/q.pdf",
            file_path="exams/q.pdf",
        )
    )
    return exam


async def answer_current(client, headers, exam_id, option):
    view = (await client.get(f"/api/v1/exams/{exam_id}/session", headers=headers)).json()
    return await client.post(
        f"/api/v1/exams/{exam_id}/session/answer",
        json={"question_id": view["question"]["id"], "option": option},
        headers=headers,
    )


@pytest.mark.asyncio
async def test_full_exam_flow(client, mcq_exam, student_headers, admin_headers):
    base = f"/api/v1/exams/{mcq_exam.id}"

    response = await client.post(f"{base}/session", headers=student_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "in_progress"
    assert data["session"]["time_left"] == 15 * 60
    assert data["session"]["question"]["text"] == "إعراب الفاعل؟"
    assert data["session"]["question"].get("correct_answer") is None

    response = await answer_current(client, student_headers, mcq_exam.id, "مرفوع")
    assert response.json()["answered_count"] == 1
    assert response.json()["can_submit"] is False

    response = await client.post(f"{base}/session/submit", headers=student_headers)
    assert response.status_code == 400

    await client.post(f"{base}/session/next", headers=student_headers)
    response = await answer_current(client, student_headers, mcq_exam.id, "مجرور")
    assert response.json()["can_submit"] is True

    response = await client.post(f"{base}/session/submit", headers=student_headers)
    assert response.status_code == 200
    submitted = response.json()
    assert submitted["score"] == 1
    assert submitted["total_questions"] == 2
    result_id = submitted["result_id"]

    response = await client.get(f"{base}/session", headers=student_headers)
    assert response.status_code == 404

    response = await client.post(f"{base}/session", headers=student_headers)
    assert response.json()["status"] == "completed"
    assert response.json()["session"] is None

    response = await client.get(f"/api/v1/results/{result_id}", headers=student_headers)
    assert response.status_code == 403

    response = await client.post(f"/api/v1/admin/exams/{mcq_exam.id}/publish", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["results_published"] is True

    response = await client.get(f"/api/v1/results/{result_id}", headers=student_headers)
    assert response.status_code == 200
    detail = response.json()
    assert detail["percentage"] == 50
    assert detail["passed"] is True
    assert [b["is_correct"] for b in detail["breakdown"]] == [True, False]

    listing = (await client.get("/api/v1/exams", headers=student_headers)).json()
    assert listing["exams"][0]["status"] == "published"


@pytest.mark.asyncio
async def test_result_of_other_student_hidden(client, add_rows, mcq_exam, make_user, headers_for):
    owner = await make_user()
    other = await make_user()
    (result,) = await add_rows(
        Result(student_id=owner.id, exam_id=mcq_exam.id, type="mcq", score=2, total_questions=2, answers={})
    )
    response = await client.get(f"/api/v1/results/{result.id}", headers=headers_for(other))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_abandon_writes_nothing(client, mcq_exam, student_headers):
    base = f"/api/v1/exams/{mcq_exam.id}"
    await client.post(f"{base}/session", headers=student_headers)
    await answer_current(client, student_headers, mcq_exam.id, "مرفوع")

    response = await client.delete(f"{base}/session", headers=student_headers)
    assert response.status_code == 204

    listing = (await client.get("/api/v1/exams", headers=student_headers)).json()
    assert listing["exams"][0]["status"] == "not_started"

    response = await client.post(f"{base}/session", headers=student_headers)
    assert response.json()["session"]["answered_count"] == 0


@pytest.mark.asyncio
async def test_restart_resumes_live_session(client, mcq_exam, student_headers):
    base = f"/api/v1/exams/{mcq_exam.id}"
    await client.post(f"{base}/session", headers=student_headers)
    await answer_current(client, student_headers, mcq_exam.id, "منصوب")

    response = await client.post(f"{base}/session", headers=student_headers)
    assert response.json()["status"] == "in_progress"
    assert response.json()["session"]["question"]["selected"] == "منصوب"


@pytest.mark.asyncio
async def test_duplicate_result_conflict(client, add_rows, mcq_exam, student, student_headers):
    """A result written elsewhere mid-session turns the submit into a conflict"""
    base = f"/api/v1/exams/{mcq_exam.id}"
    await client.post(f"{base}/session", headers=student_headers)
    await answer_current(client, student_headers, mcq_exam.id, "مرفوع")
    await client.post(f"{base}/session/next", headers=student_headers)
    await answer_current(client, student_headers, mcq_exam.id, "منصوب")

    await add_rows(
        Result(student_id=student.id, exam_id=mcq_exam.id, type="mcq", score=0, total_questions=2, answers={})
    )

    response = await client.post(f"{base}/session/submit", headers=student_headers)
    assert response.status_code == 409

    response = await client.get(f"{base}/session", headers=student_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_exam_without_questions(client, add_rows, student_headers):
    (exam,) = await add_rows(
        Exam(title="فارغ", description="امتحان بلا أسئلة", grade="sec_2", type="mcq", duration=10, question_count=3)
    )
    response = await client.post(f"/api/v1/exams/{exam.id}/session", headers=student_headers)
    assert response.json()["status"] == "empty"

    response = await client.get(f"/api/v1/exams/{exam.id}/session", headers=student_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_missing_exam(client, student_headers):
    response = await client.post("/api/v1/exams/9999/session", headers=student_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_file_exam_submission(client, file_exam, student_headers):
    base = f"/api/v1/exams/{file_exam.id}"

    response = await client.post(f"{base}/session", headers=student_headers)
    assert response.json()["status"] == "file"
    assert response.json()["exam"]["file_url"] == "/files/exams/q.pdf"

    response = await client.get(f"{base}/submission", headers=student_headers)
    assert response.status_code == 200
    assert response.json() is None

    files = {"file": ("إجابتي.pdf", b"%PDF-1.4 answer", "application/pdf")}
    response = await client.post(f"{base}/submission", files=files, headers=student_headers)
    assert response.status_code == 201
    file_url = response.json()["file_url"]
    assert "exam_answers/" in file_url

    response = await client.post(f"{base}/submission", files=files, headers=student_headers)
    assert response.status_code == 409

    response = await client.get(f"{base}/submission", headers=student_headers)
    assert response.json()["file_url"] == file_url

    listing = (await client.get("/api/v1/exams", headers=student_headers)).json()
    assert listing["exams"][0]["status"] == "submitted"


@pytest.mark.asyncio
async def test_file_upload_to_mcq_exam_refused(client, mcq_exam, student_headers):
    files = {"file": ("a.pdf", b"%PDF", "application/pdf")}
    response = await client.post(f"/api/v1/exams/{mcq_exam.id}/submission", files=files, headers=student_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_student_blocked_from_admin(client, student_headers):
    response = await client.get("/api/v1/admin/exams", headers=student_headers)
    assert response.status_code == 403
    assert response.json()["location"] == "/dashboard"
