"""Result Service tests"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from faris.crud import exam as exam_crud, question as question_crud, result as result_crud
from faris.exceptions import (
    ExamNotFoundError,
    ResultNotFoundError,
    ResultsNotPublishedError,
    ResultTypeMismatchError,
)
from faris.services import result_service


@pytest.fixture
def mock_db_session():
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def mock_user():
    user = MagicMock()
    user.id = 5
    return user


@pytest.fixture
def mock_exam():
    exam = MagicMock()
    exam.id = 3
    exam.title = "اختبار النحو"
    exam.type = "mcq"
    exam.results_published = True
    return exam


@pytest.fixture
def mock_result():
    result = MagicMock()
    result.id = 11
    result.student_id = 5
    result.exam_id = 3
    result.type = "mcq"
    result.score = 1
    result.total_questions = 2
    result.answers = {"1": "أ", "2": "ج"}
    result.grade = None
    result.submitted_at = datetime(2026, 10, 1, tzinfo=timezone.utc)
    return result


def make_question(qid: int, correct: str):
    question = MagicMock()
    question.id = qid
    question.text = f"سؤال {qid}"
    question.options = ["أ", "ب", "ج"]
    question.correct_answer = correct
    return question


@pytest.mark.parametrize(
    "score,total,expected",
    [(1, 8, 13), (1, 3, 33), (2, 3, 67), (1, 2, 50), (0, 5, 0), (5, 5, 100), (3, 0, 0), (None, 4, 0)],
)
def test_percentage_rounds_half_up(score, total, expected):
    assert result_service.percentage(score, total) == expected


def test_passed_boundary():
    assert result_service.passed(50) is True
    assert result_service.passed(49) is False


def test_exam_status_not_started(mock_exam):
    assert result_service.exam_status(mock_exam, None) == ("not_started", None, None)


def test_exam_status_mcq_published_and_pending(mock_exam, mock_result):
    assert result_service.exam_status(mock_exam, mock_result) == ("published", 11, None)
    mock_exam.results_published = False
    assert result_service.exam_status(mock_exam, mock_result) == ("pending", 11, None)


def test_exam_status_file_submitted_and_graded(mock_exam, mock_result):
    mock_exam.type = "file"
    mock_result.type = "file"
    assert result_service.exam_status(mock_exam, mock_result) == ("submitted", 11, None)
    mock_result.grade = "18/20"
    assert result_service.exam_status(mock_exam, mock_result) == ("graded", 11, "18/20")


def test_build_breakdown_marks_each_question():
    questions = [make_question(1, "أ"), make_question(2, "ب"), make_question(3, "ج")]
    items = result_service.build_breakdown(questions, {"1": "أ", "2": "ج"})

    assert [item.is_correct for item in items] == [True, False, False]
    assert items[1].selected == "ج"
    assert items[2].selected is None


@pytest.mark.asyncio
async def test_result_detail_other_student_not_found(mock_db_session, mock_user, mock_result):
    """Another student's result is reported as missing"""
    mock_result.student_id = 99
    with patch.object(result_crud, "get_result_by_id", return_value=mock_result):
        with pytest.raises(ResultNotFoundError):
            await result_service.get_result_detail(mock_db_session, mock_user, 11)


@pytest.mark.asyncio
async def test_result_detail_file_result_rejected(mock_db_session, mock_user, mock_result):
    mock_result.type = "file"
    with patch.object(result_crud, "get_result_by_id", return_value=mock_result):
        with pytest.raises(ResultTypeMismatchError):
            await result_service.get_result_detail(mock_db_session, mock_user, 11)


@pytest.mark.asyncio
async def test_result_detail_exam_deleted(mock_db_session, mock_user, mock_result):
    with patch.object(result_crud, "get_result_by_id", return_value=mock_result):
        with patch.object(exam_crud, "get_exam_by_id", return_value=None):
            with pytest.raises(ExamNotFoundError):
                await result_service.get_result_detail(mock_db_session, mock_user, 11)


@pytest.mark.asyncio
async def test_result_detail_unpublished_locked(mock_db_session, mock_user, mock_result, mock_exam):
    mock_exam.results_published = False
    with patch.object(result_crud, "get_result_by_id", return_value=mock_result):
        with patch.object(exam_crud, "get_exam_by_id", return_value=mock_exam):
            with patch.object(question_crud, "get_questions_by_exam_id") as get_questions:
                with pytest.raises(ResultsNotPublishedError):
                    await result_service.get_result_detail(mock_db_session, mock_user, 11)
                get_questions.assert_not_called()


@pytest.mark.asyncio
async def test_result_detail_published(mock_db_session, mock_user, mock_result, mock_exam):
    questions = [make_question(1, "أ"), make_question(2, "ب")]
    with patch.object(result_crud, "get_result_by_id", return_value=mock_result):
        with patch.object(exam_crud, "get_exam_by_id", return_value=mock_exam):
            with patch.object(question_crud, "get_questions_by_exam_id", return_value=questions):
                detail = await result_service.get_result_detail(mock_db_session, mock_user, 11)

    assert detail.score == 1
    assert detail.total_questions == 2
    assert detail.percentage == 50
    assert detail.passed is True
    assert detail.exam_title == "اختبار النحو"
    assert [item.is_correct for item in detail.breakdown] == [True, False]
