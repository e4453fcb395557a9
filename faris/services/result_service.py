import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from faris.crud import exam as exam_crud, question as question_crud, result as result_crud
from faris.exceptions import (
    ExamNotFoundError,
    ResultNotFoundError,
    ResultsNotPublishedError,
    ResultTypeMismatchError,
)
from faris.models.exam import EXAM_TYPE_FILE, Exam
from faris.models.question import Question
from faris.models.result import Result
from faris.models.user import User
from faris.schemas import result as result_schema

logger = logging.getLogger(__name__)

PASS_THRESHOLD = 50


def percentage(score: int | None, total: int | None) -> int:
    """score / total as a whole percentage, halves rounded up; 0 when total is 0"""
    if not total or total <= 0 or score is None:
        return 0
    return (200 * score + total) // (2 * total)


def passed(pct: int) -> bool:
    return pct >= PASS_THRESHOLD


def exam_status(exam: Exam, result: Result | None) -> tuple[str, int | None, str | None]:
    """Listing state of an exam for one student: (status, result_id, grade)"""
    if result is None:
        return "not_started", None, None
    if exam.type == EXAM_TYPE_FILE or result.type == EXAM_TYPE_FILE:
        if result.grade:
            return "graded", result.id, result.grade
        return "submitted", result.id, None
    if exam.results_published:
        return "published", result.id, None
    return "pending", result.id, None


def build_breakdown(
    questions: Sequence[Question],
    answers: dict[str, str] | None,
) -> list[result_schema.ResultBreakdownItem]:
    """Per-question review against the exam's current questions"""
    answers = answers or {}
    items = []
    for question in questions:
        selected = answers.get(str(question.id))
        items.append(
            result_schema.ResultBreakdownItem(
                question_id=question.id,
                text=question.text,
                options=list(question.options),
                selected=selected,
                correct_answer=question.correct_answer,
                is_correct=selected == question.correct_answer,
            )
        )
    return items


async def build_result_detail(
    session: AsyncSession,
    result: Result,
    exam: Exam,
) -> result_schema.ResultDetailResponse:
    questions = await question_crud.get_questions_by_exam_id(session, exam.id)
    pct = percentage(result.score, result.total_questions)
    return result_schema.ResultDetailResponse(
        id=result.id,
        exam_id=exam.id,
        exam_title=exam.title,
        student_id=result.student_id,
        score=result.score or 0,
        total_questions=result.total_questions or 0,
        percentage=pct,
        passed=passed(pct),
        submitted_at=result.submitted_at,
        breakdown=build_breakdown(questions, result.answers),
    )


async def get_result_detail(
    session: AsyncSession,
    user: User,
    result_id: int,
) -> result_schema.ResultDetailResponse:
    """Student view of an mcq result, behind the publish gate"""
    result = await result_crud.get_result_by_id(session, result_id)
    if not result or result.student_id != user.id:
        raise ResultNotFoundError(result_id)
    if result.type == EXAM_TYPE_FILE:
        raise ResultTypeMismatchError()

    exam = await exam_crud.get_exam_by_id(session, result.exam_id)
    if not exam:
        raise ExamNotFoundError(result.exam_id)
    if not exam.results_published:
        raise ResultsNotPublishedError()

    return await build_result_detail(session, result, exam)
