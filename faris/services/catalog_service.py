import logging
from typing import Awaitable, Callable, Sequence, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from faris.core.grades import grade_choices, grade_label
from faris.crud import (
    content as content_crud,
    exam as exam_crud,
    practice as practice_crud,
    result as result_crud,
)
from faris.models.user import User
from faris.schemas import (
    catalog as catalog_schema,
    exam as exam_schema,
    practice as practice_schema,
)
from faris.services import result_service

logger = logging.getLogger(__name__)

RECENT_RESULTS_LIMIT = 5

T = TypeVar("T")


async def _for_grade(
    session: AsyncSession,
    user: User,
    fetch: Callable[..., Awaitable[Sequence[T]]],
) -> Sequence[T]:
    """Rows visible to the caller: admins see every grade, students only their own"""
    if user.is_admin:
        return await fetch(session)
    if not user.grade:
        return []
    return await fetch(session, grade=user.grade)


def list_grades() -> list[catalog_schema.GradeResponse]:
    return [catalog_schema.GradeResponse(**choice) for choice in grade_choices()]


async def list_exams(session: AsyncSession, user: User) -> exam_schema.StudentExamListResponse:
    """Exams for the caller's grade with the caller's completion state"""
    exams = await _for_grade(session, user, exam_crud.get_exams)
    results = await result_crud.get_results_by_student(session, user.id)
    result_by_exam = {}
    for result in results:
        result_by_exam.setdefault(result.exam_id, result)

    items = []
    for exam in exams:
        status, result_id, result_grade = result_service.exam_status(exam, result_by_exam.get(exam.id))
        item = exam_schema.StudentExamResponse.model_validate(exam)
        item.status = status
        item.result_id = result_id
        item.result_grade = result_grade
        items.append(item)
    return exam_schema.StudentExamListResponse(exams=items, total=len(items))


async def list_practices(session: AsyncSession, user: User) -> practice_schema.PracticeListResponse:
    practices = await _for_grade(session, user, practice_crud.get_practices)
    items = [practice_schema.PracticeResponse.model_validate(p) for p in practices]
    return practice_schema.PracticeListResponse(practices=items, total=len(items))


async def list_library(session: AsyncSession, user: User) -> catalog_schema.LibraryFileListResponse:
    files = await _for_grade(session, user, content_crud.get_library_files)
    items = [catalog_schema.LibraryFileResponse.model_validate(f) for f in files]
    return catalog_schema.LibraryFileListResponse(files=items, total=len(items))


async def list_explanations(session: AsyncSession, user: User) -> catalog_schema.ExplanationListResponse:
    explanations = await _for_grade(session, user, content_crud.get_explanations)
    items = [catalog_schema.ExplanationResponse.model_validate(e) for e in explanations]
    return catalog_schema.ExplanationListResponse(explanations=items, total=len(items))


def average_score(results: Sequence) -> int:
    """Mean percentage over results with questions, divided by the number of all results"""
    if not results:
        return 0
    total = sum(
        r.score / r.total_questions * 100
        for r in results
        if r.total_questions and r.score is not None
    )
    return int(total / len(results) + 0.5)


async def get_dashboard(session: AsyncSession, user: User) -> catalog_schema.DashboardResponse:
    """Student dashboard: available exams, average score, latest results"""
    if user.grade:
        available = await exam_crud.count_exams(session, grade=user.grade)
    else:
        available = 0

    results = await result_crud.get_results_by_student(session, user.id)
    recent = [
        catalog_schema.RecentResultResponse(
            id=r.id,
            exam_title=r.exam_title or "امتحان",
            grade=grade_label(r.exam_grade) or "غير محدد",
            score=f"{r.score}/{r.total_questions}" if r.total_questions is not None else (r.grade or "-"),
            submitted_at=r.submitted_at,
        )
        for r in results[:RECENT_RESULTS_LIMIT]
    ]
    return catalog_schema.DashboardResponse(
        available_exams=available,
        average_score=average_score(results),
        recent_results=recent,
    )
