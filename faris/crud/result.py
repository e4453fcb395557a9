from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faris.models.exam import EXAM_TYPE_FILE, EXAM_TYPE_MCQ
from faris.models.result import PracticeResult, Result


async def get_result_by_id(session: AsyncSession, result_id: int) -> Result | None:
    """Get an exam result by id"""
    result = await session.execute(select(Result).where(Result.id == result_id))
    return result.scalar_one_or_none()


async def get_result_by_student_and_exam(
    session: AsyncSession,
    student_id: int,
    exam_id: int,
) -> Result | None:
    """Existing result for (student, exam), if any"""
    result = await session.execute(
        select(Result)
        .where(Result.student_id == student_id, Result.exam_id == exam_id)
        .order_by(Result.id)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_results_by_student(session: AsyncSession, student_id: int) -> Sequence[Result]:
    """A student's exam results, newest first"""
    result = await session.execute(
        select(Result)
        .where(Result.student_id == student_id)
        .order_by(Result.submitted_at.desc(), Result.id.desc())
    )
    return result.scalars().all()


async def get_all_results(session: AsyncSession) -> Sequence[Result]:
    result = await session.execute(
        select(Result).order_by(Result.submitted_at.desc(), Result.id.desc())
    )
    return result.scalars().all()


async def create_mcq_result(
    session: AsyncSession,
    student_id: int,
    exam_id: int,
    score: int,
    total_questions: int,
    answers: dict[str, str],
    exam_title: str | None = None,
    exam_grade: str | None = None,
) -> Result:
    """Write the single result of a graded mcq attempt

    Raises IntegrityError when (student_id, exam_id) already has a result.
    """
    record = Result(
        student_id=student_id,
        exam_id=exam_id,
        type=EXAM_TYPE_MCQ,
        score=score,
        total_questions=total_questions,
        answers=answers,
        exam_title=exam_title,
        exam_grade=exam_grade,
    )
    session.add(record)
    await session.commit()
    await session.refresh(record)
    return record


async def create_file_result(
    session: AsyncSession,
    student_id: int,
    exam_id: int,
    file_url: str,
    file_path: str,
    exam_title: str | None = None,
    exam_grade: str | None = None,
) -> Result:
    """Write the submission record of a file exam"""
    record = Result(
        student_id=student_id,
        exam_id=exam_id,
        type=EXAM_TYPE_FILE,
        file_url=file_url,
        file_path=file_path,
        exam_title=exam_title,
        exam_grade=exam_grade,
    )
    session.add(record)
    await session.commit()
    await session.refresh(record)
    return record


async def update_result_grade(session: AsyncSession, record: Result, grade: str) -> Result:
    record.grade = grade
    await session.commit()
    await session.refresh(record)
    return record


async def delete_result(session: AsyncSession, record: Result) -> None:
    await session.delete(record)
    await session.commit()


async def create_practice_result(
    session: AsyncSession,
    student_id: int,
    practice_id: int,
    score: int,
    total_questions: int,
    answers: dict[str, str],
) -> PracticeResult:
    """Write a practice result (retakes add new rows)"""
    record = PracticeResult(
        student_id=student_id,
        practice_id=practice_id,
        score=score,
        total_questions=total_questions,
        answers=answers,
    )
    session.add(record)
    await session.commit()
    await session.refresh(record)
    return record


async def get_all_practice_results(session: AsyncSession) -> Sequence[PracticeResult]:
    result = await session.execute(
        select(PracticeResult).order_by(PracticeResult.submitted_at.desc(), PracticeResult.id.desc())
    )
    return result.scalars().all()
