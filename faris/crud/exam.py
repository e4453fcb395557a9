from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from faris.models.exam import Exam


async def get_exam_by_id(session: AsyncSession, exam_id: int) -> Exam | None:
    """Get an exam by id"""
    result = await session.execute(select(Exam).where(Exam.id == exam_id))
    return result.scalar_one_or_none()


async def get_exams(session: AsyncSession, grade: str | None = None) -> Sequence[Exam]:
    """Exams newest first, optionally limited to one grade"""
    stmt = select(Exam)
    if grade is not None:
        stmt = stmt.where(Exam.grade == grade)
    stmt = stmt.order_by(Exam.created_at.desc(), Exam.id.desc())
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_exams_by_ids(session: AsyncSession, exam_ids: set[int]) -> dict[int, Exam]:
    if not exam_ids:
        return {}
    result = await session.execute(select(Exam).where(Exam.id.in_(exam_ids)))
    return {exam.id: exam for exam in result.scalars().all()}


async def count_exams(session: AsyncSession, grade: str | None = None) -> int:
    stmt = select(func.count(Exam.id))
    if grade is not None:
        stmt = stmt.where(Exam.grade == grade)
    result = await session.execute(stmt)
    return result.scalar_one()


async def create_exam(session: AsyncSession, **fields) -> Exam:
    """Create an exam (results start unpublished)"""
    exam = Exam(results_published=False, **fields)
    session.add(exam)
    await session.commit()
    await session.refresh(exam)
    return exam


async def update_exam(session: AsyncSession, exam: Exam, **fields) -> Exam:
    for name, value in fields.items():
        setattr(exam, name, value)
    await session.commit()
    await session.refresh(exam)
    return exam


async def publish_exam_results(session: AsyncSession, exam: Exam) -> Exam:
    exam.results_published = True
    await session.commit()
    await session.refresh(exam)
    return exam


async def delete_exam(session: AsyncSession, exam: Exam) -> None:
    """Delete the exam row; its questions and results are not touched"""
    await session.delete(exam)
    await session.commit()
