from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from faris.models.question import Question


async def get_question_by_id(session: AsyncSession, question_id: int) -> Question | None:
    result = await session.execute(select(Question).where(Question.id == question_id))
    return result.scalar_one_or_none()


async def get_questions_by_exam_id(session: AsyncSession, exam_id: int) -> Sequence[Question]:
    """Exam questions in creation order"""
    result = await session.execute(
        select(Question)
        .where(Question.exam_id == exam_id)
        .order_by(Question.created_at, Question.id)
    )
    return result.scalars().all()


async def get_questions_by_practice_id(session: AsyncSession, practice_id: int) -> Sequence[Question]:
    """Practice questions in creation order"""
    result = await session.execute(
        select(Question)
        .where(Question.practice_id == practice_id)
        .order_by(Question.created_at, Question.id)
    )
    return result.scalars().all()


async def count_questions_by_exam_ids(session: AsyncSession, exam_ids: list[int]) -> dict[int, int]:
    """Number of questions per exam (exams without questions are omitted)"""
    if not exam_ids:
        return {}
    result = await session.execute(
        select(Question.exam_id, func.count(Question.id))
        .where(Question.exam_id.in_(exam_ids))
        .group_by(Question.exam_id)
    )
    return {exam_id: count for exam_id, count in result.all()}


async def count_questions_by_practice_ids(session: AsyncSession, practice_ids: list[int]) -> dict[int, int]:
    if not practice_ids:
        return {}
    result = await session.execute(
        select(Question.practice_id, func.count(Question.id))
        .where(Question.practice_id.in_(practice_ids))
        .group_by(Question.practice_id)
    )
    return {practice_id: count for practice_id, count in result.all()}


async def create_question(
    session: AsyncSession,
    text: str,
    options: list[str],
    correct_answer: str,
    explanation: str | None = None,
    exam_id: int | None = None,
    practice_id: int | None = None,
) -> Question:
    """Create a question under an exam or a practice set"""
    question = Question(
        exam_id=exam_id,
        practice_id=practice_id,
        text=text,
        options=options,
        correct_answer=correct_answer,
        explanation=explanation,
    )
    session.add(question)
    await session.commit()
    await session.refresh(question)
    return question


async def update_question(
    session: AsyncSession,
    question: Question,
    text: str,
    options: list[str],
    correct_answer: str,
    explanation: str | None = None,
) -> Question:
    question.text = text
    question.options = options
    question.correct_answer = correct_answer
    question.explanation = explanation
    await session.commit()
    await session.refresh(question)
    return question


async def delete_question(session: AsyncSession, question: Question) -> None:
    await session.delete(question)
    await session.commit()
