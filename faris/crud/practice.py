from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from faris.models.practice import Practice


async def get_practice_by_id(session: AsyncSession, practice_id: int) -> Practice | None:
    """Get a practice set by id"""
    result = await session.execute(select(Practice).where(Practice.id == practice_id))
    return result.scalar_one_or_none()


async def get_practices(session: AsyncSession, grade: str | None = None) -> Sequence[Practice]:
    stmt = select(Practice)
    if grade is not None:
        stmt = stmt.where(Practice.grade == grade)
    stmt = stmt.order_by(Practice.created_at.desc(), Practice.id.desc())
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_practices_by_ids(session: AsyncSession, practice_ids: set[int]) -> dict[int, Practice]:
    if not practice_ids:
        return {}
    result = await session.execute(select(Practice).where(Practice.id.in_(practice_ids)))
    return {practice.id: practice for practice in result.scalars().all()}


async def count_practices(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(Practice.id)))
    return result.scalar_one()


async def create_practice(session: AsyncSession, title: str, description: str, grade: str) -> Practice:
    practice = Practice(title=title, description=description, grade=grade, type="mcq")
    session.add(practice)
    await session.commit()
    await session.refresh(practice)
    return practice


async def delete_practice(session: AsyncSession, practice: Practice) -> None:
    """Delete the practice row; questions and practice results are not touched"""
    await session.delete(practice)
    await session.commit()
