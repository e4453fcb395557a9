from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from faris.models.content import Explanation, LibraryFile


async def get_library_file_by_id(session: AsyncSession, file_id: int) -> LibraryFile | None:
    result = await session.execute(select(LibraryFile).where(LibraryFile.id == file_id))
    return result.scalar_one_or_none()


async def get_library_files(session: AsyncSession, grade: str | None = None) -> Sequence[LibraryFile]:
    """Library files newest first, optionally limited to one grade"""
    stmt = select(LibraryFile)
    if grade is not None:
        stmt = stmt.where(LibraryFile.grade == grade)
    stmt = stmt.order_by(LibraryFile.created_at.desc(), LibraryFile.id.desc())
    result = await session.execute(stmt)
    return result.scalars().all()


async def count_library_files(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(LibraryFile.id)))
    return result.scalar_one()


async def create_library_file(
    session: AsyncSession,
    title: str,
    grade: str,
    file_url: str,
    file_path: str,
    description: str | None = None,
) -> LibraryFile:
    library_file = LibraryFile(
        title=title,
        description=description,
        grade=grade,
        file_url=file_url,
        file_path=file_path,
    )
    session.add(library_file)
    await session.commit()
    await session.refresh(library_file)
    return library_file


async def delete_library_file(session: AsyncSession, library_file: LibraryFile) -> None:
    await session.delete(library_file)
    await session.commit()


async def get_explanation_by_id(session: AsyncSession, explanation_id: int) -> Explanation | None:
    result = await session.execute(select(Explanation).where(Explanation.id == explanation_id))
    return result.scalar_one_or_none()


async def get_explanations(session: AsyncSession, grade: str | None = None) -> Sequence[Explanation]:
    """Video explanations newest first, optionally limited to one grade"""
    stmt = select(Explanation)
    if grade is not None:
        stmt = stmt.where(Explanation.grade == grade)
    stmt = stmt.order_by(Explanation.created_at.desc(), Explanation.id.desc())
    result = await session.execute(stmt)
    return result.scalars().all()


async def count_explanations(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(Explanation.id)))
    return result.scalar_one()


async def create_explanation(
    session: AsyncSession,
    title: str,
    grade: str,
    video_url: str,
    description: str | None = None,
) -> Explanation:
    explanation = Explanation(
        title=title,
        description=description,
        grade=grade,
        video_url=video_url,
    )
    session.add(explanation)
    await session.commit()
    await session.refresh(explanation)
    return explanation


async def delete_explanation(session: AsyncSession, explanation: Explanation) -> None:
    await session.delete(explanation)
    await session.commit()
