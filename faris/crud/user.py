from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from faris.models.user import ROLE_STUDENT, STATUS_PENDING, User


async def get_user_by_id(session: AsyncSession, user_id: int) -> User | None:
    """Get a user by id"""
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """Get a user by (normalized) email"""
    result = await session.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def get_users_by_ids(session: AsyncSession, user_ids: set[int]) -> dict[int, User]:
    if not user_ids:
        return {}
    result = await session.execute(select(User).where(User.id.in_(user_ids)))
    return {user.id: user for user in result.scalars().all()}


async def get_students(session: AsyncSession) -> Sequence[User]:
    """All students, newest first"""
    result = await session.execute(
        select(User)
        .where(User.role == ROLE_STUDENT)
        .order_by(User.created_at.desc(), User.id.desc())
    )
    return result.scalars().all()


async def get_pending_students(session: AsyncSession) -> Sequence[User]:
    result = await session.execute(
        select(User)
        .where(User.status == STATUS_PENDING)
        .order_by(User.created_at.desc(), User.id.desc())
    )
    return result.scalars().all()


async def count_students(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(User.id)).where(User.role == ROLE_STUDENT))
    return result.scalar_one()


async def count_pending_students(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(User.id)).where(User.status == STATUS_PENDING))
    return result.scalar_one()


async def create_user(
    session: AsyncSession,
    username: str,
    email: str,
    password_hash: str,
    phone: str | None = None,
    grade: str | None = None,
    role: str = ROLE_STUDENT,
    status: str = STATUS_PENDING,
) -> User:
    """Create a user profile"""
    user = User(
        username=username,
        email=email.strip().lower(),
        phone=phone,
        grade=grade,
        role=role,
        status=status,
        password_hash=password_hash,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def update_user_profile(session: AsyncSession, user: User, username: str, phone: str) -> User:
    user.username = username
    user.phone = phone
    await session.commit()
    await session.refresh(user)
    return user


async def update_user_status(session: AsyncSession, user: User, status: str) -> User:
    user.status = status
    await session.commit()
    await session.refresh(user)
    return user


async def update_user_password(session: AsyncSession, user: User, password_hash: str) -> User:
    user.password_hash = password_hash
    await session.commit()
    await session.refresh(user)
    return user


async def delete_user(session: AsyncSession, user: User) -> None:
    """Remove the profile row only; results stay behind"""
    await session.delete(user)
    await session.commit()
