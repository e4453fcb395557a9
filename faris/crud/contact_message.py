from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faris.models.contact_message import ContactMessage


async def get_message_by_id(session: AsyncSession, message_id: int) -> ContactMessage | None:
    result = await session.execute(select(ContactMessage).where(ContactMessage.id == message_id))
    return result.scalar_one_or_none()


async def get_messages(session: AsyncSession) -> Sequence[ContactMessage]:
    result = await session.execute(
        select(ContactMessage).order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
    )
    return result.scalars().all()


async def create_message(session: AsyncSession, name: str, email: str, message: str) -> ContactMessage:
    """Store a contact form message (unread)"""
    record = ContactMessage(name=name, email=email, message=message, read=False)
    session.add(record)
    await session.commit()
    await session.refresh(record)
    return record


async def set_message_read(session: AsyncSession, record: ContactMessage, read: bool) -> ContactMessage:
    record.read = read
    await session.commit()
    await session.refresh(record)
    return record


async def delete_message(session: AsyncSession, record: ContactMessage) -> None:
    await session.delete(record)
    await session.commit()
