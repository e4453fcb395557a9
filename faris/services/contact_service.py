import logging

from sqlalchemy.ext.asyncio import AsyncSession

from faris.crud import contact_message as message_crud
from faris.exceptions import ContactMessageNotFoundError
from faris.schemas import contact as contact_schema

logger = logging.getLogger(__name__)


async def send_message(
    session: AsyncSession,
    request: contact_schema.ContactMessageCreateRequest,
) -> contact_schema.ContactMessageResponse:
    record = await message_crud.create_message(
        session,
        name=request.name,
        email=request.email,
        message=request.message,
    )
    logger.info(f"Contact message received: message_id={record.id}")
    return contact_schema.ContactMessageResponse.model_validate(record)


async def list_messages(session: AsyncSession) -> contact_schema.ContactMessageListResponse:
    records = await message_crud.get_messages(session)
    items = [contact_schema.ContactMessageResponse.model_validate(r) for r in records]
    return contact_schema.ContactMessageListResponse(messages=items, total=len(items))


async def toggle_read(session: AsyncSession, message_id: int) -> contact_schema.ContactMessageResponse:
    record = await message_crud.get_message_by_id(session, message_id)
    if not record:
        raise ContactMessageNotFoundError(message_id)
    record = await message_crud.set_message_read(session, record, not record.read)
    return contact_schema.ContactMessageResponse.model_validate(record)


async def delete_message(session: AsyncSession, message_id: int) -> None:
    record = await message_crud.get_message_by_id(session, message_id)
    if not record:
        raise ContactMessageNotFoundError(message_id)
    await message_crud.delete_message(session, record)
    logger.info(f"Contact message deleted: message_id={message_id}")
