from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from faris.api.deps import require_admin
from faris.models.base import get_db
from faris.schemas import contact as contact_schema
from faris.services import contact_service

router = APIRouter(prefix="/admin/messages", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("", response_model=contact_schema.ContactMessageListResponse)
async def get_messages(db: AsyncSession = Depends(get_db)):
    return await contact_service.list_messages(db)


@router.patch("/{message_id}/read", response_model=contact_schema.ContactMessageResponse)
async def toggle_read(message_id: int, db: AsyncSession = Depends(get_db)):
    return await contact_service.toggle_read(db, message_id)


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(message_id: int, db: AsyncSession = Depends(get_db)):
    await contact_service.delete_message(db, message_id)
