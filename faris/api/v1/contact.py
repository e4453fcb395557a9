from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from faris.models.base import get_db
from faris.schemas import contact as contact_schema
from faris.services import contact_service

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=contact_schema.ContactMessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    request: contact_schema.ContactMessageCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Public contact form"""
    return await contact_service.send_message(db, request)
