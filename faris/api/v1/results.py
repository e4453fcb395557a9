from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from faris.api.deps import require_student_or_admin
from faris.models.base import get_db
from faris.models.user import User
from faris.schemas import result as result_schema
from faris.services import result_service

router = APIRouter(prefix="/results", tags=["results"])


@router.get("/{result_id}", response_model=result_schema.ResultDetailResponse)
async def get_result(
    result_id: int,
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Per-question review of the caller's own result, once published"""
    return await result_service.get_result_detail(db, user, result_id)
