from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from faris.api.deps import require_student_or_admin
from faris.models.base import get_db
from faris.models.user import User
from faris.schemas import catalog as catalog_schema
from faris.services import catalog_service

router = APIRouter(tags=["catalog"])


@router.get("/grades", response_model=list[catalog_schema.GradeResponse])
async def get_grades():
    """Grade levels in display order"""
    return catalog_service.list_grades()


@router.get("/library", response_model=catalog_schema.LibraryFileListResponse)
async def get_library(
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    return await catalog_service.list_library(db, user)


@router.get("/explanations", response_model=catalog_schema.ExplanationListResponse)
async def get_explanations(
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    return await catalog_service.list_explanations(db, user)


@router.get("/dashboard", response_model=catalog_schema.DashboardResponse)
async def get_dashboard(
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Student dashboard API"""
    return await catalog_service.get_dashboard(db, user)
