from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from faris.api.deps import require_admin
from faris.models.base import get_db
from faris.schemas import admin as admin_schema, auth as auth_schema
from faris.services import admin_service

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=admin_schema.DashboardStatsResponse)
async def get_dashboard(db: AsyncSession = Depends(get_db)):
    """Admin dashboard counters and pending students"""
    return await admin_service.get_dashboard_stats(db)


@router.get("/students", response_model=admin_schema.StudentListResponse)
async def get_students(db: AsyncSession = Depends(get_db)):
    return await admin_service.list_students(db)


@router.get("/students/{student_id}", response_model=admin_schema.StudentDetailResponse)
async def get_student(student_id: int, db: AsyncSession = Depends(get_db)):
    return await admin_service.get_student_detail(db, student_id)


@router.patch("/students/{student_id}/status", response_model=auth_schema.UserResponse)
async def update_student_status(
    student_id: int,
    request: admin_schema.StudentStatusUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Approve (or suspend) a student"""
    return await admin_service.update_student_status(db, student_id, request)


@router.delete("/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(student_id: int, db: AsyncSession = Depends(get_db)):
    await admin_service.delete_student(db, student_id)
