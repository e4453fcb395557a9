from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from faris.api.deps import require_admin
from faris.models.base import get_db
from faris.schemas import result as result_schema
from faris.services import admin_service

router = APIRouter(prefix="/admin/results", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("", response_model=result_schema.AdminResultsResponse)
async def get_results(db: AsyncSession = Depends(get_db)):
    """Every exam and practice result, newest first"""
    return await admin_service.list_results(db)


@router.get("/{result_id}", response_model=result_schema.ResultDetailResponse)
async def get_result(result_id: int, db: AsyncSession = Depends(get_db)):
    return await admin_service.get_result_detail(db, result_id)


@router.patch("/{result_id}/grade", response_model=result_schema.AdminExamResultResponse)
async def grade_result(
    result_id: int,
    request: result_schema.GradeSubmitRequest,
    db: AsyncSession = Depends(get_db),
):
    """Record the mark of a file submission"""
    return await admin_service.grade_result(db, result_id, request)


@router.get("/{result_id}/download")
async def download_result_file(result_id: int, db: AsyncSession = Depends(get_db)):
    file_url = await admin_service.get_result_file_url(db, result_id)
    return RedirectResponse(url=file_url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.delete("/{result_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_result(result_id: int, db: AsyncSession = Depends(get_db)):
    await admin_service.delete_result(db, result_id)
