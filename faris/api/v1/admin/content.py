from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from faris.api.deps import require_admin
from faris.models.base import get_db
from faris.schemas import catalog as catalog_schema
from faris.schemas.grade import GradeCode
from faris.services import admin_service

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

_grade_adapter = TypeAdapter(GradeCode)


@router.get("/explanations", response_model=catalog_schema.ExplanationListResponse)
async def get_explanations(db: AsyncSession = Depends(get_db)):
    return await admin_service.list_explanations(db)


@router.post(
    "/explanations",
    response_model=catalog_schema.ExplanationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_explanation(
    request: catalog_schema.ExplanationCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await admin_service.create_explanation(db, request)


@router.delete("/explanations/{explanation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_explanation(explanation_id: int, db: AsyncSession = Depends(get_db)):
    await admin_service.delete_explanation(db, explanation_id)


@router.get("/library", response_model=catalog_schema.LibraryFileListResponse)
async def get_library(db: AsyncSession = Depends(get_db)):
    return await admin_service.list_library(db)


@router.post(
    "/library",
    response_model=catalog_schema.LibraryFileResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_library_file(
    title: str = Form(..., min_length=3),
    grade: str = Form(...),
    description: str | None = Form(None),
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
):
    """Library upload API (PDF only)"""
    try:
        grade = _grade_adapter.validate_python(grade)
    except ValidationError as e:
        raise RequestValidationError(e.errors())
    data = await file.read()
    return await admin_service.create_library_file(
        db,
        title=title,
        grade=grade,
        description=description,
        filename=file.filename,
        content_type=file.content_type,
        data=data,
    )


@router.delete("/library/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_library_file(file_id: int, db: AsyncSession = Depends(get_db)):
    await admin_service.delete_library_file(db, file_id)
