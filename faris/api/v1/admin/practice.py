from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from faris.api.deps import require_admin
from faris.models.base import get_db
from faris.schemas import practice as practice_schema, question as question_schema
from faris.services import admin_service

router = APIRouter(prefix="/admin/practice", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("", response_model=practice_schema.AdminPracticeListResponse)
async def get_practices(db: AsyncSession = Depends(get_db)):
    return await admin_service.list_practices(db)


@router.post("", response_model=practice_schema.PracticeResponse, status_code=status.HTTP_201_CREATED)
async def create_practice(
    request: practice_schema.PracticeCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await admin_service.create_practice(db, request)


@router.delete("/{practice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_practice(practice_id: int, db: AsyncSession = Depends(get_db)):
    await admin_service.delete_practice(db, practice_id)


@router.get("/{practice_id}/questions", response_model=question_schema.QuestionListResponse)
async def get_questions(practice_id: int, db: AsyncSession = Depends(get_db)):
    return await admin_service.list_practice_questions(db, practice_id)


@router.post(
    "/{practice_id}/questions",
    response_model=question_schema.QuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_question(
    practice_id: int,
    request: question_schema.QuestionCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Practice question API (explanation shown after answering)"""
    return await admin_service.add_practice_question(db, practice_id, request)


@router.put("/{practice_id}/questions/{question_id}", response_model=question_schema.QuestionResponse)
async def update_question(
    practice_id: int,
    question_id: int,
    request: question_schema.QuestionCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await admin_service.update_question(db, question_id, request, practice_id=practice_id)


@router.delete("/{practice_id}/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(practice_id: int, question_id: int, db: AsyncSession = Depends(get_db)):
    await admin_service.delete_question(db, question_id, practice_id=practice_id)
