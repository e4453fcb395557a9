from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from faris.api.deps import require_admin
from faris.models.base import get_db
from faris.schemas import exam as exam_schema, question as question_schema
from faris.services import admin_service

router = APIRouter(prefix="/admin/exams", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("", response_model=exam_schema.AdminExamListResponse)
async def get_exams(db: AsyncSession = Depends(get_db)):
    """Exams with the number of questions entered so far"""
    return await admin_service.list_exams(db)


@router.post("", response_model=exam_schema.ExamResponse, status_code=status.HTTP_201_CREATED)
async def create_exam(
    request: exam_schema.ExamCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await admin_service.create_exam(db, request)


@router.post("/file", response_model=exam_schema.ExamResponse, status_code=status.HTTP_201_CREATED)
async def create_file_exam(
    title: str = Form(...),
    description: str = Form(...),
    grade: str = Form(...),
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
):
    """File exam API (multipart: metadata + question file)"""
    try:
        request = exam_schema.FileExamCreateRequest(
            type="file", title=title, description=description, grade=grade
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())
    data = await file.read()
    return await admin_service.create_file_exam(db, request, file.filename, data)


@router.put("/{exam_id}", response_model=exam_schema.ExamResponse)
async def update_exam(
    exam_id: int,
    request: exam_schema.McqExamUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await admin_service.update_exam(db, exam_id, request)


@router.delete("/{exam_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exam(exam_id: int, db: AsyncSession = Depends(get_db)):
    await admin_service.delete_exam(db, exam_id)


@router.post("/{exam_id}/publish", response_model=exam_schema.ExamResponse)
async def publish_results(exam_id: int, db: AsyncSession = Depends(get_db)):
    """Make the exam's results visible to students"""
    return await admin_service.publish_results(db, exam_id)


@router.get("/{exam_id}/questions", response_model=question_schema.QuestionListResponse)
async def get_questions(exam_id: int, db: AsyncSession = Depends(get_db)):
    return await admin_service.list_exam_questions(db, exam_id)


@router.post(
    "/{exam_id}/questions",
    response_model=question_schema.QuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_question(
    exam_id: int,
    request: question_schema.QuestionCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await admin_service.add_exam_question(db, exam_id, request)


@router.put("/{exam_id}/questions/{question_id}", response_model=question_schema.QuestionResponse)
async def update_question(
    exam_id: int,
    question_id: int,
    request: question_schema.QuestionCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await admin_service.update_question(db, question_id, request, exam_id=exam_id)


@router.delete("/{exam_id}/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(exam_id: int, question_id: int, db: AsyncSession = Depends(get_db)):
    await admin_service.delete_question(db, question_id, exam_id=exam_id)
