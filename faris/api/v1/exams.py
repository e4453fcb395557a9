from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from faris.api.deps import require_student_or_admin
from faris.models.base import get_db
from faris.models.user import User
from faris.schemas import exam as exam_schema, session as session_schema
from faris.services import catalog_service, exam_service

router = APIRouter(prefix="/exams", tags=["exams"])


@router.get("", response_model=exam_schema.StudentExamListResponse)
async def get_exams(
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Exams of the caller's grade with completion state"""
    return await catalog_service.list_exams(db, user)


@router.post("/{exam_id}/session", response_model=exam_schema.ExamStartResponse)
async def start_exam(
    exam_id: int,
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Start or resume an exam"""
    return await exam_service.start_exam(db, user, exam_id)


@router.get("/{exam_id}/session", response_model=session_schema.ExamSessionView)
async def get_session(
    exam_id: int,
    user: User = Depends(require_student_or_admin),
):
    return exam_service.build_session_view(exam_service.get_live_session(user, exam_id))


@router.post("/{exam_id}/session/answer", response_model=session_schema.ExamSessionView)
async def select_option(
    exam_id: int,
    request: session_schema.AnswerRequest,
    user: User = Depends(require_student_or_admin),
):
    return exam_service.select_option(user, exam_id, request)


@router.post("/{exam_id}/session/next", response_model=session_schema.ExamSessionView)
async def next_question(
    exam_id: int,
    user: User = Depends(require_student_or_admin),
):
    return exam_service.move(user, exam_id, forward=True)


@router.post("/{exam_id}/session/previous", response_model=session_schema.ExamSessionView)
async def previous_question(
    exam_id: int,
    user: User = Depends(require_student_or_admin),
):
    return exam_service.move(user, exam_id, forward=False)


@router.post("/{exam_id}/session/submit", response_model=exam_schema.ExamSubmitResponse)
async def submit_exam(
    exam_id: int,
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Submit API (every question must be answered)"""
    return await exam_service.submit_exam(db, user, exam_id)


@router.delete("/{exam_id}/session", status_code=status.HTTP_204_NO_CONTENT)
async def abandon_session(
    exam_id: int,
    user: User = Depends(require_student_or_admin),
):
    exam_service.abandon_session(user, exam_id)


@router.get("/{exam_id}/submission", response_model=exam_schema.FileSubmissionResponse | None)
async def get_submission(
    exam_id: int,
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """The caller's uploaded answer file, or null"""
    return await exam_service.get_submission(db, user, exam_id)


@router.post(
    "/{exam_id}/submission",
    response_model=exam_schema.FileSubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_file(
    exam_id: int,
    file: UploadFile = File(...),
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """File exam answer upload API"""
    data = await file.read()
    return await exam_service.submit_file(db, user, exam_id, file.filename, data)
