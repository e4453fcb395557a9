from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from faris.api.deps import require_student_or_admin
from faris.models.base import get_db
from faris.models.user import User
from faris.schemas import practice as practice_schema, session as session_schema
from faris.services import catalog_service, practice_service

router = APIRouter(prefix="/practice", tags=["practice"])


@router.get("", response_model=practice_schema.PracticeListResponse)
async def get_practices(
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    return await catalog_service.list_practices(db, user)


@router.post("/{practice_id}/session", response_model=practice_schema.PracticeStartResponse)
async def start_practice(
    practice_id: int,
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Start or resume a practice set"""
    return await practice_service.start_practice(db, user, practice_id)


@router.get("/{practice_id}/session", response_model=session_schema.PracticeSessionView)
async def get_session(
    practice_id: int,
    user: User = Depends(require_student_or_admin),
):
    return practice_service.build_session_view(practice_service.get_live_session(user, practice_id))


@router.post("/{practice_id}/session/answer", response_model=session_schema.PracticeSessionView)
async def select_option(
    practice_id: int,
    request: session_schema.AnswerRequest,
    user: User = Depends(require_student_or_admin),
):
    """Answer the current question; feedback is immediate"""
    return practice_service.select_option(user, practice_id, request)


@router.post("/{practice_id}/session/next", response_model=session_schema.PracticeSessionView)
async def next_question(
    practice_id: int,
    user: User = Depends(require_student_or_admin),
):
    return practice_service.move(user, practice_id, forward=True)


@router.post("/{practice_id}/session/previous", response_model=session_schema.PracticeSessionView)
async def previous_question(
    practice_id: int,
    user: User = Depends(require_student_or_admin),
):
    return practice_service.move(user, practice_id, forward=False)


@router.post("/{practice_id}/session/finish", response_model=practice_schema.PracticeFinishResponse)
async def finish_practice(
    practice_id: int,
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    return await practice_service.finish_practice(db, user, practice_id)


@router.post("/{practice_id}/session/restart", response_model=session_schema.PracticeSessionView)
async def restart_practice(
    practice_id: int,
    user: User = Depends(require_student_or_admin),
):
    return practice_service.restart(user, practice_id)


@router.delete("/{practice_id}/session", status_code=status.HTTP_204_NO_CONTENT)
async def abandon_session(
    practice_id: int,
    user: User = Depends(require_student_or_admin),
):
    practice_service.abandon_session(user, practice_id)
