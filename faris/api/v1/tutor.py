from fastapi import APIRouter, Depends

from faris.api.deps import require_student_or_admin
from faris.models.user import User
from faris.schemas import tutor as tutor_schema
from faris.services import tutor_service

router = APIRouter(prefix="/tutor", tags=["tutor"])


@router.post("", response_model=tutor_schema.TutorResponse)
async def ask_tutor(
    request: tutor_schema.TutorRequest,
    user: User = Depends(require_student_or_admin),
):
    """AI tutor API: returns the transcript with the model's reply appended"""
    history, failed = await tutor_service.reply(request.history)
    return tutor_schema.TutorResponse(history=history, failed=failed)
