from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from faris.schemas.grade import GradeCode
from faris.schemas.session import PracticeSessionView


class PracticeCreateRequest(BaseModel):
    title: str = Field(..., min_length=3, description="عنوان التدريب")
    description: str = Field(..., min_length=10)
    grade: GradeCode


class PracticeResponse(BaseModel):
    id: int
    title: str
    description: str
    grade: str
    type: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AdminPracticeResponse(PracticeResponse):
    questions_added: int = 0


class PracticeListResponse(BaseModel):
    practices: list[PracticeResponse]
    total: int


class AdminPracticeListResponse(BaseModel):
    practices: list[AdminPracticeResponse]
    total: int


class PracticeStartResponse(BaseModel):
    status: Literal["in_progress", "empty"]
    message: str | None = None
    practice: PracticeResponse
    session: PracticeSessionView | None = None


class PracticeFinishResponse(BaseModel):
    practice_result_id: int
    score: int
    total_questions: int
    percentage: int
    passed: bool
    session: PracticeSessionView
    message: str = "تم إنهاء التدريب بنجاح، يمكنك مراجعة إجاباتك."
