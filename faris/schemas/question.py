from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class QuestionCreateRequest(BaseModel):
    """Question input (exam or practice); correct_answer must be one of the options"""
    text: str = Field(..., min_length=5, description="نص السؤال")
    options: list[str] = Field(..., min_length=4, max_length=4, description="الخيارات (4 إلزامية)")
    correct_answer: str = Field(..., description="الإجابة الصحيحة")
    explanation: str | None = Field(None, description="شرح الإجابة (للتدريبات)")

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        options = [opt.strip() for opt in v]
        if any(not opt for opt in options):
            raise ValueError("الخيار لا يمكن أن يكون فارغًا.")
        return options

    @field_validator("correct_answer")
    @classmethod
    def strip_correct_answer(cls, v: str) -> str:
        return v.strip()


class QuestionResponse(BaseModel):
    """Question with its answer key (admin only)"""
    id: int
    text: str
    options: list[str]
    correct_answer: str
    explanation: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class QuestionListResponse(BaseModel):
    questions: list[QuestionResponse]
    total: int
