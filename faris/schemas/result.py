from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class ResultBreakdownItem(BaseModel):
    """One question of a graded mcq attempt"""
    question_id: int
    text: str
    options: list[str]
    selected: str | None
    correct_answer: str
    is_correct: bool


class ResultDetailResponse(BaseModel):
    """Graded mcq result with per-question review"""
    id: int
    exam_id: int
    exam_title: str
    student_id: int
    score: int
    total_questions: int
    percentage: int
    passed: bool
    submitted_at: datetime
    breakdown: list[ResultBreakdownItem]


class AdminExamResultResponse(BaseModel):
    """Exam result row of the admin results table"""
    id: int
    student_id: int
    student_name: str
    student_email: str
    exam_id: int
    exam_title: str
    type: str
    score: int | None
    total_questions: int | None
    percentage: int | None
    file_url: str | None
    grade: str | None
    submitted_at: datetime


class AdminPracticeResultResponse(BaseModel):
    id: int
    student_id: int
    student_name: str
    student_email: str
    practice_id: int
    practice_title: str
    score: int
    total_questions: int
    percentage: int
    submitted_at: datetime


class AdminResultsResponse(BaseModel):
    exam_results: list[AdminExamResultResponse]
    practice_results: list[AdminPracticeResultResponse]


class GradeSubmitRequest(BaseModel):
    """Free-text mark for a file submission"""
    grade: str = Field(..., min_length=1, description="الدرجة")

    @field_validator("grade")
    @classmethod
    def validate_grade(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("الدرجة مطلوبة.")
        return v
