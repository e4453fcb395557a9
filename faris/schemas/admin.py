from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from faris.schemas.auth import UserResponse


class DashboardStatsResponse(BaseModel):
    """Admin dashboard counters"""
    students: int
    exams: int
    practices: int
    explanations: int
    library_files: int
    pending_students: int
    pending: list[UserResponse]


class StudentListResponse(BaseModel):
    students: list[UserResponse]
    total: int


class StudentStatusUpdateRequest(BaseModel):
    status: Literal["pending", "active"]


class StudentExamResultRow(BaseModel):
    id: int
    exam_id: int
    exam_title: str
    type: str
    score: int | None
    total_questions: int | None
    percentage: int | None
    grade: str | None
    submitted_at: datetime


class StudentDetailResponse(BaseModel):
    student: UserResponse
    results: list[StudentExamResultRow]
