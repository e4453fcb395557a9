from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from faris.schemas.grade import GradeCode
from faris.schemas.session import ExamSessionView


class McqExamCreateRequest(BaseModel):
    """Multiple-choice exam definition"""
    type: Literal["mcq"]
    title: str = Field(..., min_length=3, description="عنوان الامتحان")
    description: str = Field(..., min_length=10)
    grade: GradeCode
    question_count: int = Field(..., gt=0, description="عدد الأسئلة")
    duration: int = Field(..., gt=0, description="المدة بالدقائق")


class FileExamCreateRequest(BaseModel):
    """File exam metadata (the question file itself arrives as multipart)"""
    type: Literal["file"]
    title: str = Field(..., min_length=3)
    description: str = Field(..., min_length=10)
    grade: GradeCode


ExamCreateRequest = Annotated[
    Union[McqExamCreateRequest, FileExamCreateRequest],
    Field(discriminator="type"),
]


class McqExamUpdateRequest(BaseModel):
    title: str = Field(..., min_length=3)
    description: str = Field(..., min_length=10)
    grade: GradeCode
    question_count: int = Field(..., gt=0)
    duration: int = Field(..., gt=0)


class ExamResponse(BaseModel):
    """Exam definition"""
    id: int
    title: str
    description: str
    grade: str
    type: str
    duration: int | None
    question_count: int | None
    file_url: str | None
    results_published: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class AdminExamResponse(ExamResponse):
    """Exam definition plus the number of questions actually entered"""
    questions_added: int = 0


class AdminExamListResponse(BaseModel):
    exams: list[AdminExamResponse]
    total: int


# not_started | pending | published | submitted | graded
ExamCompletionStatus = Literal["not_started", "pending", "published", "submitted", "graded"]


class StudentExamResponse(ExamResponse):
    """Exam row for the student listing, with the caller's completion state"""
    status: ExamCompletionStatus = "not_started"
    result_id: int | None = None
    result_grade: str | None = Field(None, description="الدرجة المرصودة لامتحانات الملفات")


class StudentExamListResponse(BaseModel):
    exams: list[StudentExamResponse]
    total: int


class ExamStartResponse(BaseModel):
    """Result of entering an exam

    completed   -> the student already has a result; nothing else is loaded
    file        -> a file exam; `exam` carries the question file link
    in_progress -> a live mcq session
    empty       -> mcq exam with no questions yet
    """
    status: Literal["completed", "file", "in_progress", "empty"]
    message: str | None = None
    exam: ExamResponse | None = None
    session: ExamSessionView | None = None


class ExamSubmitResponse(BaseModel):
    result_id: int
    exam_id: int
    score: int
    total_questions: int
    submitted_at: datetime
    message: str = "تم استلام إجاباتك بنجاح."


class FileSubmissionResponse(BaseModel):
    id: int
    exam_id: int
    file_url: str
    submitted_at: datetime
