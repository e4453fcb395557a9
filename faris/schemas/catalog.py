from datetime import datetime
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from faris.schemas.grade import GradeCode

YOUTUBE_HOSTS = {"youtube.com", "www.youtube.com", "m.youtube.com", "youtu.be"}


class GradeResponse(BaseModel):
    value: str
    label: str


class LibraryFileResponse(BaseModel):
    id: int
    title: str
    description: str | None
    grade: str
    file_url: str
    created_at: datetime

    model_config = {"from_attributes": True}


class LibraryFileListResponse(BaseModel):
    files: list[LibraryFileResponse]
    total: int


class ExplanationCreateRequest(BaseModel):
    """Video explanation (YouTube links only)"""
    title: str = Field(..., min_length=3)
    description: str | None = None
    video_url: str
    grade: GradeCode

    @field_validator("video_url")
    @classmethod
    def validate_video_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("رابط يوتيوب غير صحيح.")
        if (parsed.hostname or "").lower() not in YOUTUBE_HOSTS:
            raise ValueError("يجب أن يكون الرابط من يوتيوب.")
        return v


class ExplanationResponse(BaseModel):
    id: int
    title: str
    description: str | None
    grade: str
    video_url: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ExplanationListResponse(BaseModel):
    explanations: list[ExplanationResponse]
    total: int


class RecentResultResponse(BaseModel):
    """Row of the student dashboard's latest exams"""
    id: int
    exam_title: str
    grade: str
    status: str = "completed"
    score: str = Field(..., description="score/total")
    submitted_at: datetime


class DashboardResponse(BaseModel):
    """Student dashboard"""
    available_exams: int
    average_score: int
    recent_results: list[RecentResultResponse]
