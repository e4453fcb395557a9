from datetime import datetime

from sqlalchemy import JSON, DateTime, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from faris.models.base import Base


class Result(Base):
    """A student's finalized exam attempt (mcq score or uploaded answer file)"""
    __tablename__ = "results"
    __table_args__ = (
        UniqueConstraint("student_id", "exam_id", name="uq_results_student_exam"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    student_id: Mapped[int] = mapped_column(nullable=False, index=True)
    exam_id: Mapped[int] = mapped_column(nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(10), nullable=False)  # 'mcq', 'file'
    score: Mapped[int | None] = mapped_column(default=None)
    total_questions: Mapped[int | None] = mapped_column(default=None)
    answers: Mapped[dict[str, str] | None] = mapped_column(JSON, default=None)  # question id -> option
    file_url: Mapped[str | None] = mapped_column(String(1024), default=None)
    file_path: Mapped[str | None] = mapped_column(String(1024), default=None)
    grade: Mapped[str | None] = mapped_column(Text, default=None)  # free-text mark for file exams
    # snapshots of the exam at submission time
    exam_title: Mapped[str | None] = mapped_column(String(255), default=None)
    exam_grade: Mapped[str | None] = mapped_column(String(50), default=None)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class PracticeResult(Base):
    """A finalized practice attempt; several per student and practice are allowed"""
    __tablename__ = "practice_results"

    id: Mapped[int] = mapped_column(primary_key=True)
    student_id: Mapped[int] = mapped_column(nullable=False, index=True)
    practice_id: Mapped[int] = mapped_column(nullable=False, index=True)
    score: Mapped[int] = mapped_column(nullable=False)
    total_questions: Mapped[int] = mapped_column(nullable=False)
    answers: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
