from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from faris.models.base import Base, TimestampMixin

EXAM_TYPE_MCQ = "mcq"
EXAM_TYPE_FILE = "file"


class Exam(Base, TimestampMixin):
    __tablename__ = "exams"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    grade: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(10), nullable=False)  # 'mcq', 'file'
    # mcq only: minutes, and the question count the admin declared
    duration: Mapped[int | None] = mapped_column(default=None)
    question_count: Mapped[int | None] = mapped_column(default=None)
    # file only
    file_url: Mapped[str | None] = mapped_column(String(1024), default=None)
    file_path: Mapped[str | None] = mapped_column(String(1024), default=None)
    results_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    @property
    def is_mcq(self) -> bool:
        return self.type == EXAM_TYPE_MCQ
