from sqlalchemy import JSON, Text
from sqlalchemy.orm import Mapped, mapped_column

from faris.models.base import Base, TimestampMixin


class Question(Base, TimestampMixin):
    """One multiple-choice item owned by an exam or a practice set

    exam_id / practice_id are plain indexed columns, not foreign keys:
    deleting the parent leaves its questions behind.
    """
    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True)
    exam_id: Mapped[int | None] = mapped_column(default=None, index=True)
    practice_id: Mapped[int | None] = mapped_column(default=None, index=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    options: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    correct_answer: Mapped[str] = mapped_column(Text, nullable=False)
    explanation: Mapped[str | None] = mapped_column(Text, default=None)
