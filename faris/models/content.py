from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from faris.models.base import Base, TimestampMixin


class LibraryFile(Base, TimestampMixin):
    __tablename__ = "library_files"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    grade: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    file_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    file_path: Mapped[str] = mapped_column(String(1024), nullable=False)


class Explanation(Base, TimestampMixin):
    __tablename__ = "explanations"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    grade: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    video_url: Mapped[str] = mapped_column(String(1024), nullable=False)
