from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from faris.models.base import Base, TimestampMixin


class Practice(Base, TimestampMixin):
    __tablename__ = "practices"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    grade: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(10), nullable=False, default="mcq")
