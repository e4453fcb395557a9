from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from faris.models.base import Base, TimestampMixin

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"

STATUS_PENDING = "pending"
STATUS_ACTIVE = "active"


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(20), default=None)
    grade: Mapped[str | None] = mapped_column(String(50), default=None, index=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=ROLE_STUDENT)  # 'student', 'admin'
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=STATUS_PENDING, index=True)  # 'pending', 'active'
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE
