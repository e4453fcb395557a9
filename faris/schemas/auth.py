from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, computed_field, model_validator

from faris.core.grades import grade_label
from faris.schemas.grade import GradeCode

# Egyptian mobile numbers: 010/011/012/015 + 8 digits
PHONE_PATTERN = r"^01[0-25][0-9]{8}$"


class RegisterRequest(BaseModel):
    """Student registration request"""
    username: str = Field(..., min_length=3, description="اسم المستخدم")
    email: EmailStr
    phone: str = Field(..., pattern=PHONE_PATTERN, description="رقم هاتف مصري")
    grade: GradeCode = Field(..., description="الصف الدراسي")
    password: str = Field(..., min_length=6)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("كلمتا المرور غير متطابقتين.")
        return self


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserResponse(BaseModel):
    """Profile response"""
    id: int
    username: str
    email: str
    phone: str | None
    grade: str | None
    role: str
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def grade_label(self) -> str:
        return grade_label(self.grade)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class ProfileUpdateRequest(BaseModel):
    username: str = Field(..., min_length=3)
    phone: str = Field(..., pattern=PHONE_PATTERN)


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordChangeRequest":
        if self.new_password != self.confirm_password:
            raise ValueError("كلمتا المرور الجديدتان غير متطابقتين.")
        return self
