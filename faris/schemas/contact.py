from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class ContactMessageCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    message: str = Field(..., min_length=1)


class ContactMessageResponse(BaseModel):
    id: int
    name: str
    email: str
    message: str
    read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ContactMessageListResponse(BaseModel):
    messages: list[ContactMessageResponse]
    total: int
