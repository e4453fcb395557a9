from typing import Literal

from pydantic import BaseModel, Field, field_validator


class TutorTextPart(BaseModel):
    text: str


class TutorTurn(BaseModel):
    """One conversation turn"""
    role: Literal["user", "model"]
    content: list[TutorTextPart] = Field(..., min_length=1)

    @property
    def text(self) -> str:
        return "".join(part.text for part in self.content)


class TutorRequest(BaseModel):
    """Whole visible transcript, ending with the new user turn"""
    history: list[TutorTurn] = Field(..., min_length=1)

    @field_validator("history")
    @classmethod
    def last_turn_from_user(cls, v: list[TutorTurn]) -> list[TutorTurn]:
        if v[-1].role != "user":
            raise ValueError("آخر رسالة في المحادثة يجب أن تكون من المستخدم.")
        if not v[-1].text.strip():
            raise ValueError("الرسالة لا يمكن أن تكون فارغة.")
        return v


class TutorAnswer(BaseModel):
    """Structured output of the tutor prompt"""
    answer: str = Field(..., description="The AI's answer to the user's question.")


class TutorResponse(BaseModel):
    history: list[TutorTurn]
    failed: bool = False
