from typing import Literal

from pydantic import BaseModel, Field


class AnswerRequest(BaseModel):
    """Select an option for the current question"""
    question_id: int
    option: str = Field(..., min_length=1)


class SessionQuestionView(BaseModel):
    """The question under the cursor

    correct_answer / explanation / status are only filled for practice
    questions that are already locked.
    """
    id: int
    text: str
    options: list[str]
    selected: str | None = None
    status: Literal["unanswered", "correct", "incorrect"] | None = None
    correct_answer: str | None = None
    explanation: str | None = None


class ExamSessionView(BaseModel):
    exam_id: int
    state: str
    current_index: int
    total_questions: int
    answered_count: int
    can_submit: bool
    time_left: int | None = Field(None, description="الثواني المتبقية")
    question: SessionQuestionView | None


class PracticeSessionView(BaseModel):
    practice_id: int
    state: str
    current_index: int
    total_questions: int
    answered_count: int
    can_advance: bool
    can_finish: bool
    score: int | None = None
    question: SessionQuestionView | None
