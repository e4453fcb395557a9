from faris.schemas.auth import (
    LoginRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from faris.schemas.catalog import (
    DashboardResponse,
    ExplanationCreateRequest,
    ExplanationResponse,
    GradeResponse,
    LibraryFileResponse,
)
from faris.schemas.exam import (
    ExamCreateRequest,
    ExamResponse,
    ExamStartResponse,
    ExamSubmitResponse,
    McqExamCreateRequest,
    McqExamUpdateRequest,
    StudentExamResponse,
)
from faris.schemas.practice import (
    PracticeCreateRequest,
    PracticeFinishResponse,
    PracticeResponse,
    PracticeStartResponse,
)
from faris.schemas.question import QuestionCreateRequest, QuestionResponse
from faris.schemas.result import GradeSubmitRequest, ResultDetailResponse
from faris.schemas.session import AnswerRequest, ExamSessionView, PracticeSessionView
from faris.schemas.tutor import TutorAnswer, TutorRequest, TutorResponse, TutorTurn

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "UserResponse",
    "ProfileUpdateRequest",
    "PasswordChangeRequest",
    "GradeResponse",
    "LibraryFileResponse",
    "ExplanationCreateRequest",
    "ExplanationResponse",
    "DashboardResponse",
    "ExamCreateRequest",
    "McqExamCreateRequest",
    "McqExamUpdateRequest",
    "ExamResponse",
    "StudentExamResponse",
    "ExamStartResponse",
    "ExamSubmitResponse",
    "PracticeCreateRequest",
    "PracticeResponse",
    "PracticeStartResponse",
    "PracticeFinishResponse",
    "QuestionCreateRequest",
    "QuestionResponse",
    "GradeSubmitRequest",
    "ResultDetailResponse",
    "AnswerRequest",
    "ExamSessionView",
    "PracticeSessionView",
    "TutorTurn",
    "TutorRequest",
    "TutorAnswer",
    "TutorResponse",
]
