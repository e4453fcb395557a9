from faris.models.base import Base, get_db
from faris.models.contact_message import ContactMessage
from faris.models.content import Explanation, LibraryFile
from faris.models.exam import Exam
from faris.models.practice import Practice
from faris.models.question import Question
from faris.models.result import PracticeResult, Result
from faris.models.user import User

__all__ = [
    "Base",
    "User",
    "Exam",
    "Practice",
    "Question",
    "Result",
    "PracticeResult",
    "LibraryFile",
    "Explanation",
    "ContactMessage",
    "get_db",
]
