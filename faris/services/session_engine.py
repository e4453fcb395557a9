"""Exam and practice session state machines

Holds the in-memory state of one student working through one exam or
practice set: the cursor, the recorded answers, the countdown and the
submission guard. Persistence is injected as an async callable so the
machines stay free of database access.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, Sequence

from faris.exceptions import InvalidExamRequestError, InvalidSelectionError

logger = logging.getLogger(__name__)


class ExamState(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    IN_PROGRESS = "in_progress"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


class PracticeState(str, Enum):
    EMPTY = "empty"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


OPTION_CORRECT = "correct"
OPTION_INCORRECT = "incorrect"


@dataclass(frozen=True)
class SessionQuestion:
    id: int
    text: str
    options: list[str]
    correct_answer: str
    explanation: str | None = None

    @classmethod
    def from_model(cls, question: Any) -> "SessionQuestion":
        return cls(
            id=question.id,
            text=question.text,
            options=list(question.options),
            correct_answer=question.correct_answer,
            explanation=question.explanation,
        )


@dataclass
class SessionOutcome:
    """What a finalized session hands to the persistence callback"""
    student_id: int
    target_id: int
    answers: dict[str, str]
    score: int
    total_questions: int
    record: Any = field(default=None)


Persist = Callable[[SessionOutcome], Awaitable[Any]]


def compute_score(questions: Iterable[SessionQuestion], answers: dict[int, str]) -> int:
    """Number of questions whose recorded answer equals the correct answer"""
    return sum(1 for q in questions if answers.get(q.id) == q.correct_answer)


class Countdown:
    """Seconds counter that fires `on_expire` once when it reaches zero"""

    def __init__(self, seconds: int, on_expire: Callable[[], Awaitable[None]]):
        self.remaining = max(0, int(seconds))
        self._on_expire = on_expire
        self._fired = False
        self._task: asyncio.Task | None = None
        self.expire_task: asyncio.Task | None = None

    @property
    def expired(self) -> bool:
        return self._fired

    def tick(self) -> asyncio.Task | None:
        """Advance one second; returns the scheduled expiry task on the tick that hits zero"""
        if self._fired:
            return None
        if self.remaining > 0:
            self.remaining -= 1
        if self.remaining == 0:
            self._fired = True
            self.expire_task = asyncio.get_running_loop().create_task(self._on_expire())
            return self.expire_task
        return None

    async def _run(self) -> None:
        while not self._fired:
            await asyncio.sleep(1)
            self.tick()

    def start(self) -> None:
        if self._task is None and not self._fired:
            self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None


class ExamSession:
    """One student's attempt at one mcq exam"""

    def __init__(
        self,
        student_id: int,
        exam_id: int,
        questions: Sequence[SessionQuestion],
        duration_minutes: int | None = None,
    ):
        self.state = ExamState.LOADING
        self.student_id = student_id
        self.exam_id = exam_id
        self.questions = list(questions)
        self.duration_minutes = duration_minutes
        self.answers: dict[int, str] = {}
        self.current_index = 0
        self.countdown: Countdown | None = None
        self.state = ExamState.IN_PROGRESS if self.questions else ExamState.EMPTY

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> SessionQuestion | None:
        if self.state == ExamState.EMPTY:
            return None
        return self.questions[self.current_index]

    @property
    def answered_count(self) -> int:
        return len(self.answers)

    @property
    def expired(self) -> bool:
        return self.countdown is not None and self.countdown.expired

    @property
    def can_submit(self) -> bool:
        if self.state != ExamState.IN_PROGRESS:
            return False
        return self.expired or len(self.answers) == len(self.questions)

    @property
    def time_left(self) -> int | None:
        return self.countdown.remaining if self.countdown else None

    def select_option(self, question_id: int, option: str) -> None:
        if self.state != ExamState.IN_PROGRESS:
            raise InvalidSelectionError("لا يمكن تعديل الإجابات الآن.")
        if self.expired:
            raise InvalidSelectionError("انتهى وقت الامتحان.")
        question = self.current_question
        if question.id != question_id:
            raise InvalidSelectionError("يمكن الإجابة على السؤال الحالي فقط.")
        if option not in question.options:
            raise InvalidSelectionError("الاختيار غير موجود ضمن خيارات السؤال.")
        self.answers[question_id] = option

    def next(self) -> None:
        if self.state == ExamState.IN_PROGRESS and self.current_index < len(self.questions) - 1:
            self.current_index += 1

    def previous(self) -> None:
        if self.state == ExamState.IN_PROGRESS and self.current_index > 0:
            self.current_index -= 1

    def start_timer(self, on_expire: Callable[[], Awaitable[None]]) -> Countdown | None:
        """Start the countdown at duration x 60 seconds (exams without a duration have none)"""
        if self.state != ExamState.IN_PROGRESS or not self.duration_minutes or self.countdown:
            return self.countdown
        self.countdown = Countdown(self.duration_minutes * 60, on_expire)
        self.countdown.start()
        return self.countdown

    def stop_timer(self) -> None:
        if self.countdown:
            self.countdown.cancel()

    async def submit(self, persist: Persist, *, force: bool = False) -> SessionOutcome | None:
        """Finalize the attempt once

        Returns None when a submission already started. `force` skips the
        all-answered requirement; an expired countdown implies it and
        freezes the answers.
        """
        if self.state in (ExamState.SUBMITTING, ExamState.SUBMITTED):
            return None
        if self.state != ExamState.IN_PROGRESS:
            raise InvalidExamRequestError("لا توجد أسئلة في هذا الامتحان.")
        if not (force or self.can_submit):
            raise InvalidSelectionError("يجب الإجابة على جميع الأسئلة قبل التسليم.")

        # flag flips before the first await
        self.state = ExamState.SUBMITTING
        outcome = SessionOutcome(
            student_id=self.student_id,
            target_id=self.exam_id,
            answers={str(qid): option for qid, option in self.answers.items()},
            score=compute_score(self.questions, self.answers),
            total_questions=len(self.questions),
        )
        try:
            outcome.record = await persist(outcome)
        except Exception:
            self.state = ExamState.IN_PROGRESS
            raise
        self.state = ExamState.SUBMITTED
        self.stop_timer()
        return outcome


class PracticeSession:
    """One student's run through one practice set, with instant feedback"""

    def __init__(self, student_id: int, practice_id: int, questions: Sequence[SessionQuestion]):
        self.student_id = student_id
        self.practice_id = practice_id
        self.questions = list(questions)
        self._finishing = False
        self.restart()

    def restart(self) -> None:
        self.answers: dict[int, str] = {}
        self.statuses: dict[int, str] = {}
        self.current_index = 0
        self.score: int | None = None
        self.state = PracticeState.IN_PROGRESS if self.questions else PracticeState.EMPTY

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> SessionQuestion | None:
        if self.state == PracticeState.EMPTY:
            return None
        return self.questions[self.current_index]

    @property
    def answered_count(self) -> int:
        return len(self.answers)

    def is_locked(self, question_id: int) -> bool:
        return self.state == PracticeState.FINISHED or question_id in self.answers

    @property
    def current_answered(self) -> bool:
        question = self.current_question
        return question is not None and question.id in self.answers

    @property
    def can_advance(self) -> bool:
        """Next is open on an answered question, or anywhere while reviewing"""
        if self.current_index >= len(self.questions) - 1:
            return False
        if self.state == PracticeState.FINISHED:
            return True
        return self.state == PracticeState.IN_PROGRESS and self.current_answered

    @property
    def can_finish(self) -> bool:
        return self.state == PracticeState.IN_PROGRESS and self.current_answered

    def select_option(self, question_id: int, option: str) -> str:
        """Record and grade the choice; returns `correct` or `incorrect`"""
        if self.state != PracticeState.IN_PROGRESS:
            raise InvalidSelectionError("انتهى التدريب. ابدأ من جديد لإعادة المحاولة.")
        question = self.current_question
        if question.id != question_id:
            raise InvalidSelectionError("يمكن الإجابة على السؤال الحالي فقط.")
        if question_id in self.answers:
            raise InvalidSelectionError("تمت الإجابة على هذا السؤال بالفعل.")
        if option not in question.options:
            raise InvalidSelectionError("الاختيار غير موجود ضمن خيارات السؤال.")
        self.answers[question_id] = option
        status = OPTION_CORRECT if option == question.correct_answer else OPTION_INCORRECT
        self.statuses[question_id] = status
        return status

    def next(self) -> None:
        if self.can_advance:
            self.current_index += 1

    def previous(self) -> None:
        if self.state != PracticeState.EMPTY and self.current_index > 0:
            self.current_index -= 1

    async def finish(self, persist: Persist) -> SessionOutcome:
        """Score the run, persist a practice result and switch to review"""
        if self._finishing:
            raise InvalidSelectionError("جاري حفظ النتيجة بالفعل.")
        if not self.can_finish:
            raise InvalidSelectionError("أجب على السؤال الحالي أولاً.")

        self._finishing = True
        score = compute_score(self.questions, self.answers)
        outcome = SessionOutcome(
            student_id=self.student_id,
            target_id=self.practice_id,
            answers={str(qid): option for qid, option in self.answers.items()},
            score=score,
            total_questions=len(self.questions),
        )
        try:
            outcome.record = await persist(outcome)
        finally:
            self._finishing = False
        self.score = score
        self.state = PracticeState.FINISHED
        return outcome
