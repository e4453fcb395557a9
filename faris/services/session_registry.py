"""In-process registry of live exam and practice sessions

Sessions live only in this process; a restart drops them. Each lookup
stamps the session as touched and every `put_*` sweeps out sessions idle
longer than `settings.session_idle_minutes`.
"""
import logging
import time
from typing import Callable

from faris.core.config import settings
from faris.services.session_engine import ExamSession, PracticeSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    def __init__(self, idle_seconds: int | None = None, clock: Callable[[], float] = time.monotonic):
        self._exam_sessions: dict[tuple[int, int], ExamSession] = {}
        self._practice_sessions: dict[tuple[int, int], PracticeSession] = {}
        self._touched: dict[tuple[str, int, int], float] = {}
        self._idle_seconds = idle_seconds
        self._clock = clock

    @property
    def idle_seconds(self) -> int:
        if self._idle_seconds is not None:
            return self._idle_seconds
        return settings.session_idle_minutes * 60

    def _touch(self, kind: str, key: tuple[int, int]) -> None:
        self._touched[(kind, *key)] = self._clock()

    def _idle(self, kind: str, key: tuple[int, int], now: float) -> bool:
        return now - self._touched.get((kind, *key), now) > self.idle_seconds

    def sweep(self) -> int:
        """Evict idle sessions; a running countdown keeps its exam session alive"""
        now = self._clock()
        stale_exams = [
            key for key, session in self._exam_sessions.items()
            if self._idle("exam", key, now)
            and (session.countdown is None or session.countdown.expired)
        ]
        stale_practice = [key for key in self._practice_sessions if self._idle("practice", key, now)]

        for student_id, exam_id in stale_exams:
            self.drop_exam_session(student_id, exam_id)
        for student_id, practice_id in stale_practice:
            self.drop_practice_session(student_id, practice_id)

        evicted = len(stale_exams) + len(stale_practice)
        if evicted:
            logger.info(f"Idle sessions evicted: exams={len(stale_exams)}, practice={len(stale_practice)}")
        return evicted

    def get_exam_session(self, student_id: int, exam_id: int) -> ExamSession | None:
        key = (student_id, exam_id)
        session = self._exam_sessions.get(key)
        if session is not None:
            self._touch("exam", key)
        return session

    def put_exam_session(self, session: ExamSession) -> ExamSession:
        self.sweep()
        key = (session.student_id, session.exam_id)
        self._exam_sessions[key] = session
        self._touch("exam", key)
        return session

    def drop_exam_session(self, student_id: int, exam_id: int) -> bool:
        """Forget the session and stop its countdown"""
        self._touched.pop(("exam", student_id, exam_id), None)
        session = self._exam_sessions.pop((student_id, exam_id), None)
        if session is None:
            return False
        session.stop_timer()
        logger.debug(f"Exam session dropped: student_id={student_id}, exam_id={exam_id}")
        return True

    def get_practice_session(self, student_id: int, practice_id: int) -> PracticeSession | None:
        key = (student_id, practice_id)
        session = self._practice_sessions.get(key)
        if session is not None:
            self._touch("practice", key)
        return session

    def put_practice_session(self, session: PracticeSession) -> PracticeSession:
        self.sweep()
        key = (session.student_id, session.practice_id)
        self._practice_sessions[key] = session
        self._touch("practice", key)
        return session

    def drop_practice_session(self, student_id: int, practice_id: int) -> bool:
        self._touched.pop(("practice", student_id, practice_id), None)
        return self._practice_sessions.pop((student_id, practice_id), None) is not None

    def __len__(self) -> int:
        return len(self._exam_sessions) + len(self._practice_sessions)

    def clear(self) -> None:
        for session in self._exam_sessions.values():
            session.stop_timer()
        self._exam_sessions.clear()
        self._practice_sessions.clear()
        self._touched.clear()


registry = SessionRegistry()
