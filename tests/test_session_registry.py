"""Session registry tests"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from faris.services.session_engine import ExamSession, PracticeSession, SessionQuestion
from faris.services.session_registry import SessionRegistry

QUESTIONS = [SessionQuestion(id=1, text="ما إعراب الفاعل؟", options=["مرفوع", "منصوب"], correct_answer="مرفوع")]


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sessions(clock):
    registry = SessionRegistry(idle_seconds=600, clock=clock)
    yield registry
    registry.clear()


def test_idle_practice_sessions_are_swept_on_put(sessions, clock):
    sessions.put_practice_session(PracticeSession(1, 1, QUESTIONS))
    sessions.put_practice_session(PracticeSession(2, 1, QUESTIONS))

    clock.now += 400
    assert sessions.get_practice_session(2, 1) is not None

    clock.now += 300
    sessions.put_practice_session(PracticeSession(3, 1, QUESTIONS))

    assert sessions.get_practice_session(1, 1) is None
    assert sessions.get_practice_session(2, 1) is not None
    assert len(sessions) == 2


@pytest.mark.asyncio
async def test_finished_practice_session_is_evicted_once_idle(sessions, clock):
    practice = sessions.put_practice_session(PracticeSession(1, 1, QUESTIONS))
    practice.select_option(1, "مرفوع")
    await practice.finish(AsyncMock(return_value=MagicMock(id=1)))

    clock.now += 601
    assert sessions.sweep() == 1
    assert sessions.get_practice_session(1, 1) is None


@pytest.mark.asyncio
async def test_running_countdown_keeps_exam_session(sessions, clock):
    timed = ExamSession(1, 1, QUESTIONS, duration_minutes=30)
    timed.start_timer(AsyncMock())
    untimed = ExamSession(1, 2, QUESTIONS)
    sessions.put_exam_session(timed)
    sessions.put_exam_session(untimed)

    clock.now += 601
    assert sessions.sweep() == 1
    assert sessions.get_exam_session(1, 1) is timed
    assert sessions.get_exam_session(1, 2) is None
    sessions.clear()


@pytest.mark.asyncio
async def test_expired_exam_session_is_evicted_and_timer_stopped(sessions, clock):
    expired = ExamSession(1, 1, QUESTIONS, duration_minutes=1)
    countdown = expired.start_timer(AsyncMock())
    countdown.remaining = 1
    await countdown.tick()
    sessions.put_exam_session(expired)

    clock.now += 601
    sessions.put_exam_session(ExamSession(2, 1, QUESTIONS))

    assert sessions.get_exam_session(1, 1) is None
    assert sessions.get_exam_session(2, 1) is not None


def test_drop_forgets_session(sessions):
    sessions.put_practice_session(PracticeSession(1, 1, QUESTIONS))
    assert sessions.drop_practice_session(1, 1) is True
    assert sessions.drop_practice_session(1, 1) is False
    assert len(sessions) == 0
