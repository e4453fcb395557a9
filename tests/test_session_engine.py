"""Exam / practice session state machine tests"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from faris.exceptions import InvalidExamRequestError, InvalidSelectionError
from faris.services.session_engine import (
    Countdown,
    ExamSession,
    ExamState,
    PracticeSession,
    PracticeState,
    SessionQuestion,
    compute_score,
)


def make_questions(count: int = 3) -> list[SessionQuestion]:
    return [
        SessionQuestion(
            id=i,
            text=f"السؤال رقم {i}",
            options=["أ", "ب", "ج", "د"],
            correct_answer="أ",
            explanation=f"شرح {i}",
        )
        for i in range(1, count + 1)
    ]


def test_compute_score_counts_exact_matches():
    questions = make_questions(4)
    answers = {1: "أ", 2: "ب", 4: "أ"}
    assert compute_score(questions, answers) == 2
    assert compute_score(questions, {}) == 0


def test_exam_session_empty():
    """No questions: EMPTY, no current question, no navigation"""
    session = ExamSession(student_id=1, exam_id=1, questions=[], duration_minutes=10)
    assert session.state == ExamState.EMPTY
    assert session.current_question is None
    session.next()
    session.previous()
    assert session.current_index == 0
    assert session.can_submit is False


@pytest.mark.asyncio
async def test_exam_session_empty_cannot_submit():
    session = ExamSession(student_id=1, exam_id=1, questions=[])
    persist = AsyncMock()
    with pytest.raises(InvalidExamRequestError):
        await session.submit(persist, force=True)
    persist.assert_not_called()


def test_exam_navigation_bounds():
    session = ExamSession(student_id=1, exam_id=1, questions=make_questions(3))
    session.previous()
    assert session.current_index == 0
    session.next()
    session.next()
    session.next()
    assert session.current_index == 2
    session.previous()
    assert session.current_index == 1


def test_exam_previous_keeps_answer_and_allows_change():
    session = ExamSession(student_id=1, exam_id=1, questions=make_questions(2))
    session.select_option(1, "ب")
    session.next()
    session.previous()
    assert session.answers[1] == "ب"
    session.select_option(1, "أ")
    assert session.answers[1] == "أ"


def test_exam_select_only_current_question():
    session = ExamSession(student_id=1, exam_id=1, questions=make_questions(2))
    with pytest.raises(InvalidSelectionError):
        session.select_option(2, "أ")
    with pytest.raises(InvalidSelectionError):
        session.select_option(1, "هـ")


def test_exam_can_submit_only_when_all_answered():
    session = ExamSession(student_id=1, exam_id=1, questions=make_questions(2))
    session.select_option(1, "أ")
    assert session.can_submit is False
    session.next()
    session.select_option(2, "ب")
    assert session.can_submit is True


@pytest.mark.asyncio
async def test_exam_manual_submit_requires_all_answers():
    session = ExamSession(student_id=1, exam_id=1, questions=make_questions(2))
    session.select_option(1, "أ")
    persist = AsyncMock()
    with pytest.raises(InvalidSelectionError):
        await session.submit(persist)
    persist.assert_not_called()
    assert session.state == ExamState.IN_PROGRESS


@pytest.mark.asyncio
async def test_exam_submit_scores_and_persists_once():
    """Concurrent submits write exactly one result"""
    session = ExamSession(student_id=7, exam_id=3, questions=make_questions(3))
    session.select_option(1, "أ")
    session.next()
    session.select_option(2, "ب")
    session.next()
    session.select_option(3, "أ")

    record = MagicMock(id=99)

    async def slow_persist(outcome):
        await asyncio.sleep(0)
        return record

    persist = AsyncMock(side_effect=slow_persist)
    first, second = await asyncio.gather(session.submit(persist), session.submit(persist))

    assert persist.await_count == 1
    assert first is not None and second is None
    assert first.score == 2
    assert first.total_questions == 3
    assert first.answers == {"1": "أ", "2": "ب", "3": "أ"}
    assert first.record is record
    assert session.state == ExamState.SUBMITTED

    assert await session.submit(persist, force=True) is None
    assert persist.await_count == 1


@pytest.mark.asyncio
async def test_exam_submit_failure_resets_guard():
    session = ExamSession(student_id=1, exam_id=1, questions=make_questions(1))
    session.select_option(1, "أ")
    persist = AsyncMock(side_effect=RuntimeError("db down"))

    with pytest.raises(RuntimeError):
        await session.submit(persist)
    assert session.state == ExamState.IN_PROGRESS

    persist.side_effect = None
    persist.return_value = MagicMock(id=1)
    outcome = await session.submit(persist)
    assert outcome is not None
    assert session.state == ExamState.SUBMITTED


@pytest.mark.asyncio
async def test_countdown_fires_once_at_zero():
    on_expire = AsyncMock()
    countdown = Countdown(3, on_expire)

    assert countdown.tick() is None
    assert countdown.tick() is None
    task = countdown.tick()
    assert task is not None
    await task
    assert countdown.remaining == 0
    assert countdown.tick() is None
    assert on_expire.await_count == 1


@pytest.mark.asyncio
async def test_countdown_auto_submit_with_partial_answers():
    """duration = 1 minute: expiry submits exactly once with the answers recorded so far"""
    session = ExamSession(student_id=1, exam_id=5, questions=make_questions(3), duration_minutes=1)
    persist = AsyncMock(return_value=MagicMock(id=10))
    outcomes = []

    async def on_expire():
        outcomes.append(await session.submit(persist, force=True))

    countdown = session.start_timer(on_expire)
    countdown.cancel()
    assert session.time_left == 60

    session.select_option(1, "أ")
    expire_task = None
    for _ in range(60):
        expire_task = countdown.tick() or expire_task
    await expire_task

    assert persist.await_count == 1
    outcome = outcomes[0]
    assert outcome.answers == {"1": "أ"}
    assert outcome.score == 1
    assert outcome.total_questions == 3
    assert session.state == ExamState.SUBMITTED

    countdown.tick()
    assert persist.await_count == 1


@pytest.mark.asyncio
async def test_countdown_after_manual_submit_is_noop():
    session = ExamSession(student_id=1, exam_id=5, questions=make_questions(1), duration_minutes=1)
    persist = AsyncMock(return_value=MagicMock(id=10))
    results = []

    async def on_expire():
        results.append(await session.submit(persist, force=True))

    countdown = session.start_timer(on_expire)
    countdown.cancel()
    session.select_option(1, "أ")
    await session.submit(persist)

    countdown.remaining = 1
    await countdown.tick()
    assert results == [None]
    assert persist.await_count == 1


@pytest.mark.asyncio
async def test_expired_exam_freezes_answers_and_allows_retry():
    """A failed expiry submit leaves the answers frozen and a plain submit retries it"""
    session = ExamSession(student_id=1, exam_id=5, questions=make_questions(3), duration_minutes=1)
    persist = AsyncMock(side_effect=RuntimeError("db down"))

    async def on_expire():
        with pytest.raises(RuntimeError):
            await session.submit(persist, force=True)

    countdown = session.start_timer(on_expire)
    countdown.cancel()
    session.select_option(1, "أ")
    countdown.remaining = 1
    await countdown.tick()

    assert session.state == ExamState.IN_PROGRESS
    assert session.expired is True
    assert session.time_left == 0
    assert session.can_submit is True
    session.next()
    with pytest.raises(InvalidSelectionError):
        session.select_option(2, "ب")
    assert countdown.tick() is None

    persist.side_effect = None
    persist.return_value = MagicMock(id=11)
    outcome = await session.submit(persist)
    assert outcome.answers == {"1": "أ"}
    assert outcome.score == 1
    assert session.state == ExamState.SUBMITTED


@pytest.mark.asyncio
async def test_countdown_start_runs_in_background():
    on_expire = AsyncMock()
    countdown = Countdown(1, on_expire)
    countdown.start()
    await asyncio.sleep(1.2)
    if countdown.expire_task:
        await countdown.expire_task
    assert countdown.expired
    on_expire.assert_awaited_once()
    countdown.cancel()


def test_practice_feedback_and_lock():
    session = PracticeSession(student_id=1, practice_id=1, questions=make_questions(2))
    assert session.select_option(1, "ب") == "incorrect"
    assert session.statuses[1] == "incorrect"
    with pytest.raises(InvalidSelectionError):
        session.select_option(1, "أ")


def test_practice_next_refused_until_answered():
    session = PracticeSession(student_id=1, practice_id=1, questions=make_questions(2))
    session.next()
    assert session.current_index == 0
    assert session.can_advance is False
    session.select_option(1, "أ")
    assert session.can_advance is True
    session.next()
    assert session.current_index == 1


@pytest.mark.asyncio
async def test_practice_finish_requires_current_answer():
    session = PracticeSession(student_id=1, practice_id=1, questions=make_questions(2))
    persist = AsyncMock()
    with pytest.raises(InvalidSelectionError):
        await session.finish(persist)
    persist.assert_not_called()


@pytest.mark.asyncio
async def test_practice_finish_persists_and_locks_everything():
    session = PracticeSession(student_id=4, practice_id=2, questions=make_questions(3))
    session.select_option(1, "أ")
    persist = AsyncMock(return_value=MagicMock(id=3))

    outcome = await session.finish(persist)

    assert outcome.score == 1
    assert outcome.total_questions == 3
    assert session.state == PracticeState.FINISHED
    assert session.score == 1
    assert session.is_locked(2)
    with pytest.raises(InvalidSelectionError):
        session.select_option(1, "ب")


@pytest.mark.asyncio
async def test_practice_restart_matches_fresh_session():
    questions = make_questions(3)
    session = PracticeSession(student_id=1, practice_id=1, questions=questions)
    session.select_option(1, "ب")
    session.next()
    session.select_option(2, "أ")
    await session.finish(AsyncMock(return_value=MagicMock(id=1)))

    session.restart()
    fresh = PracticeSession(student_id=1, practice_id=1, questions=questions)

    assert session.answers == {} == fresh.answers
    assert session.statuses == {} == fresh.statuses
    assert session.current_index == 0 == fresh.current_index
    assert session.state == fresh.state == PracticeState.IN_PROGRESS
    assert session.score is None
    assert not session.is_locked(1)


def test_practice_empty():
    session = PracticeSession(student_id=1, practice_id=1, questions=[])
    assert session.state == PracticeState.EMPTY
    assert session.current_question is None
    assert session.can_finish is False


@pytest.mark.asyncio
async def test_practice_review_navigates_both_ways():
    session = PracticeSession(student_id=1, practice_id=1, questions=make_questions(3))
    session.select_option(1, "أ")
    session.next()
    session.select_option(2, "ب")
    session.next()
    session.select_option(3, "أ")
    await session.finish(AsyncMock(return_value=MagicMock(id=1)))

    session.previous()
    session.previous()
    assert session.current_index == 0
    assert session.can_advance is True
    session.next()
    assert session.current_index == 1
    session.next()
    session.next()
    assert session.current_index == 2
    assert session.can_advance is False
