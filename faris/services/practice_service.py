import logging

from sqlalchemy.ext.asyncio import AsyncSession

from faris.crud import practice as practice_crud, question as question_crud, result as result_crud
from faris.exceptions import PracticeNotFoundError, SessionNotFoundError
from faris.models.user import User
from faris.schemas import practice as practice_schema, session as session_schema
from faris.services import result_service
from faris.services.session_engine import (
    PracticeSession,
    PracticeState,
    SessionOutcome,
    SessionQuestion,
)
from faris.services.session_registry import registry

logger = logging.getLogger(__name__)


def build_session_view(practice_session: PracticeSession) -> session_schema.PracticeSessionView:
    """Client view of a practice session; locked questions reveal the key and explanation"""
    question = practice_session.current_question
    question_view = None
    if question is not None:
        locked = practice_session.is_locked(question.id)
        status = practice_session.statuses.get(question.id, "unanswered")
        question_view = session_schema.SessionQuestionView(
            id=question.id,
            text=question.text,
            options=list(question.options),
            selected=practice_session.answers.get(question.id),
            status=status,
            correct_answer=question.correct_answer if locked else None,
            explanation=question.explanation if locked else None,
        )
    return session_schema.PracticeSessionView(
        practice_id=practice_session.practice_id,
        state=practice_session.state.value,
        current_index=practice_session.current_index,
        total_questions=practice_session.total_questions,
        answered_count=practice_session.answered_count,
        can_advance=practice_session.can_advance,
        can_finish=practice_session.can_finish,
        score=practice_session.score,
        question=question_view,
    )


async def start_practice(
    session: AsyncSession,
    user: User,
    practice_id: int,
) -> practice_schema.PracticeStartResponse:
    """Open (or resume) a practice session; retakes are always allowed"""
    practice = await practice_crud.get_practice_by_id(session, practice_id)
    if not practice:
        raise PracticeNotFoundError(practice_id)
    practice_view = practice_schema.PracticeResponse.model_validate(practice)

    live = registry.get_practice_session(user.id, practice_id)
    if live is not None:
        return practice_schema.PracticeStartResponse(
            status="in_progress" if live.state != PracticeState.EMPTY else "empty",
            practice=practice_view,
            session=build_session_view(live),
        )

    questions = await question_crud.get_questions_by_practice_id(session, practice_id)
    practice_session = PracticeSession(
        student_id=user.id,
        practice_id=practice_id,
        questions=[SessionQuestion.from_model(q) for q in questions],
    )
    if practice_session.state == PracticeState.EMPTY:
        return practice_schema.PracticeStartResponse(
            status="empty",
            message="لا توجد أسئلة في هذا التدريب بعد.",
            practice=practice_view,
            session=build_session_view(practice_session),
        )

    registry.put_practice_session(practice_session)
    logger.info(
        f"Practice session started: student_id={user.id}, practice_id={practice_id}, "
        f"questions={practice_session.total_questions}"
    )
    return practice_schema.PracticeStartResponse(
        status="in_progress",
        practice=practice_view,
        session=build_session_view(practice_session),
    )


def get_live_session(user: User, practice_id: int) -> PracticeSession:
    practice_session = registry.get_practice_session(user.id, practice_id)
    if practice_session is None:
        raise SessionNotFoundError()
    return practice_session


def select_option(
    user: User,
    practice_id: int,
    request: session_schema.AnswerRequest,
) -> session_schema.PracticeSessionView:
    practice_session = get_live_session(user, practice_id)
    practice_session.select_option(request.question_id, request.option)
    return build_session_view(practice_session)


def move(user: User, practice_id: int, forward: bool) -> session_schema.PracticeSessionView:
    practice_session = get_live_session(user, practice_id)
    if forward:
        practice_session.next()
    else:
        practice_session.previous()
    return build_session_view(practice_session)


def restart(user: User, practice_id: int) -> session_schema.PracticeSessionView:
    practice_session = get_live_session(user, practice_id)
    practice_session.restart()
    return build_session_view(practice_session)


def abandon_session(user: User, practice_id: int) -> None:
    if not registry.drop_practice_session(user.id, practice_id):
        raise SessionNotFoundError()


async def finish_practice(
    session: AsyncSession,
    user: User,
    practice_id: int,
) -> practice_schema.PracticeFinishResponse:
    """Score the run and store a PracticeResult; the session stays open for review"""
    practice_session = get_live_session(user, practice_id)

    async def persist(outcome: SessionOutcome):
        return await result_crud.create_practice_result(
            session,
            student_id=outcome.student_id,
            practice_id=outcome.target_id,
            score=outcome.score,
            total_questions=outcome.total_questions,
            answers=outcome.answers,
        )

    outcome = await practice_session.finish(persist)
    pct = result_service.percentage(outcome.score, outcome.total_questions)
    logger.info(
        f"Practice finished: student_id={user.id}, practice_id={practice_id}, "
        f"practice_result_id={outcome.record.id}, score={outcome.score}/{outcome.total_questions}"
    )
    return practice_schema.PracticeFinishResponse(
        practice_result_id=outcome.record.id,
        score=outcome.score,
        total_questions=outcome.total_questions,
        percentage=pct,
        passed=result_service.passed(pct),
        session=build_session_view(practice_session),
    )
