import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from faris.crud import exam as exam_crud, question as question_crud, result as result_crud
from faris.exceptions import (
    BaseAppError,
    ExamAlreadyCompletedError,
    ExamNotFoundError,
    InvalidExamRequestError,
    InvalidUploadError,
    SessionNotFoundError,
    SubmissionInProgressError,
)
from faris.models.base import get_async_session_maker
from faris.models.exam import EXAM_TYPE_FILE, Exam
from faris.models.user import User
from faris.schemas import exam as exam_schema, session as session_schema
from faris.services import storage_service
from faris.services.session_engine import ExamSession, ExamState, SessionOutcome, SessionQuestion
from faris.services.session_registry import registry

logger = logging.getLogger(__name__)


def build_session_view(exam_session: ExamSession) -> session_schema.ExamSessionView:
    """Client view of a live exam session (never carries the answer key)"""
    question = exam_session.current_question
    question_view = None
    if question is not None:
        question_view = session_schema.SessionQuestionView(
            id=question.id,
            text=question.text,
            options=list(question.options),
            selected=exam_session.answers.get(question.id),
        )
    return session_schema.ExamSessionView(
        exam_id=exam_session.exam_id,
        state=exam_session.state.value,
        current_index=exam_session.current_index,
        total_questions=exam_session.total_questions,
        answered_count=exam_session.answered_count,
        can_submit=exam_session.can_submit,
        time_left=exam_session.time_left,
        question=question_view,
    )


def _result_writer(session: AsyncSession, exam: Exam):
    """Persistence callback writing the mcq Result of a finalized session"""

    async def persist(outcome: SessionOutcome):
        try:
            return await result_crud.create_mcq_result(
                session,
                student_id=outcome.student_id,
                exam_id=outcome.target_id,
                score=outcome.score,
                total_questions=outcome.total_questions,
                answers=outcome.answers,
                exam_title=exam.title,
                exam_grade=exam.grade,
            )
        except IntegrityError:
            await session.rollback()
            logger.warning(
                f"Duplicate result rejected: student_id={outcome.student_id}, exam_id={outcome.target_id}"
            )
            raise ExamAlreadyCompletedError()

    return persist


async def _auto_submit(student_id: int, exam_id: int) -> None:
    """Countdown expiry: finalize with whatever answers exist"""
    exam_session = registry.get_exam_session(student_id, exam_id)
    if exam_session is None:
        return

    try:
        async with get_async_session_maker()() as session:
            exam = await exam_crud.get_exam_by_id(session, exam_id)
            if not exam:
                raise ExamNotFoundError(exam_id)
            outcome = await exam_session.submit(_result_writer(session, exam), force=True)
        if outcome is None:
            logger.info(f"Auto-submit skipped, submission already started: student_id={student_id}, exam_id={exam_id}")
            return
        logger.info(
            f"Exam auto-submitted: student_id={student_id}, exam_id={exam_id}, "
            f"result_id={outcome.record.id}, score={outcome.score}/{outcome.total_questions}"
        )
        registry.drop_exam_session(student_id, exam_id)
    except ExamAlreadyCompletedError:
        registry.drop_exam_session(student_id, exam_id)
    except ExamNotFoundError:
        logger.warning(f"Auto-submit dropped, exam deleted: student_id={student_id}, exam_id={exam_id}")
        registry.drop_exam_session(student_id, exam_id)
    except Exception as e:
        logger.error(f"Auto-submit failed: student_id={student_id}, exam_id={exam_id}, error={e}", exc_info=True)


async def start_exam(
    session: AsyncSession,
    user: User,
    exam_id: int,
) -> exam_schema.ExamStartResponse:
    """Enter an exam

    An existing result short-circuits before any question is fetched.
    """
    existing = await result_crud.get_result_by_student_and_exam(session, user.id, exam_id)
    if existing:
        logger.info(f"Exam already completed: student_id={user.id}, exam_id={exam_id}, result_id={existing.id}")
        return exam_schema.ExamStartResponse(
            status="completed",
            message=ExamAlreadyCompletedError().message,
        )

    exam = await exam_crud.get_exam_by_id(session, exam_id)
    if not exam:
        raise ExamNotFoundError(exam_id)
    exam_view = exam_schema.ExamResponse.model_validate(exam)

    if exam.type == EXAM_TYPE_FILE:
        return exam_schema.ExamStartResponse(status="file", exam=exam_view)

    live = registry.get_exam_session(user.id, exam_id)
    if live is not None:
        return exam_schema.ExamStartResponse(
            status="in_progress",
            exam=exam_view,
            session=build_session_view(live),
        )

    questions = await question_crud.get_questions_by_exam_id(session, exam_id)
    exam_session = ExamSession(
        student_id=user.id,
        exam_id=exam_id,
        questions=[SessionQuestion.from_model(q) for q in questions],
        duration_minutes=exam.duration,
    )
    if exam_session.state == ExamState.EMPTY:
        return exam_schema.ExamStartResponse(
            status="empty",
            message="لا توجد أسئلة في هذا الامتحان بعد.",
            exam=exam_view,
            session=build_session_view(exam_session),
        )

    registry.put_exam_session(exam_session)
    student_id = user.id
    exam_session.start_timer(lambda: _auto_submit(student_id, exam_id))
    logger.info(
        f"Exam session started: student_id={user.id}, exam_id={exam_id}, "
        f"questions={exam_session.total_questions}, duration={exam.duration}"
    )
    return exam_schema.ExamStartResponse(
        status="in_progress",
        exam=exam_view,
        session=build_session_view(exam_session),
    )


def get_live_session(user: User, exam_id: int) -> ExamSession:
    exam_session = registry.get_exam_session(user.id, exam_id)
    if exam_session is None:
        raise SessionNotFoundError()
    return exam_session


def select_option(
    user: User,
    exam_id: int,
    request: session_schema.AnswerRequest,
) -> session_schema.ExamSessionView:
    exam_session = get_live_session(user, exam_id)
    exam_session.select_option(request.question_id, request.option)
    return build_session_view(exam_session)


def move(user: User, exam_id: int, forward: bool) -> session_schema.ExamSessionView:
    exam_session = get_live_session(user, exam_id)
    if forward:
        exam_session.next()
    else:
        exam_session.previous()
    return build_session_view(exam_session)


def abandon_session(user: User, exam_id: int) -> None:
    """Leave the exam without submitting; nothing is written"""
    if not registry.drop_exam_session(user.id, exam_id):
        raise SessionNotFoundError()
    logger.info(f"Exam session abandoned: student_id={user.id}, exam_id={exam_id}")


async def submit_exam(
    session: AsyncSession,
    user: User,
    exam_id: int,
) -> exam_schema.ExamSubmitResponse:
    """Manual submit of a fully answered (or expired) exam"""
    exam_session = get_live_session(user, exam_id)

    exam = await exam_crud.get_exam_by_id(session, exam_id)
    if not exam:
        registry.drop_exam_session(user.id, exam_id)
        raise ExamNotFoundError(exam_id)

    try:
        outcome = await exam_session.submit(_result_writer(session, exam))
    except ExamAlreadyCompletedError:
        registry.drop_exam_session(user.id, exam_id)
        raise
    except BaseAppError:
        raise
    except Exception as e:
        logger.error(f"Exam submit failed: student_id={user.id}, exam_id={exam_id}, error={e}", exc_info=True)
        raise

    if outcome is None:
        raise SubmissionInProgressError()

    registry.drop_exam_session(user.id, exam_id)
    record = outcome.record
    logger.info(
        f"Exam submitted: student_id={user.id}, exam_id={exam_id}, "
        f"result_id={record.id}, score={outcome.score}/{outcome.total_questions}"
    )
    return exam_schema.ExamSubmitResponse(
        result_id=record.id,
        exam_id=exam_id,
        score=outcome.score,
        total_questions=outcome.total_questions,
        submitted_at=record.submitted_at,
    )


async def get_submission(
    session: AsyncSession,
    user: User,
    exam_id: int,
) -> exam_schema.FileSubmissionResponse | None:
    """The caller's uploaded answer for a file exam, if any"""
    result = await result_crud.get_result_by_student_and_exam(session, user.id, exam_id)
    if not result or result.type != EXAM_TYPE_FILE:
        return None
    return exam_schema.FileSubmissionResponse(
        id=result.id,
        exam_id=result.exam_id,
        file_url=result.file_url,
        submitted_at=result.submitted_at,
    )


async def submit_file(
    session: AsyncSession,
    user: User,
    exam_id: int,
    filename: str | None,
    data: bytes,
) -> exam_schema.FileSubmissionResponse:
    """Upload the answer file of a file exam (once)"""
    exam = await exam_crud.get_exam_by_id(session, exam_id)
    if not exam:
        raise ExamNotFoundError(exam_id)
    if exam.type != EXAM_TYPE_FILE:
        raise InvalidExamRequestError("هذا الامتحان لا يقبل رفع الملفات.")
    if not data:
        raise InvalidUploadError("الرجاء اختيار ملف لرفعه.")

    existing = await result_crud.get_result_by_student_and_exam(session, user.id, exam_id)
    if existing:
        raise ExamAlreadyCompletedError()

    key = storage_service.exam_answer_key(user.id, exam_id, filename)
    file_url = await storage_service.put_object(key, data)
    try:
        result = await result_crud.create_file_result(
            session,
            student_id=user.id,
            exam_id=exam_id,
            file_url=file_url,
            file_path=key,
            exam_title=exam.title,
            exam_grade=exam.grade,
        )
    except IntegrityError:
        await session.rollback()
        await storage_service.delete_object(key)
        raise ExamAlreadyCompletedError()
    except Exception:
        await storage_service.delete_object(key)
        raise

    logger.info(f"File answer submitted: student_id={user.id}, exam_id={exam_id}, result_id={result.id}")
    return exam_schema.FileSubmissionResponse(
        id=result.id,
        exam_id=exam_id,
        file_url=result.file_url,
        submitted_at=result.submitted_at,
    )
