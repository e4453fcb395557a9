import logging

from sqlalchemy.ext.asyncio import AsyncSession

from faris.crud import (
    content as content_crud,
    exam as exam_crud,
    practice as practice_crud,
    question as question_crud,
    result as result_crud,
    user as user_crud,
)
from faris.exceptions import (
    ExamNotFoundError,
    ExplanationNotFoundError,
    InvalidExamRequestError,
    InvalidQuestionError,
    InvalidUploadError,
    LibraryFileNotFoundError,
    PracticeNotFoundError,
    QuestionNotFoundError,
    ResultNotFoundError,
    ResultTypeMismatchError,
    UserNotFoundError,
)
from faris.models.exam import EXAM_TYPE_FILE, EXAM_TYPE_MCQ
from faris.models.user import ROLE_STUDENT
from faris.schemas import (
    admin as admin_schema,
    auth as auth_schema,
    catalog as catalog_schema,
    exam as exam_schema,
    practice as practice_schema,
    question as question_schema,
    result as result_schema,
)
from faris.services import result_service, storage_service

logger = logging.getLogger(__name__)

DELETED_EXAM = "امتحان محذوف"
DELETED_PRACTICE = "تدريب محذوف"
DELETED_STUDENT = "طالب محذوف"
UNKNOWN_EMAIL = "غير معروف"

PDF_CONTENT_TYPE = "application/pdf"


# --- dashboard / students ---

async def get_dashboard_stats(session: AsyncSession) -> admin_schema.DashboardStatsResponse:
    pending = await user_crud.get_pending_students(session)
    return admin_schema.DashboardStatsResponse(
        students=await user_crud.count_students(session),
        exams=await exam_crud.count_exams(session),
        practices=await practice_crud.count_practices(session),
        explanations=await content_crud.count_explanations(session),
        library_files=await content_crud.count_library_files(session),
        pending_students=len(pending),
        pending=[auth_schema.UserResponse.model_validate(u) for u in pending],
    )


async def list_students(session: AsyncSession) -> admin_schema.StudentListResponse:
    students = await user_crud.get_students(session)
    items = [auth_schema.UserResponse.model_validate(s) for s in students]
    return admin_schema.StudentListResponse(students=items, total=len(items))


async def _get_student(session: AsyncSession, student_id: int):
    student = await user_crud.get_user_by_id(session, student_id)
    if not student or student.role != ROLE_STUDENT:
        raise UserNotFoundError(student_id)
    return student


async def get_student_detail(session: AsyncSession, student_id: int) -> admin_schema.StudentDetailResponse:
    """Student profile with every exam result, titled from the current exams"""
    student = await _get_student(session, student_id)
    results = await result_crud.get_results_by_student(session, student_id)
    exams = await exam_crud.get_exams_by_ids(session, {r.exam_id for r in results})

    rows = []
    for r in results:
        exam = exams.get(r.exam_id)
        rows.append(
            admin_schema.StudentExamResultRow(
                id=r.id,
                exam_id=r.exam_id,
                exam_title=exam.title if exam else DELETED_EXAM,
                type=r.type,
                score=r.score,
                total_questions=r.total_questions,
                percentage=result_service.percentage(r.score, r.total_questions) if r.type == EXAM_TYPE_MCQ else None,
                grade=r.grade,
                submitted_at=r.submitted_at,
            )
        )
    return admin_schema.StudentDetailResponse(
        student=auth_schema.UserResponse.model_validate(student),
        results=rows,
    )


async def update_student_status(
    session: AsyncSession,
    student_id: int,
    request: admin_schema.StudentStatusUpdateRequest,
) -> auth_schema.UserResponse:
    student = await _get_student(session, student_id)
    student = await user_crud.update_user_status(session, student, request.status)
    logger.info(f"Student status changed: student_id={student_id}, status={request.status}")
    return auth_schema.UserResponse.model_validate(student)


async def delete_student(session: AsyncSession, student_id: int) -> None:
    """Delete the profile row; the student's results are kept"""
    student = await _get_student(session, student_id)
    await user_crud.delete_user(session, student)
    logger.info(f"Student deleted: student_id={student_id}")


# --- exams ---

async def list_exams(session: AsyncSession) -> exam_schema.AdminExamListResponse:
    exams = await exam_crud.get_exams(session)
    counts = await question_crud.count_questions_by_exam_ids(session, [e.id for e in exams])
    items = []
    for exam in exams:
        item = exam_schema.AdminExamResponse.model_validate(exam)
        item.questions_added = counts.get(exam.id, 0)
        items.append(item)
    return exam_schema.AdminExamListResponse(exams=items, total=len(items))


async def _get_exam(session: AsyncSession, exam_id: int):
    exam = await exam_crud.get_exam_by_id(session, exam_id)
    if not exam:
        raise ExamNotFoundError(exam_id)
    return exam


async def create_exam(
    session: AsyncSession,
    request: exam_schema.McqExamCreateRequest | exam_schema.FileExamCreateRequest,
) -> exam_schema.ExamResponse:
    """Create an mcq exam; file exams need the multipart route"""
    if isinstance(request, exam_schema.FileExamCreateRequest):
        raise InvalidExamRequestError("امتحانات الملفات تتطلب رفع ملف الأسئلة.")

    exam = await exam_crud.create_exam(
        session,
        title=request.title,
        description=request.description,
        grade=request.grade,
        type=EXAM_TYPE_MCQ,
        duration=request.duration,
        question_count=request.question_count,
    )
    logger.info(f"Exam created: exam_id={exam.id}, type=mcq, grade={exam.grade}")
    return exam_schema.ExamResponse.model_validate(exam)


async def create_file_exam(
    session: AsyncSession,
    request: exam_schema.FileExamCreateRequest,
    filename: str | None,
    data: bytes,
) -> exam_schema.ExamResponse:
    """Store the question file, then create the exam row"""
    if not data:
        raise InvalidUploadError("الرجاء رفع ملف الامتحان.")

    key = storage_service.exam_file_key(filename)
    file_url = await storage_service.put_object(key, data)
    try:
        exam = await exam_crud.create_exam(
            session,
            title=request.title,
            description=request.description,
            grade=request.grade,
            type=EXAM_TYPE_FILE,
            file_url=file_url,
            file_path=key,
        )
    except Exception:
        await storage_service.delete_object(key)
        raise
    logger.info(f"Exam created: exam_id={exam.id}, type=file, grade={exam.grade}")
    return exam_schema.ExamResponse.model_validate(exam)


async def update_exam(
    session: AsyncSession,
    exam_id: int,
    request: exam_schema.McqExamUpdateRequest,
) -> exam_schema.ExamResponse:
    exam = await _get_exam(session, exam_id)
    if exam.type != EXAM_TYPE_MCQ:
        raise InvalidExamRequestError("لا يمكن تعديل امتحانات الملفات.")
    exam = await exam_crud.update_exam(session, exam, **request.model_dump())
    return exam_schema.ExamResponse.model_validate(exam)


async def delete_exam(session: AsyncSession, exam_id: int) -> None:
    """Delete an exam (and the question file of a file exam); no cascade"""
    exam = await _get_exam(session, exam_id)
    if exam.type == EXAM_TYPE_FILE:
        await storage_service.delete_object(exam.file_path)
    await exam_crud.delete_exam(session, exam)
    logger.info(f"Exam deleted: exam_id={exam_id}")


async def publish_results(session: AsyncSession, exam_id: int) -> exam_schema.ExamResponse:
    exam = await _get_exam(session, exam_id)
    exam = await exam_crud.publish_exam_results(session, exam)
    logger.info(f"Exam results published: exam_id={exam_id}")
    return exam_schema.ExamResponse.model_validate(exam)


# --- questions ---

def _check_question(request: question_schema.QuestionCreateRequest) -> None:
    if request.correct_answer not in request.options:
        raise InvalidQuestionError("الإجابة الصحيحة يجب أن تكون أحد الخيارات.")


async def list_exam_questions(session: AsyncSession, exam_id: int) -> question_schema.QuestionListResponse:
    await _get_exam(session, exam_id)
    questions = await question_crud.get_questions_by_exam_id(session, exam_id)
    items = [question_schema.QuestionResponse.model_validate(q) for q in questions]
    return question_schema.QuestionListResponse(questions=items, total=len(items))


async def add_exam_question(
    session: AsyncSession,
    exam_id: int,
    request: question_schema.QuestionCreateRequest,
) -> question_schema.QuestionResponse:
    exam = await _get_exam(session, exam_id)
    if exam.type != EXAM_TYPE_MCQ:
        raise InvalidExamRequestError("لا يمكن إضافة أسئلة لامتحانات الملفات.")
    _check_question(request)
    question = await question_crud.create_question(
        session,
        text=request.text,
        options=request.options,
        correct_answer=request.correct_answer,
        explanation=request.explanation,
        exam_id=exam_id,
    )
    return question_schema.QuestionResponse.model_validate(question)


async def _get_question(session: AsyncSession, question_id: int, exam_id: int | None = None, practice_id: int | None = None):
    question = await question_crud.get_question_by_id(session, question_id)
    if (
        not question
        or (exam_id is not None and question.exam_id != exam_id)
        or (practice_id is not None and question.practice_id != practice_id)
    ):
        raise QuestionNotFoundError(question_id)
    return question


async def update_question(
    session: AsyncSession,
    question_id: int,
    request: question_schema.QuestionCreateRequest,
    exam_id: int | None = None,
    practice_id: int | None = None,
) -> question_schema.QuestionResponse:
    question = await _get_question(session, question_id, exam_id=exam_id, practice_id=practice_id)
    _check_question(request)
    question = await question_crud.update_question(
        session,
        question,
        text=request.text,
        options=request.options,
        correct_answer=request.correct_answer,
        explanation=request.explanation,
    )
    return question_schema.QuestionResponse.model_validate(question)


async def delete_question(
    session: AsyncSession,
    question_id: int,
    exam_id: int | None = None,
    practice_id: int | None = None,
) -> None:
    question = await _get_question(session, question_id, exam_id=exam_id, practice_id=practice_id)
    await question_crud.delete_question(session, question)
    logger.info(f"Question deleted: question_id={question_id}, exam_id={exam_id}, practice_id={practice_id}")


# --- practice ---

async def list_practices(session: AsyncSession) -> practice_schema.AdminPracticeListResponse:
    practices = await practice_crud.get_practices(session)
    counts = await question_crud.count_questions_by_practice_ids(session, [p.id for p in practices])
    items = []
    for practice in practices:
        item = practice_schema.AdminPracticeResponse.model_validate(practice)
        item.questions_added = counts.get(practice.id, 0)
        items.append(item)
    return practice_schema.AdminPracticeListResponse(practices=items, total=len(items))


async def _get_practice(session: AsyncSession, practice_id: int):
    practice = await practice_crud.get_practice_by_id(session, practice_id)
    if not practice:
        raise PracticeNotFoundError(practice_id)
    return practice


async def create_practice(
    session: AsyncSession,
    request: practice_schema.PracticeCreateRequest,
) -> practice_schema.PracticeResponse:
    practice = await practice_crud.create_practice(
        session,
        title=request.title,
        description=request.description,
        grade=request.grade,
    )
    logger.info(f"Practice created: practice_id={practice.id}, grade={practice.grade}")
    return practice_schema.PracticeResponse.model_validate(practice)


async def delete_practice(session: AsyncSession, practice_id: int) -> None:
    practice = await _get_practice(session, practice_id)
    await practice_crud.delete_practice(session, practice)
    logger.info(f"Practice deleted: practice_id={practice_id}")


async def list_practice_questions(session: AsyncSession, practice_id: int) -> question_schema.QuestionListResponse:
    await _get_practice(session, practice_id)
    questions = await question_crud.get_questions_by_practice_id(session, practice_id)
    items = [question_schema.QuestionResponse.model_validate(q) for q in questions]
    return question_schema.QuestionListResponse(questions=items, total=len(items))


async def add_practice_question(
    session: AsyncSession,
    practice_id: int,
    request: question_schema.QuestionCreateRequest,
) -> question_schema.QuestionResponse:
    await _get_practice(session, practice_id)
    _check_question(request)
    question = await question_crud.create_question(
        session,
        text=request.text,
        options=request.options,
        correct_answer=request.correct_answer,
        explanation=request.explanation,
        practice_id=practice_id,
    )
    return question_schema.QuestionResponse.model_validate(question)


# --- content ---

async def list_explanations(session: AsyncSession) -> catalog_schema.ExplanationListResponse:
    explanations = await content_crud.get_explanations(session)
    items = [catalog_schema.ExplanationResponse.model_validate(e) for e in explanations]
    return catalog_schema.ExplanationListResponse(explanations=items, total=len(items))


async def create_explanation(
    session: AsyncSession,
    request: catalog_schema.ExplanationCreateRequest,
) -> catalog_schema.ExplanationResponse:
    explanation = await content_crud.create_explanation(
        session,
        title=request.title,
        description=request.description,
        grade=request.grade,
        video_url=request.video_url,
    )
    return catalog_schema.ExplanationResponse.model_validate(explanation)


async def delete_explanation(session: AsyncSession, explanation_id: int) -> None:
    explanation = await content_crud.get_explanation_by_id(session, explanation_id)
    if not explanation:
        raise ExplanationNotFoundError(explanation_id)
    await content_crud.delete_explanation(session, explanation)
    logger.info(f"Explanation deleted: explanation_id={explanation_id}")


async def list_library(session: AsyncSession) -> catalog_schema.LibraryFileListResponse:
    files = await content_crud.get_library_files(session)
    items = [catalog_schema.LibraryFileResponse.model_validate(f) for f in files]
    return catalog_schema.LibraryFileListResponse(files=items, total=len(items))


async def create_library_file(
    session: AsyncSession,
    title: str,
    grade: str,
    description: str | None,
    filename: str | None,
    content_type: str | None,
    data: bytes,
) -> catalog_schema.LibraryFileResponse:
    """Upload a PDF into the library"""
    if content_type != PDF_CONTENT_TYPE:
        raise InvalidUploadError("يجب أن يكون الملف بصيغة PDF.")
    if not data:
        raise InvalidUploadError("الرجاء اختيار ملف لرفعه.")

    key = storage_service.library_file_key(filename)
    file_url = await storage_service.put_object(key, data)
    try:
        library_file = await content_crud.create_library_file(
            session,
            title=title,
            description=description,
            grade=grade,
            file_url=file_url,
            file_path=key,
        )
    except Exception:
        await storage_service.delete_object(key)
        raise
    return catalog_schema.LibraryFileResponse.model_validate(library_file)


async def delete_library_file(session: AsyncSession, file_id: int) -> None:
    """Delete the blob first, then the row"""
    library_file = await content_crud.get_library_file_by_id(session, file_id)
    if not library_file:
        raise LibraryFileNotFoundError(file_id)
    await storage_service.delete_object(library_file.file_path)
    await content_crud.delete_library_file(session, library_file)
    logger.info(f"Library file deleted: file_id={file_id}")


# --- results ---

async def list_results(session: AsyncSession) -> result_schema.AdminResultsResponse:
    """All exam and practice results, newest first, with names and titles resolved"""
    results = await result_crud.get_all_results(session)
    practice_results = await result_crud.get_all_practice_results(session)

    student_ids = {r.student_id for r in results} | {r.student_id for r in practice_results}
    students = await user_crud.get_users_by_ids(session, student_ids)
    exams = await exam_crud.get_exams_by_ids(session, {r.exam_id for r in results})
    practices = await practice_crud.get_practices_by_ids(session, {r.practice_id for r in practice_results})

    exam_rows = []
    for r in results:
        student = students.get(r.student_id)
        exam = exams.get(r.exam_id)
        exam_rows.append(
            result_schema.AdminExamResultResponse(
                id=r.id,
                student_id=r.student_id,
                student_name=student.username if student else DELETED_STUDENT,
                student_email=student.email if student else UNKNOWN_EMAIL,
                exam_id=r.exam_id,
                exam_title=exam.title if exam else DELETED_EXAM,
                type=r.type,
                score=r.score,
                total_questions=r.total_questions,
                percentage=result_service.percentage(r.score, r.total_questions) if r.type == EXAM_TYPE_MCQ else None,
                file_url=r.file_url,
                grade=r.grade,
                submitted_at=r.submitted_at,
            )
        )

    practice_rows = []
    for r in practice_results:
        student = students.get(r.student_id)
        practice = practices.get(r.practice_id)
        practice_rows.append(
            result_schema.AdminPracticeResultResponse(
                id=r.id,
                student_id=r.student_id,
                student_name=student.username if student else DELETED_STUDENT,
                student_email=student.email if student else UNKNOWN_EMAIL,
                practice_id=r.practice_id,
                practice_title=practice.title if practice else DELETED_PRACTICE,
                score=r.score,
                total_questions=r.total_questions,
                percentage=result_service.percentage(r.score, r.total_questions),
                submitted_at=r.submitted_at,
            )
        )

    return result_schema.AdminResultsResponse(exam_results=exam_rows, practice_results=practice_rows)


async def _get_result(session: AsyncSession, result_id: int):
    result = await result_crud.get_result_by_id(session, result_id)
    if not result:
        raise ResultNotFoundError(result_id)
    return result


async def get_result_detail(session: AsyncSession, result_id: int) -> result_schema.ResultDetailResponse:
    """Admin review of an mcq result (not subject to publishing)"""
    result = await _get_result(session, result_id)
    if result.type == EXAM_TYPE_FILE:
        raise ResultTypeMismatchError()
    exam = await _get_exam(session, result.exam_id)
    return await result_service.build_result_detail(session, result, exam)


async def grade_result(
    session: AsyncSession,
    result_id: int,
    request: result_schema.GradeSubmitRequest,
) -> result_schema.AdminExamResultResponse:
    result = await _get_result(session, result_id)
    if result.type != EXAM_TYPE_FILE:
        raise ResultTypeMismatchError("رصد الدرجات متاح لامتحانات الملفات فقط.")
    result = await result_crud.update_result_grade(session, result, request.grade)
    logger.info(f"File result graded: result_id={result_id}, grade={request.grade}")

    student = await user_crud.get_user_by_id(session, result.student_id)
    exam = await exam_crud.get_exam_by_id(session, result.exam_id)
    return result_schema.AdminExamResultResponse(
        id=result.id,
        student_id=result.student_id,
        student_name=student.username if student else DELETED_STUDENT,
        student_email=student.email if student else UNKNOWN_EMAIL,
        exam_id=result.exam_id,
        exam_title=exam.title if exam else DELETED_EXAM,
        type=result.type,
        score=None,
        total_questions=None,
        percentage=None,
        file_url=result.file_url,
        grade=result.grade,
        submitted_at=result.submitted_at,
    )


async def get_result_file_url(session: AsyncSession, result_id: int) -> str:
    result = await _get_result(session, result_id)
    if result.type != EXAM_TYPE_FILE or not result.file_url:
        raise ResultTypeMismatchError("لا يوجد ملف مرفق بهذه النتيجة.")
    return result.file_url


async def delete_result(session: AsyncSession, result_id: int) -> None:
    """Delete a result and its uploaded answer file, which lets the student retake"""
    result = await _get_result(session, result_id)
    if result.file_path:
        await storage_service.delete_object(result.file_path)
    await result_crud.delete_result(session, result)
    logger.info(f"Result deleted: result_id={result_id}, student_id={result.student_id}, exam_id={result.exam_id}")
