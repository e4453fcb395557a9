from faris.crud.contact_message import (
    create_message,
    delete_message,
    get_message_by_id,
    get_messages,
    set_message_read,
)
from faris.crud.content import (
    create_explanation,
    create_library_file,
    delete_explanation,
    delete_library_file,
    get_explanation_by_id,
    get_explanations,
    get_library_file_by_id,
    get_library_files,
)
from faris.crud.exam import (
    create_exam,
    delete_exam,
    get_exam_by_id,
    get_exams,
    publish_exam_results,
    update_exam,
)
from faris.crud.practice import (
    create_practice,
    delete_practice,
    get_practice_by_id,
    get_practices,
)
from faris.crud.question import (
    create_question,
    delete_question,
    get_question_by_id,
    get_questions_by_exam_id,
    get_questions_by_practice_id,
    update_question,
)
from faris.crud.result import (
    create_file_result,
    create_mcq_result,
    create_practice_result,
    get_result_by_id,
    get_result_by_student_and_exam,
    get_results_by_student,
    update_result_grade,
)
from faris.crud.user import (
    create_user,
    get_user_by_email,
    get_user_by_id,
    update_user_status,
)

__all__ = [
    "get_user_by_id",
    "get_user_by_email",
    "create_user",
    "update_user_status",
    "get_exam_by_id",
    "get_exams",
    "create_exam",
    "update_exam",
    "publish_exam_results",
    "delete_exam",
    "get_practice_by_id",
    "get_practices",
    "create_practice",
    "delete_practice",
    "get_question_by_id",
    "get_questions_by_exam_id",
    "get_questions_by_practice_id",
    "create_question",
    "update_question",
    "delete_question",
    "get_result_by_id",
    "get_result_by_student_and_exam",
    "get_results_by_student",
    "create_mcq_result",
    "create_file_result",
    "update_result_grade",
    "create_practice_result",
    "get_library_file_by_id",
    "get_library_files",
    "create_library_file",
    "delete_library_file",
    "get_explanation_by_id",
    "get_explanations",
    "create_explanation",
    "delete_explanation",
    "get_message_by_id",
    "get_messages",
    "create_message",
    "set_message_read",
    "delete_message",
]
