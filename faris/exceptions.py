"""Application exception classes"""


class BaseAppError(Exception):
    """Base application error"""

    def __init__(self, message: str, status_code: int = 500, location: str | None = None):
        self.message = message
        self.status_code = status_code
        # client-side route to send the user to (authorization failures)
        self.location = location
        super().__init__(self.message)


# --- authorization ---

class AuthenticationRequiredError(BaseAppError):
    """No signed-in principal (401)"""

    def __init__(self, message: str = "يجب تسجيل الدخول أولاً."):
        super().__init__(message, status_code=401, location="/login")


class InvalidCredentialsError(BaseAppError):
    """Wrong email or password (401)"""

    def __init__(self, message: str = "البريد الإلكتروني أو كلمة المرور غير صحيحة."):
        super().__init__(message, status_code=401)


class AccountPendingError(BaseAppError):
    """Student account not yet approved by an admin (403)"""

    def __init__(self, message: str = "حسابك في انتظار موافقة الإدارة. سيتم إعلامك عند تفعيله."):
        super().__init__(message, status_code=403, location="/login")


class AdminRequiredError(BaseAppError):
    """Admin-only route accessed by a student (403)"""

    def __init__(self, message: str = "ليس لديك صلاحية الوصول إلى هذه الصفحة."):
        super().__init__(message, status_code=403, location="/dashboard")


class ReauthenticationFailedError(BaseAppError):
    """Current password did not match during a password change (403)"""

    def __init__(self, message: str = "كلمة المرور الحالية غير صحيحة."):
        super().__init__(message, status_code=403)


# --- not found ---

class UserNotFoundError(BaseAppError):
    def __init__(self, user_id: int):
        super().__init__(f"لم يتم العثور على الطالب: {user_id}", status_code=404)


class ExamNotFoundError(BaseAppError):
    def __init__(self, exam_id: int):
        super().__init__(f"لم يتم العثور على الامتحان: {exam_id}", status_code=404)


class PracticeNotFoundError(BaseAppError):
    def __init__(self, practice_id: int):
        super().__init__(f"لم يتم العثور على التدريب: {practice_id}", status_code=404)


class QuestionNotFoundError(BaseAppError):
    def __init__(self, question_id: int):
        super().__init__(f"لم يتم العثور على السؤال: {question_id}", status_code=404)


class ResultNotFoundError(BaseAppError):
    def __init__(self, result_id: int):
        super().__init__(f"لم يتم العثور على النتيجة: {result_id}", status_code=404)


class LibraryFileNotFoundError(BaseAppError):
    def __init__(self, file_id: int):
        super().__init__(f"لم يتم العثور على الملف: {file_id}", status_code=404)


class ExplanationNotFoundError(BaseAppError):
    def __init__(self, explanation_id: int):
        super().__init__(f"لم يتم العثور على الشرح: {explanation_id}", status_code=404)


class ContactMessageNotFoundError(BaseAppError):
    def __init__(self, message_id: int):
        super().__init__(f"لم يتم العثور على الرسالة: {message_id}", status_code=404)


class SessionNotFoundError(BaseAppError):
    """No live session for this student and exam/practice (404)"""

    def __init__(self, message: str = "لا توجد جلسة نشطة. الرجاء بدء الامتحان من جديد."):
        super().__init__(message, status_code=404)


# --- validation ---

class InvalidQuestionError(BaseAppError):
    """Malformed question input (400)"""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class InvalidSelectionError(BaseAppError):
    """Answer selection not allowed in the current session state (400)"""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class InvalidExamRequestError(BaseAppError):
    """Request not valid for this exam (400)"""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class InvalidUploadError(BaseAppError):
    """Missing or disallowed upload (400)"""

    def __init__(self, message: str = "الملف المرفوع غير صالح."):
        super().__init__(message, status_code=400)


class ResultTypeMismatchError(BaseAppError):
    """Operation does not apply to this result type (400)"""

    def __init__(self, message: str = "هذه الصفحة مخصصة لنتائج امتحانات الأسئلة فقط."):
        super().__init__(message, status_code=400)


# --- conflicts / visibility ---

class ExamAlreadyCompletedError(BaseAppError):
    """A result already exists for this student and exam (409)"""

    def __init__(self, message: str = "لقد قمت بتأدية هذا الامتحان بالفعل."):
        super().__init__(message, status_code=409)


class SubmissionInProgressError(BaseAppError):
    """The session is already being submitted (409)"""

    def __init__(self, message: str = "جاري تسليم الامتحان بالفعل."):
        super().__init__(message, status_code=409)


class DuplicateEmailError(BaseAppError):
    def __init__(self, message: str = "هذا البريد الإلكتروني مستخدم بالفعل."):
        super().__init__(message, status_code=409)


class ResultsNotPublishedError(BaseAppError):
    """Per-question review is locked until the admin publishes results (403)"""

    def __init__(self, message: str = "لم يتم نشر نتائج هذا الامتحان بعد. يرجى المحاولة لاحقاً."):
        super().__init__(message, status_code=403)


# --- transient backend failures ---

class TutorUnavailableError(BaseAppError):
    """The AI prompt endpoint failed (503)"""

    def __init__(self, message: str = "المساعد الذكي غير متاح حالياً."):
        super().__init__(message, status_code=503)


class StorageError(BaseAppError):
    """Blob storage put/delete failed (503)"""

    def __init__(self, message: str = "فشل التعامل مع ملف التخزين. الرجاء المحاولة مرة أخرى."):
        super().__init__(message, status_code=503)
