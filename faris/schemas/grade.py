from typing import Annotated

from pydantic import AfterValidator

from faris.core.grades import is_valid_grade


def _check_grade(v: str) -> str:
    if not is_valid_grade(v):
        raise ValueError("الرجاء اختيار الصف الدراسي.")
    return v


GradeCode = Annotated[str, AfterValidator(_check_grade)]
