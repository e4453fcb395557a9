"""Grade level catalogue tests"""
import pytest
from pydantic import BaseModel, ValidationError

from faris.core.grades import GRADE_LEVELS, grade_choices, grade_label, is_valid_grade
from faris.schemas.grade import GradeCode


class _GradeForm(BaseModel):
    grade: GradeCode


def test_grade_levels_complete():
    assert len(GRADE_LEVELS) == 10
    assert grade_label("sec_2") == "الصف الثاني الثانوي"
    assert grade_label("culture_ministry") == "محاضرات وزارة الثقافة"


def test_grade_label_fallbacks():
    assert grade_label("unknown") == "unknown"
    assert grade_label(None) == ""


def test_is_valid_grade():
    assert is_valid_grade("prep_1")
    assert not is_valid_grade("")
    assert not is_valid_grade(None)


def test_grade_choices_keep_order():
    choices = grade_choices()
    assert choices[0] == {"value": "prep_1", "label": "الصف الأول الإعدادي"}
    assert [c["value"] for c in choices] == list(GRADE_LEVELS)


def test_grade_code_validation():
    assert _GradeForm(grade="uni_yemen").grade == "uni_yemen"
    with pytest.raises(ValidationError):
        _GradeForm(grade="grade_12")
