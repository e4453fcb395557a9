"""Academic grade levels (the value stored on users and content rows)"""

GRADE_LEVELS: dict[str, str] = {
    "prep_1": "الصف الأول الإعدادي",
    "prep_2": "الصف الثاني الإعدادي",
    "prep_3": "الصف الثالث الإعدادي",
    "sec_1": "الصف الأول الثانوي",
    "sec_2": "الصف الثاني الثانوي",
    "sec_3": "الصف الثالث الثانوي",
    "uni_yemen": "الجامعة اليمنية",
    "uni_riyadah": "جامعة الرياده البريطانيه",
    "postgraduate": "طلاب الدراسات العليا",
    "culture_ministry": "محاضرات وزارة الثقافة",
}


def is_valid_grade(code: str | None) -> bool:
    return code in GRADE_LEVELS


def grade_label(code: str | None) -> str:
    """Display label for a grade code; unknown codes are returned as-is"""
    if code is None:
        return ""
    return GRADE_LEVELS.get(code, code)


def grade_choices() -> list[dict[str, str]]:
    return [{"value": code, "label": label} for code, label in GRADE_LEVELS.items()]
