from __future__ import annotations

_LOWER_GRADE_SUBJECTS = (
    "Bahasa Indonesia",
    "Matematika",
    "Pendidikan Pancasila",
    "Pendidikan Agama Islam",
    "Seni Rupa",
    "Seni Teater",
    "Seni Musik",
    "Seni Tari",
    "Penjas",
)

_UPPER_GRADE_SUBJECTS = _LOWER_GRADE_SUBJECTS + ("Bahasa Inggris", "IPAS")

SUBJECTS_BY_GRADE: dict[int, tuple[str, ...]] = {
    1: _LOWER_GRADE_SUBJECTS,
    2: _LOWER_GRADE_SUBJECTS,
    3: _LOWER_GRADE_SUBJECTS,
    4: _UPPER_GRADE_SUBJECTS,
    5: _UPPER_GRADE_SUBJECTS,
    6: _UPPER_GRADE_SUBJECTS,
}


def subjects_for_grade(grade: int) -> list[str]:
    """Subject catalog for a grade; empty for grades outside 1-6."""
    return list(SUBJECTS_BY_GRADE.get(int(grade), ()))


def invalid_subjects(grade: int, subjects: list[str]) -> list[str]:
    allowed = set(SUBJECTS_BY_GRADE.get(int(grade), ()))
    return [s for s in subjects if s not in allowed]
