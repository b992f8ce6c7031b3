# /gradeledger/services/gpa_service.py

"""
Credit-weighted GPA on the 4.0 scale.

GRADE MAPPING:
A+ = 4.0, A = 4.0, A- = 3.7
B+ = 3.3, B = 3.0, B- = 2.7
C+ = 2.3, C = 2.0, C- = 1.7
D+ = 1.3, D = 1.0, F = 0.0

GPA = sum(points x credits) / sum(credits), rounded half-up to 2 places.
A record whose courses carry no credits has no GPA: `compute_gpa` returns
`UNDEFINED_GPA` (None), never 0.0.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple

from ..models.academic_record_model import AcademicRecord, Course, RecordGPA

GRADE_POINTS = {
    "A+": 4.0, "A": 4.0, "A-": 3.7,
    "B+": 3.3, "B": 3.0, "B-": 2.7,
    "C+": 2.3, "C": 2.0, "C-": 1.7,
    "D+": 1.3, "D": 1.0, "F": 0.0,
}

# NG (no grade) and IP (in progress) are not in the table: they earn 0.0
# points while their credits still count in the denominator, which pulls the
# GPA of a term with ungraded courses down. Existing reports depend on this.
# TODO: exclude NG/IP credits once the registrar confirms the policy change.
UNGRADED_POINTS = 0.0

UNDEFINED_GPA = None


def grade_points(grade: str) -> float:
    return GRADE_POINTS.get(grade, UNGRADED_POINTS)


def quality_points(course: Course) -> float:
    """Grade points multiplied by the course's credit hours."""
    return grade_points(course.grade) * course.credits


def round_gpa(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def course_totals(courses: Iterable[Course]) -> Tuple[int, float]:
    """Returns (total credits, total quality points) for a set of courses."""
    total_credits = 0
    total_points = 0.0
    for course in courses:
        total_credits += course.credits
        total_points += quality_points(course)
    return total_credits, total_points


def compute_gpa_for_courses(courses: Iterable[Course]) -> Optional[float]:
    total_credits, total_points = course_totals(courses)
    if total_credits == 0:
        return UNDEFINED_GPA
    return round_gpa(total_points / total_credits)


def compute_gpa(record: AcademicRecord) -> Optional[float]:
    """GPA of one academic record, or UNDEFINED_GPA when it has no credits."""
    return compute_gpa_for_courses(record.courses)


def describe_record_gpa(record: AcademicRecord) -> RecordGPA:
    total_credits, total_points = course_totals(record.courses)
    gpa = compute_gpa(record)
    return RecordGPA(
        recordId=record.id,
        gpa=gpa,
        defined=gpa is not UNDEFINED_GPA,
        totalCredits=total_credits,
        qualityPoints=round_gpa(total_points),
    )


def format_gpa(gpa: Optional[float]) -> str:
    """Display form used on reports: two decimals, or 'N/A' when undefined."""
    return "N/A" if gpa is UNDEFINED_GPA else f"{gpa:.2f}"
