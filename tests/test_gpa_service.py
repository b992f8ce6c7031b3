# /tests/test_gpa_service.py

import pytest

from gradeledger.models.academic_record_model import AcademicRecord, Course
from gradeledger.services import gpa_service


def _course(code, grade, credits):
    return Course(courseName=f"Course {code}", courseCode=code, grade=grade, credits=credits)


def _record(*courses):
    return AcademicRecord(studentId="STU001", year="2024", semester="Semester 1", status="Freshman", courses=list(courses))


@pytest.mark.parametrize("grade, points", [
    ("A+", 4.0), ("A", 4.0), ("A-", 3.7),
    ("B+", 3.3), ("B", 3.0), ("B-", 2.7),
    ("C+", 2.3), ("C", 2.0), ("C-", 1.7),
    ("D+", 1.3), ("D", 1.0), ("F", 0.0),
])
def test_grade_points_table(grade, points):
    assert gpa_service.grade_points(grade) == points


def test_gpa_is_credit_weighted_and_rounded():
    record = _record(_course("EDU101", "A", 3), _course("ENG101", "B+", 3), _course("MTH101", "C", 2))
    # (12.0 + 9.9 + 4.0) / 8 = 3.2375
    assert gpa_service.compute_gpa(record) == 3.24


def test_failing_grade_counts_toward_credits():
    record = _record(_course("EDU101", "A", 3), _course("SOC101", "F", 1))
    assert gpa_service.compute_gpa(record) == 3.0


def test_ungraded_courses_earn_no_points_but_keep_their_credits():
    record = _record(_course("EDU101", "A", 3), _course("EDU102", "NG", 3))
    assert gpa_service.compute_gpa(record) == 2.0

    record = _record(_course("EDU101", "A", 3), _course("EDU102", "IP", 1))
    assert gpa_service.compute_gpa(record) == 3.0


def test_record_without_credits_has_undefined_gpa():
    assert gpa_service.compute_gpa(_record()) is gpa_service.UNDEFINED_GPA
    assert gpa_service.compute_gpa(_record(_course("ORI100", "A", 0))) is gpa_service.UNDEFINED_GPA


def test_undefined_gpa_is_distinct_from_zero():
    failing = _record(_course("SOC101", "F", 3))
    assert gpa_service.compute_gpa(failing) == 0.0
    assert gpa_service.compute_gpa(failing) is not gpa_service.UNDEFINED_GPA


@pytest.mark.parametrize("value, expected", [(2.675, 2.68), (0.125, 0.13), (3.2349, 3.23), (4.0, 4.0)])
def test_rounding_is_half_up(value, expected):
    assert gpa_service.round_gpa(value) == expected


def test_describe_record_gpa():
    record = _record(_course("EDU101", "A", 3), _course("MTH101", "C", 2))
    summary = gpa_service.describe_record_gpa(record)

    assert summary.recordId == record.id
    assert summary.gpa == 3.2
    assert summary.defined is True
    assert summary.totalCredits == 5
    assert summary.qualityPoints == 16.0


def test_describe_record_gpa_without_credits():
    summary = gpa_service.describe_record_gpa(_record())
    assert summary.gpa is None
    assert summary.defined is False
    assert summary.totalCredits == 0


def test_format_gpa():
    assert gpa_service.format_gpa(None) == "N/A"
    assert gpa_service.format_gpa(3.2) == "3.20"
    assert gpa_service.format_gpa(0.0) == "0.00"


def test_worked_example():
    record = _record(_course("EDU101", "A", 3), _course("EDU102", "B+", 4))
    # 3 x 4.0 + 4 x 3.3 = 25.2 over 7 credits
    assert gpa_service.compute_gpa(record) == 3.6


@pytest.mark.parametrize("grades", [["A+", "A+"], ["F", "NG"], ["C-", "IP", "D+"], ["A-", "B", "F"]])
def test_gpa_stays_on_the_four_point_scale(grades):
    record = _record(*[_course(f"C{i}", g, i + 1) for i, g in enumerate(grades)])
    assert 0.0 <= gpa_service.compute_gpa(record) <= 4.0
