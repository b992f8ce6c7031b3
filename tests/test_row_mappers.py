# /tests/test_row_mappers.py

import pytest

from gradeledger.core.errors import RecordValidationError
from gradeledger.db.models.student_record_models import (
    Student as StudentRow,
    AcademicRecord as AcademicRecordRow,
    Course as CourseRow,
)
from gradeledger.models.academic_record_model import Course
from gradeledger.models.student_model import Student
from gradeledger.services.database_helpers import row_mappers


def _student_row(**overrides):
    values = dict(id="STU001", user_id="owner-1", full_name="Emma Johnson", sex="Female",
                  contact="emma.johnson@email.com", department="Education")
    values.update(overrides)
    return StudentRow(**values)


def test_student_row_maps_to_domain():
    student = row_mappers.student_from_row(_student_row())
    assert student == Student(id="STU001", fullName="Emma Johnson", sex="Female",
                              contact="emma.johnson@email.com", department="Education")


def test_missing_contact_becomes_empty_string():
    assert row_mappers.student_from_row(_student_row(contact=None)).contact == ""


@pytest.mark.parametrize("overrides", [
    {"sex": "Unknown"},
    {"department": "Astrology"},
    {"full_name": "   "},
])
def test_invalid_student_rows_are_rejected(overrides):
    with pytest.raises(RecordValidationError):
        row_mappers.student_from_row(_student_row(**overrides))


def test_record_row_maps_with_courses_in_order():
    row = AcademicRecordRow(id="rec_1", user_id="owner-1", student_id="STU001",
                            year="2024", semester="Semester 1", status="Freshman")
    row.courses = [
        CourseRow(id="crs_1", course_name="Introduction to Education", course_code="EDU101", grade="A", credits=3, position=0),
        CourseRow(id="crs_2", course_name="College Algebra", course_code="MTH101", grade="IP", credits=2, position=1),
    ]

    record = row_mappers.record_from_row(row)

    assert record.id == "rec_1"
    assert record.studentId == "STU001"
    assert [c.courseCode for c in record.courses] == ["EDU101", "MTH101"]
    assert record.courses[1].grade == "IP"


def test_record_row_with_unknown_grade_is_rejected():
    row = AcademicRecordRow(id="rec_1", user_id="owner-1", student_id="STU001",
                            year="2024", semester="Semester 1", status="Freshman")
    row.courses = [CourseRow(id="crs_1", course_name="Ethics", course_code="PHI101", grade="Z", credits=3, position=0)]

    with pytest.raises(RecordValidationError):
        row_mappers.record_from_row(row)


def test_domain_to_rows_carries_owner_and_positions():
    student = Student(id="STU002", fullName="Michael Chen", sex="Male", department="Sociology")
    assert row_mappers.student_to_row(student, "owner-1") == {
        "id": "STU002", "user_id": "owner-1", "full_name": "Michael Chen",
        "sex": "Male", "contact": "", "department": "Sociology",
    }

    courses = [
        Course(id="crs_a", courseName="Social Theory", courseCode="SOC201", grade="B", credits=3),
        Course(id="crs_b", courseName="Statistics", courseCode="STA201", grade="C+", credits=3),
    ]
    rows = row_mappers.courses_to_rows(courses, "rec_9", "owner-1", start_position=4)

    assert [r["position"] for r in rows] == [4, 5]
    assert all(r["academic_record_id"] == "rec_9" and r["user_id"] == "owner-1" for r in rows)
    assert rows[1]["course_code"] == "STA201"
