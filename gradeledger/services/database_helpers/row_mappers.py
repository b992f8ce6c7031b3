# /gradeledger/services/database_helpers/row_mappers.py

"""
Explicit conversions between remote-store rows (snake_case ORM objects) and
domain models (camelCase pydantic models).

Rows are validated here, at the boundary. Anything that leaves this module
is a fully validated domain value; anything that goes into the store is a
plain dict of column values.
"""

from typing import Dict, List

from pydantic import ValidationError

from ...core.errors import RecordValidationError
from ...db.models.student_record_models import (
    Student as StudentRow,
    AcademicRecord as AcademicRecordRow,
    Course as CourseRow,
)
from ...models.student_model import Student
from ...models.academic_record_model import AcademicRecord, Course


def _validate(model_cls, data: Dict, what: str):
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise RecordValidationError(f"Invalid {what} row {data.get('id')!r}: {e}") from e


# --- Row -> Domain ---

def student_from_row(row: StudentRow) -> Student:
    return _validate(Student, {
        "id": row.id,
        "fullName": row.full_name,
        "sex": row.sex,
        "contact": row.contact or "",
        "department": row.department,
    }, "student")


def course_from_row(row: CourseRow) -> Course:
    return _validate(Course, {
        "id": row.id,
        "courseName": row.course_name,
        "courseCode": row.course_code,
        "grade": row.grade,
        "credits": row.credits,
    }, "course")


def record_from_row(row: AcademicRecordRow) -> AcademicRecord:
    """Maps a record row together with its (already loaded) course rows."""
    return _validate(AcademicRecord, {
        "id": row.id,
        "studentId": row.student_id,
        "year": row.year,
        "semester": row.semester,
        "status": row.status,
        "courses": [course_from_row(c).model_dump() for c in row.courses],
    }, "academic record")


# --- Domain -> Row ---

def student_to_row(student: Student, user_id: str) -> Dict:
    return {
        "id": student.id,
        "user_id": user_id,
        "full_name": student.fullName,
        "sex": student.sex,
        "contact": student.contact,
        "department": student.department,
    }


def record_to_row(record: AcademicRecord, user_id: str) -> Dict:
    return {
        "id": record.id,
        "user_id": user_id,
        "student_id": record.studentId,
        "year": record.year,
        "semester": record.semester,
        "status": record.status,
    }


def courses_to_rows(courses: List[Course], record_id: str, user_id: str, start_position: int = 0) -> List[Dict]:
    return [
        {
            "id": course.id,
            "user_id": user_id,
            "academic_record_id": record_id,
            "course_name": course.courseName,
            "course_code": course.courseCode,
            "grade": course.grade,
            "credits": course.credits,
            "position": start_position + offset,
        }
        for offset, course in enumerate(courses)
    ]
