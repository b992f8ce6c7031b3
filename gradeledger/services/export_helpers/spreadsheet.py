# /gradeledger/services/export_helpers/spreadsheet.py

"""
Builds the three-sheet student workbook with pandas and the openpyxl engine.
"""

import io
from typing import Dict, List

import pandas as pd

from ...models.student_model import Student
from ...models.academic_record_model import AcademicRecord

STUDENT_COLUMNS = ["Student ID", "Full Name", "Sex", "Contact", "Department"]
RECORD_COLUMNS = [
    "Student ID", "Student Name", "Year", "Semester", "Status",
    "Courses Count", "Total Credits",
]
COURSE_COLUMNS = [
    "Student ID", "Student Name", "Year", "Semester", "Status",
    "Course Code", "Course Name", "Grade", "Credits",
]

UNKNOWN_STUDENT = "Unknown"


def _student_names(students: List[Student]) -> Dict[str, str]:
    return {s.id: s.fullName for s in students}


def students_frame(students: List[Student]) -> pd.DataFrame:
    rows = [[s.id, s.fullName, s.sex, s.contact, s.department] for s in students]
    return pd.DataFrame(rows, columns=STUDENT_COLUMNS)


def records_frame(students: List[Student], records: List[AcademicRecord]) -> pd.DataFrame:
    names = _student_names(students)
    rows = [
        [
            r.studentId, names.get(r.studentId, UNKNOWN_STUDENT), r.year, r.semester, r.status,
            len(r.courses), sum(c.credits for c in r.courses),
        ]
        for r in records
    ]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)


def courses_frame(students: List[Student], records: List[AcademicRecord]) -> pd.DataFrame:
    names = _student_names(students)
    rows = []
    for r in records:
        student_name = names.get(r.studentId, UNKNOWN_STUDENT)
        for c in r.courses:
            rows.append([
                r.studentId, student_name, r.year, r.semester, r.status,
                c.courseCode, c.courseName, c.grade, c.credits,
            ])
    return pd.DataFrame(rows, columns=COURSE_COLUMNS)


def render_workbook(students: List[Student], records: List[AcademicRecord]) -> bytes:
    sheets = {
        "Students": students_frame(students),
        "Academic Records": records_frame(students, records),
        "Detailed Courses": courses_frame(students, records),
    }
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for sheet_name, frame in sheets.items():
            frame.to_excel(writer, sheet_name=sheet_name, index=False)
    return buffer.getvalue()
