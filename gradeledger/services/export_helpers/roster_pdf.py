# /gradeledger/services/export_helpers/roster_pdf.py

"""
The full student database report: letterhead, summary box, the student
directory table and one summary block per academic record.
"""

from collections import Counter
from datetime import date
from typing import List

from ...core import config
from ...models.student_model import Student
from ...models.academic_record_model import AcademicRecord
from .. import gpa_service
from .pdf_layout import (
    Column, PdfCanvas, MARGIN_X, CONTENT_WIDTH, STRIPE_FILL, SUMMARY_FILL,
    institution_letterhead, fit_text,
)

REPORT_TITLE = "STUDENT DATABASE REPORT"
FOOTER_CAPTION = "Student Database Report"

DIRECTORY_COLUMNS = [
    Column("No.", 30, "center"),
    Column("Student Name", 135),
    Column("Student ID", 70),
    Column("Sex", 35, "center"),
    Column("Contact", 125),
    Column("Department", 120),
]
ROW_HEIGHT = 18
RECORD_BLOCK_HEIGHT = 80


def _draw_summary(canvas: PdfCanvas, students: List[Student], records: List[AcademicRecord]) -> None:
    departments = Counter(s.department for s in students)
    department_text = ", ".join(f"{name} ({count})" for name, count in departments.items()) or "None"

    box_height = 72
    canvas.rect(MARGIN_X, canvas.y, CONTENT_WIDTH, box_height, fill=SUMMARY_FILL)
    x = MARGIN_X + 12
    canvas.text(x, canvas.y + 18, "SUMMARY STATISTICS", size=11, bold=True)
    canvas.text(x, canvas.y + 34, f"Total Students: {len(students)}", size=10)
    canvas.text(x + 250, canvas.y + 34, f"Total Academic Records: {len(records)}", size=10)
    canvas.text(x, canvas.y + 52,
                fit_text(f"Departments: {department_text}", CONTENT_WIDTH - 12, 10), size=10)
    canvas.y += box_height + 24


def _draw_directory(canvas: PdfCanvas, students: List[Student]) -> None:
    canvas.heading("STUDENT DIRECTORY")
    canvas.table_header(DIRECTORY_COLUMNS, height=ROW_HEIGHT)
    for index, student in enumerate(students, start=1):
        if canvas.ensure_space(ROW_HEIGHT):
            canvas.table_header(DIRECTORY_COLUMNS, height=ROW_HEIGHT)
        canvas.table_row(
            DIRECTORY_COLUMNS,
            [str(index), student.fullName, student.id, student.sex[:1], student.contact or "-", student.department],
            height=ROW_HEIGHT,
            fill=STRIPE_FILL if index % 2 == 0 else None,
        )


def _draw_record_block(canvas: PdfCanvas, index: int, record: AcademicRecord, student_name: str) -> None:
    top = canvas.y
    canvas.rect(MARGIN_X, top, CONTENT_WIDTH, RECORD_BLOCK_HEIGHT - 10)
    left = MARGIN_X + 10
    right = MARGIN_X + CONTENT_WIDTH / 2 + 10

    canvas.text(left, top + 16, fit_text(f"{index}. {student_name}", CONTENT_WIDTH - 20, 11, bold=True),
                size=11, bold=True)

    total_credits, _ = gpa_service.course_totals(record.courses)
    left_lines = [
        f"Student ID: {record.studentId}",
        f"Academic Year: {record.year}",
        f"Semester: {record.semester}",
    ]
    right_lines = [
        f"Status: {record.status}",
        f"Courses Enrolled: {len(record.courses)}",
        f"Total Credit Hours: {total_credits}  |  GPA: {gpa_service.format_gpa(gpa_service.compute_gpa(record))}",
    ]
    for offset, (l_text, r_text) in enumerate(zip(left_lines, right_lines)):
        y = top + 32 + offset * 13
        canvas.text(left, y, l_text, size=9)
        canvas.text(right, y, r_text, size=9)
    canvas.y = top + RECORD_BLOCK_HEIGHT


def _draw_records_summary(canvas: PdfCanvas, students: List[Student], records: List[AcademicRecord]) -> None:
    names = {s.id: s.fullName for s in students}
    # Start the section on a fresh page unless the heading and one block fit.
    if not canvas.ensure_space(32 + RECORD_BLOCK_HEIGHT):
        canvas.y += 14
    canvas.heading("ACADEMIC RECORDS SUMMARY")
    if not records:
        canvas.text(MARGIN_X, canvas.y + 10, "No academic records on file.", size=10)
        canvas.y += 20
        return
    for index, record in enumerate(records, start=1):
        canvas.ensure_space(RECORD_BLOCK_HEIGHT)
        _draw_record_block(canvas, index, record, names.get(record.studentId, "Unknown"))


def render_roster(students: List[Student], records: List[AcademicRecord], generated_on: date) -> bytes:
    canvas = PdfCanvas()
    canvas.letterhead(institution_letterhead(REPORT_TITLE))
    canvas.centered_text(canvas.y - 6, f"Generated on: {generated_on.strftime('%B %d, %Y')}", size=10)
    canvas.y += 12

    _draw_summary(canvas, students, records)
    _draw_directory(canvas, students)
    _draw_records_summary(canvas, students, records)

    canvas.stamp_footers(f"{config.INSTITUTION_NAME} - {FOOTER_CAPTION}")
    return canvas.to_bytes()
