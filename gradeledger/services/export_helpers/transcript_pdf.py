# /gradeledger/services/export_helpers/transcript_pdf.py

"""
The per-student transcript ("Student Grade Ledger").

Records are grouped by (year, semester, status) in the order they first
appear, and the courses of records sharing a group are listed together. Each
group closes with its credit total and the GPA computed from exactly the
courses shown.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Tuple

from ...core import config
from ...models.student_model import StudentWithRecords
from ...models.academic_record_model import AcademicRecord, Course
from .. import gpa_service
from .pdf_layout import (
    Column, PdfCanvas, MARGIN_X, CONTENT_WIDTH, HEADER_FILL, PAGE_WIDTH,
    institution_letterhead,
)

TITLE = "Student Grade Ledger"

COURSE_COLUMNS = [
    Column("Description", 215),
    Column("Code", 80, "center"),
    Column("Grade", 60, "center"),
    Column("CrHrs", 70, "center"),
    Column("Points", 90, "center"),
]
ROW_HEIGHT = 18
GROUP_BANNER_HEIGHT = 22
# Banner + header + one course row + the two total rows.
MIN_GROUP_START = GROUP_BANNER_HEIGHT + ROW_HEIGHT * 4 + 8


@dataclass
class TermGroup:
    year: str
    semester: str
    status: str
    courses: List[Course] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"Academic Year: {self.year}    Semester: {self.semester}    Status: {self.status}"


def group_records_by_term(records: List[AcademicRecord]) -> List[TermGroup]:
    groups: Dict[Tuple[str, str, str], TermGroup] = {}
    for record in records:
        key = (record.year, record.semester, record.status)
        if key not in groups:
            groups[key] = TermGroup(*key)
        groups[key].courses.extend(record.courses)
    return list(groups.values())


def _draw_student_info(canvas: PdfCanvas, student: StudentWithRecords) -> None:
    rows = [
        ("Student Name", student.fullName),
        ("Student ID", student.id),
        ("College", config.INSTITUTION_COLLEGE),
        ("Major", student.department.upper()),
    ]
    for label, value in rows:
        canvas.y += 15
        canvas.text(MARGIN_X, canvas.y, label, size=10, bold=True)
        canvas.text(MARGIN_X + 100, canvas.y, f":  {value}", size=10)
    canvas.y += 20


def _draw_group(canvas: PdfCanvas, group: TermGroup) -> None:
    canvas.ensure_space(MIN_GROUP_START)
    canvas.rect(MARGIN_X, canvas.y, CONTENT_WIDTH, GROUP_BANNER_HEIGHT, fill=HEADER_FILL)
    canvas.text(MARGIN_X + 8, canvas.y + 15, group.label, size=10, bold=True)
    canvas.y += GROUP_BANNER_HEIGHT
    canvas.table_header(COURSE_COLUMNS, height=ROW_HEIGHT)

    for course in group.courses:
        if canvas.ensure_space(ROW_HEIGHT):
            canvas.table_header(COURSE_COLUMNS, height=ROW_HEIGHT)
        canvas.table_row(COURSE_COLUMNS, [
            course.courseName,
            course.courseCode,
            course.grade,
            str(course.credits),
            f"{gpa_service.quality_points(course):.2f}",
        ], height=ROW_HEIGHT)

    total_credits, total_points = gpa_service.course_totals(group.courses)
    gpa = gpa_service.compute_gpa_for_courses(group.courses)
    total_columns = [
        Column("", sum(c.width for c in COURSE_COLUMNS[:3]), "right"),
        COURSE_COLUMNS[3],
        COURSE_COLUMNS[4],
    ]
    if canvas.ensure_space(ROW_HEIGHT * 2):
        canvas.table_header(COURSE_COLUMNS, height=ROW_HEIGHT)
    canvas.table_row(total_columns, ["Total Credit Hours:", str(total_credits), f"{total_points:.2f}"],
                     height=ROW_HEIGHT, bold=True)
    canvas.table_row(total_columns, ["Grade Point Average:", "", gpa_service.format_gpa(gpa)],
                     height=ROW_HEIGHT, bold=True)
    canvas.y += 16


def _draw_signature(canvas: PdfCanvas) -> None:
    canvas.ensure_space(70)
    canvas.y += 40
    line_width = 220
    x0 = (PAGE_WIDTH - line_width) / 2
    canvas.line(x0, canvas.y, x0 + line_width, canvas.y)
    canvas.centered_text(canvas.y + 14, config.REGISTRAR_TITLE, size=10, bold=True)
    canvas.y += 24


def render_transcript(student: StudentWithRecords, generated_on: date) -> bytes:
    canvas = PdfCanvas()
    canvas.letterhead(institution_letterhead(TITLE), gap_after=6)
    canvas.centered_text(canvas.y + 6, f"Issued on: {generated_on.strftime('%B %d, %Y')}", size=9)
    canvas.y += 14

    _draw_student_info(canvas, student)

    groups = group_records_by_term(student.academicRecords)
    if not groups:
        canvas.text(MARGIN_X, canvas.y + 10, "No academic records on file.", size=10)
        canvas.y += 20
    for group in groups:
        _draw_group(canvas, group)

    _draw_signature(canvas)
    canvas.stamp_footers(f"{config.INSTITUTION_NAME} - {student.fullName}")
    return canvas.to_bytes()
