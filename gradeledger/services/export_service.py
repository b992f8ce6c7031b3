# /gradeledger/services/export_service.py

"""
Export facade: renders the spreadsheet and the two PDF reports to bytes, and
writes them to disk atomically. Any failure surfaces as ExportError and no
partial file is left at the destination.
"""

import logging
import os
import re
import tempfile
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from ..core.errors import ExportError
from ..models.student_model import Student, StudentWithRecords
from ..models.academic_record_model import AcademicRecord
from .export_helpers import spreadsheet, roster_pdf, transcript_pdf

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"


# --- Default File Names ---

def workbook_filename(on: Optional[date] = None) -> str:
    return f"students_database_{(on or date.today()).isoformat()}.xlsx"


def roster_filename(on: Optional[date] = None) -> str:
    return f"Students_Database_Report_{(on or date.today()).isoformat()}.pdf"


def transcript_filename(student_name: str, on: Optional[date] = None) -> str:
    safe_name = re.sub(r"\s+", "_", student_name.strip())
    safe_name = re.sub(r"[^\w\-]", "", safe_name) or "student"
    return f"{safe_name}_transcript_{(on or date.today()).isoformat()}.pdf"


# --- Rendering ---

def build_workbook(students: List[Student], records: List[AcademicRecord]) -> bytes:
    try:
        return spreadsheet.render_workbook(students, records)
    except Exception as e:
        logger.exception("Failed to build the student workbook")
        raise ExportError(f"Failed to build spreadsheet: {e}") from e


def build_roster_pdf(
    students: List[Student], records: List[AcademicRecord], generated_on: Optional[date] = None
) -> bytes:
    try:
        return roster_pdf.render_roster(students, records, generated_on or date.today())
    except Exception as e:
        logger.exception("Failed to build the roster report")
        raise ExportError(f"Failed to build roster PDF: {e}") from e


def build_transcript_pdf(student: StudentWithRecords, generated_on: Optional[date] = None) -> bytes:
    try:
        return transcript_pdf.render_transcript(student, generated_on or date.today())
    except Exception as e:
        logger.exception("Failed to build the transcript for student %s", student.id)
        raise ExportError(f"Failed to build transcript PDF: {e}") from e


# --- Writing ---

def write_bytes_atomically(path: Union[str, Path], content: bytes) -> Path:
    """Writes to a temporary file next to `path`, then renames it into place."""
    path = Path(path)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile("wb", dir=path.parent, prefix=f".{path.name}.", delete=False) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise ExportError(f"Failed to write {path}: {e}") from e
    logger.info("Wrote export %s (%d bytes)", path, len(content))
    return path


def write_workbook(path: Union[str, Path], students: List[Student], records: List[AcademicRecord]) -> Path:
    return write_bytes_atomically(path, build_workbook(students, records))


def write_roster_pdf(path: Union[str, Path], students: List[Student], records: List[AcademicRecord],
                     generated_on: Optional[date] = None) -> Path:
    return write_bytes_atomically(path, build_roster_pdf(students, records, generated_on))


def write_transcript_pdf(path: Union[str, Path], student: StudentWithRecords,
                         generated_on: Optional[date] = None) -> Path:
    return write_bytes_atomically(path, build_transcript_pdf(student, generated_on))
