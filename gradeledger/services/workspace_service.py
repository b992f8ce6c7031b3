# /gradeledger/services/workspace_service.py

"""
The in-memory view of one owner's students and academic records.

A StudentWorkspace is what the routers read from (search, detail pages,
exports, dashboard) and write through. Every write goes to the remote store
first; the in-memory lists are replaced only after the write has committed.
A failed write therefore leaves the view exactly as it was.

Each collection has its own lock, so writes to the same collection are
applied one at a time and the last completed write wins. Operations that
touch both collections take the students lock before the records lock.
"""

import logging
import threading
from typing import Dict, List, Optional

from ..core.errors import RecordValidationError
from ..models.student_model import Student, StudentCreate, StudentWithRecords
from ..models.academic_record_model import (
    AcademicRecord, AcademicRecordCreate, Course, RecordUpsertResult,
    UpsertOutcome, new_record_id,
)
from ..models.user_model import SessionContext
from .database_service import DatabaseService
from .database_helpers import row_mappers
from . import query_service

logger = logging.getLogger(__name__)


class StudentWorkspace:
    def __init__(self, session: SessionContext):
        self.session = session
        self._students: List[Student] = []
        self._records: List[AcademicRecord] = []
        self._students_lock = threading.RLock()
        self._records_lock = threading.RLock()
        self.is_loaded = False

    @property
    def owner_id(self) -> str:
        return self.session.owner_id

    # --- Read Access ---

    @property
    def students(self) -> List[Student]:
        return list(self._students)

    @property
    def academic_records(self) -> List[AcademicRecord]:
        return list(self._records)

    def get_student(self, student_id: str) -> Optional[Student]:
        return next((s for s in self._students if s.id == student_id), None)

    def get_record(self, record_id: str) -> Optional[AcademicRecord]:
        return next((r for r in self._records if r.id == record_id), None)

    def get_student_records(self, student_id: str) -> List[AcademicRecord]:
        return [r for r in self._records if r.studentId == student_id]

    def get_student_with_records(self, student_id: str) -> Optional[StudentWithRecords]:
        student = self.get_student(student_id)
        if student is None:
            return None
        return StudentWithRecords(**student.model_dump(), academicRecords=self.get_student_records(student_id))

    def filter_records_by_semester(self, student_id: str, year: str, semester: str) -> List[AcademicRecord]:
        return [
            r for r in self._records
            if r.studentId == student_id and r.year == year and r.semester == semester
        ]

    def search_students(self, query: str) -> List[Student]:
        return query_service.search_students(self._students, query)

    # --- Loading ---

    def load(self, db: DatabaseService) -> None:
        """
        Replaces the view with the owner's current rows from the remote store.
        Rows that fail validation are skipped and logged.
        """
        student_rows = db.get_students(user_id=self.owner_id)
        record_rows = db.get_records_with_courses(user_id=self.owner_id)

        students = []
        for row in student_rows:
            try:
                students.append(row_mappers.student_from_row(row))
            except RecordValidationError as e:
                logger.warning("Skipping corrupted student row: %s", e)

        records = []
        for row in record_rows:
            try:
                records.append(row_mappers.record_from_row(row))
            except RecordValidationError as e:
                logger.warning("Skipping corrupted academic record row: %s", e)

        with self._students_lock, self._records_lock:
            self._students = students
            self._records = records
            self.is_loaded = True
        logger.info("Loaded %d students and %d records for owner %s", len(students), len(records), self.owner_id)

    def ensure_loaded(self, db: DatabaseService) -> "StudentWorkspace":
        if not self.is_loaded:
            self.load(db)
        return self

    def adopt(self, db: DatabaseService, students: List[Student], records: List[AcademicRecord]) -> None:
        """
        Makes a whole dataset (e.g. a newer stored snapshot) the owner's data.
        The remote store is rewritten in one transaction and the view is then
        reloaded from it; if the rewrite fails, RemoteStoreError propagates
        and both stay as they were.
        """
        course_rows = [
            row
            for record in records
            for row in row_mappers.courses_to_rows(record.courses, record.id, self.owner_id)
        ]
        with self._students_lock, self._records_lock:
            db.replace_owner_data(
                self.owner_id,
                [row_mappers.student_to_row(s, self.owner_id) for s in students],
                [row_mappers.record_to_row(r, self.owner_id) for r in records],
                course_rows,
            )
            self.load(db)
        logger.info("Adopted %d students and %d records for owner %s", len(students), len(records), self.owner_id)

    def clear(self) -> None:
        with self._students_lock, self._records_lock:
            self._students = []
            self._records = []
            self.is_loaded = False

    # --- Writes ---

    def add_student(self, db: DatabaseService, student_data: StudentCreate) -> Student:
        with self._students_lock:
            if self.get_student(student_data.id) is not None:
                raise RecordValidationError(f"Student ID {student_data.id} already exists", duplicate=True)

            student = Student(**student_data.model_dump())
            row = db.add_student(row_mappers.student_to_row(student, self.owner_id))
            stored = row_mappers.student_from_row(row)

            self._students = self._students + [stored]
        logger.info("Added student %s for owner %s", stored.id, self.owner_id)
        return stored

    def add_academic_record(self, db: DatabaseService, record_data: AcademicRecordCreate) -> RecordUpsertResult:
        """
        Creates the record for (student, year, semester, status), or merges into
        the existing one by inserting only the courses whose code it does not
        have yet. Re-sending the same record is therefore harmless. A course
        whose code already exists is dropped even if its name, grade or
        credits differ.
        """
        if self.get_student(record_data.studentId) is None:
            raise RecordValidationError(f"Student {record_data.studentId} not found")

        incoming = [Course(**c.model_dump()) for c in record_data.courses]

        with self._records_lock:
            existing_row = db.get_record_by_key(
                self.owner_id, record_data.studentId, record_data.year,
                record_data.semester, record_data.status,
            )

            if existing_row is None:
                record = AcademicRecord(
                    id=new_record_id(),
                    studentId=record_data.studentId,
                    year=record_data.year,
                    semester=record_data.semester,
                    status=record_data.status,
                    courses=incoming,
                )
                stored_row = db.add_record_with_courses(
                    row_mappers.record_to_row(record, self.owner_id),
                    row_mappers.courses_to_rows(incoming, record.id, self.owner_id),
                )
                stored = row_mappers.record_from_row(stored_row)
                self._put_record(stored)
                logger.info("Created academic record %s with %d courses", stored.id, len(stored.courses))
                return RecordUpsertResult(
                    outcome=UpsertOutcome.CREATED, record=stored, addedCourses=stored.courses,
                    message="Academic record added successfully",
                )

            existing = row_mappers.record_from_row(existing_row)
            existing_codes = {c.courseCode for c in existing.courses}
            courses_to_add = [c for c in incoming if c.courseCode not in existing_codes]

            if not courses_to_add:
                # Still refresh the view in case it was behind the store.
                self._put_record(existing)
                logger.info("No new courses for academic record %s", existing.id)
                return RecordUpsertResult(
                    outcome=UpsertOutcome.UNCHANGED, record=existing, addedCourses=[],
                    message="All courses already exist in this record",
                )

            stored_row = db.add_courses(
                existing.id, self.owner_id,
                row_mappers.courses_to_rows(courses_to_add, existing.id, self.owner_id, len(existing.courses)),
            )
            stored = row_mappers.record_from_row(stored_row)
            self._put_record(stored)
            logger.info("Added %d courses to academic record %s", len(courses_to_add), stored.id)
            return RecordUpsertResult(
                outcome=UpsertOutcome.MERGED, record=stored, addedCourses=courses_to_add,
                message="Courses added to existing record",
            )

    def _put_record(self, record: AcademicRecord) -> None:
        # Caller holds the records lock.
        if any(r.id == record.id for r in self._records):
            self._records = [record if r.id == record.id else r for r in self._records]
        else:
            self._records = self._records + [record]

    def delete_student(self, db: DatabaseService, student_id: str) -> bool:
        """
        Deletes a student and, once the store has confirmed, drops the student
        and every record that belongs to it from the view.
        """
        with self._students_lock, self._records_lock:
            was_deleted = db.delete_student(student_id=student_id, user_id=self.owner_id)
            if not was_deleted:
                return False
            self._students = [s for s in self._students if s.id != student_id]
            self._records = [r for r in self._records if r.studentId != student_id]
        logger.info("Deleted student %s and their academic records", student_id)
        return True


class WorkspaceRegistry:
    """Maps owner ids to their workspace. Lives on the FastAPI app state."""

    def __init__(self):
        self._workspaces: Dict[str, StudentWorkspace] = {}
        self._lock = threading.Lock()

    def get(self, session: SessionContext) -> StudentWorkspace:
        with self._lock:
            workspace = self._workspaces.get(session.owner_id)
            if workspace is None:
                workspace = StudentWorkspace(session)
                self._workspaces[session.owner_id] = workspace
            return workspace

    def discard(self, session: SessionContext) -> None:
        with self._lock:
            workspace = self._workspaces.pop(session.owner_id, None)
        if workspace is not None:
            workspace.clear()
