# /gradeledger/services/database_helpers/student_record_repository_sql.py

"""
This module contains the raw SQLAlchemy queries for the Student,
AcademicRecord and Course tables. It is the direct interface to the remote
store and the final point of enforcement for owner isolation: every method
that reads or modifies data requires a `user_id`.

Writes that touch several rows (a record plus its courses) happen inside one
transaction. On any database error the session is rolled back and a
RemoteStoreError is raised, so callers never see a half-written record.
"""

import logging
from typing import List, Dict, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ...core.errors import RemoteStoreError, RecordValidationError
from ...db.models.student_record_models import Student, AcademicRecord, Course

logger = logging.getLogger(__name__)


class StudentRecordRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.error("Integrity error while trying to %s: %s", action, e.orig)
            raise RemoteStoreError(f"Failed to {action}: conflicting data") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Database error while trying to %s", action)
            raise RemoteStoreError(f"Failed to {action}") from e

    def _query(self, action: str, fn):
        try:
            return fn()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Database error while trying to %s", action)
            raise RemoteStoreError(f"Failed to {action}") from e

    def _next_position(self, model, user_id: str) -> int:
        highest = self._query("read insertion order", lambda: (
            self.db.query(func.max(model.position)).filter(model.user_id == user_id).scalar()
        ))
        return 0 if highest is None else highest + 1

    # --- Student Methods ---

    def get_students(self, user_id: str) -> List[Student]:
        """All students owned by `user_id`, in insertion order."""
        return self._query("load students", lambda: (
            self.db.query(Student)
            .filter(Student.user_id == user_id)
            .order_by(Student.position, Student.created_at, Student.id)
            .all()
        ))

    def get_student(self, student_id: str, user_id: str) -> Optional[Student]:
        return self._query("load student", lambda: (
            self.db.query(Student)
            .filter(Student.id == student_id, Student.user_id == user_id)
            .first()
        ))

    def add_student(self, record: Dict) -> Student:
        """
        Inserts one student row. The record must carry `user_id`. A clash on
        the (id, user_id) key is reported as a duplicate, not a store failure.
        """
        if self.get_student(record["id"], record["user_id"]) is not None:
            raise RecordValidationError(f"Student ID {record['id']} already exists", duplicate=True)

        record = {**record, "position": self._next_position(Student, record["user_id"])}
        new_student = Student(**record)
        self.db.add(new_student)
        self._commit("add student")
        self.db.refresh(new_student)
        return new_student

    def delete_student(self, student_id: str, user_id: str) -> bool:
        """
        Deletes a student owned by `user_id`. Its academic records and their
        courses go with it (ORM cascade plus ON DELETE CASCADE).
        """
        db_student = self.get_student(student_id, user_id)
        if not db_student:
            return False
        self.db.delete(db_student)
        self._commit("delete student")
        return True

    # --- Academic Record Methods ---

    def get_records_with_courses(self, user_id: str) -> List[AcademicRecord]:
        """All records owned by `user_id` with their courses eagerly loaded."""
        return self._query("load academic records", lambda: (
            self.db.query(AcademicRecord)
            .options(selectinload(AcademicRecord.courses))
            .filter(AcademicRecord.user_id == user_id)
            .order_by(AcademicRecord.position, AcademicRecord.created_at, AcademicRecord.id)
            .all()
        ))

    def get_record_by_id(self, record_id: str, user_id: str) -> Optional[AcademicRecord]:
        return self._query("load academic record", lambda: (
            self.db.query(AcademicRecord)
            .options(selectinload(AcademicRecord.courses))
            .filter(AcademicRecord.id == record_id, AcademicRecord.user_id == user_id)
            .first()
        ))

    def get_record_by_key(
        self, user_id: str, student_id: str, year: str, semester: str, status: str
    ) -> Optional[AcademicRecord]:
        """Looks a record up by its natural key (student, year, semester, status)."""
        return self._query("look up academic record", lambda: (
            self.db.query(AcademicRecord)
            .options(selectinload(AcademicRecord.courses))
            .filter(
                AcademicRecord.user_id == user_id,
                AcademicRecord.student_id == student_id,
                AcademicRecord.year == year,
                AcademicRecord.semester == semester,
                AcademicRecord.status == status,
            )
            .first()
        ))

    def add_record_with_courses(self, record: Dict, courses: List[Dict]) -> AcademicRecord:
        """Creates a record row and all of its course rows in one transaction."""
        record = {**record, "position": self._next_position(AcademicRecord, record["user_id"])}
        new_record = AcademicRecord(**record)
        self.db.add(new_record)
        for course in courses:
            self.db.add(Course(**course))
        self._commit("add academic record")
        return self.get_record_by_id(new_record.id, record["user_id"])

    def add_courses(self, record_id: str, user_id: str, courses: List[Dict]) -> AcademicRecord:
        """Appends course rows to an existing record in one transaction."""
        for course in courses:
            self.db.add(Course(**course))
        self._commit("add courses")
        db_record = self.get_record_by_id(record_id, user_id)
        # Sessions built with expire_on_commit=False would keep the old collection.
        self.db.refresh(db_record, attribute_names=["courses"])
        return db_record

    # --- Whole-Dataset Methods ---

    def replace_owner_data(
        self, user_id: str, students: List[Dict], records: List[Dict], courses: List[Dict]
    ) -> None:
        """
        Replaces every student, record and course owned by `user_id` with the
        given rows, in one transaction. Rows keep the order they are given in.
        If anything fails, the owner's previous rows are left untouched.
        """
        try:
            for model in (Course, AcademicRecord, Student):
                for row in self.db.query(model).filter(model.user_id == user_id).all():
                    self.db.delete(row)
            self.db.flush()

            self.db.add_all(Student(**{**s, "position": i}) for i, s in enumerate(students))
            self.db.add_all(AcademicRecord(**{**r, "position": i}) for i, r in enumerate(records))
            self.db.add_all(Course(**c) for c in courses)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Database error while trying to replace data for owner %s", user_id)
            raise RemoteStoreError("Failed to replace owner data") from e
        self._commit("replace owner data")
