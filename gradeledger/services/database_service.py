# /gradeledger/services/database_service.py

"""
Facade over the SQL repositories. Services receive a DatabaseService and
never touch a SQLAlchemy session directly.
"""

from typing import List, Dict, Optional, Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .database_helpers.student_record_repository_sql import StudentRecordRepositorySQL
from .database_helpers.user_repository_sql import UserRepositorySQL
from ..db.models.student_record_models import Student, AcademicRecord
from ..db.models.user_models import User


class DatabaseService:
    def __init__(self, db_session: Session):
        self.session = db_session
        self.student_record_repo = StudentRecordRepositorySQL(db_session)
        self.user_repo = UserRepositorySQL(db_session)

    # --- USER METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str) -> Optional[User]: return self.user_repo.get_user_by_id(user_id)
    def get_user_by_email(self, email: str) -> Optional[User]: return self.user_repo.get_user_by_email(email)
    def add_user(self, user_record: Dict) -> User: return self.user_repo.add_user(user_record)

    # --- STUDENT METHODS (DELEGATED) ---
    def get_students(self, user_id: str) -> List[Student]: return self.student_record_repo.get_students(user_id)
    def get_student(self, student_id: str, user_id: str) -> Optional[Student]: return self.student_record_repo.get_student(student_id, user_id)
    def add_student(self, student_record: Dict) -> Student: return self.student_record_repo.add_student(student_record)
    def delete_student(self, student_id: str, user_id: str) -> bool: return self.student_record_repo.delete_student(student_id, user_id)

    # --- ACADEMIC RECORD & COURSE METHODS (DELEGATED) ---
    def get_records_with_courses(self, user_id: str) -> List[AcademicRecord]: return self.student_record_repo.get_records_with_courses(user_id)
    def get_record_by_id(self, record_id: str, user_id: str) -> Optional[AcademicRecord]: return self.student_record_repo.get_record_by_id(record_id, user_id)
    def get_record_by_key(self, user_id: str, student_id: str, year: str, semester: str, status: str) -> Optional[AcademicRecord]:
        return self.student_record_repo.get_record_by_key(user_id, student_id, year, semester, status)
    def add_record_with_courses(self, record: Dict, courses: List[Dict]) -> AcademicRecord: return self.student_record_repo.add_record_with_courses(record, courses)
    def add_courses(self, record_id: str, user_id: str, courses: List[Dict]) -> AcademicRecord: return self.student_record_repo.add_courses(record_id, user_id, courses)
    def replace_owner_data(self, user_id: str, students: List[Dict], records: List[Dict], courses: List[Dict]) -> None:
        return self.student_record_repo.replace_owner_data(user_id, students, records, courses)


def get_db_session(request: Request) -> Generator[Session, None, None]:
    """Yields a session from the app's session factory and always closes it."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_db_service(db: Session = Depends(get_db_session)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to this request's session."""
    yield DatabaseService(db_session=db)
