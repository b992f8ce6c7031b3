# /gradeledger/db/models/student_record_models.py

"""
This module defines the SQLAlchemy ORM models for the remote store: `Student`,
`AcademicRecord` and `Course`.

Ownership is explicit on every table through `user_id`. A student's id is
chosen by the caller and only has to be unique within one owner, so the
students table uses a composite primary key and academic records point at it
with a composite foreign key. Deleting a student cascades to its records, and
deleting a record cascades to its courses, both in the ORM and in the schema.
"""

from sqlalchemy import (
    Column, String, Integer, DateTime, ForeignKey,
    ForeignKeyConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)

    full_name = Column(String, index=True, nullable=False)
    sex = Column(String, nullable=False)
    contact = Column(String, nullable=False, default="")
    department = Column(String, nullable=False)
    # Insertion order within the owner; timestamps are too coarse to order by.
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    academic_records = relationship(
        "AcademicRecord",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class AcademicRecord(Base):
    __tablename__ = "academic_records"
    __table_args__ = (
        ForeignKeyConstraint(
            ["student_id", "user_id"],
            ["students.id", "students.user_id"],
            ondelete="CASCADE",
        ),
        # One record per term and standing; a second "add" becomes a course merge.
        UniqueConstraint("user_id", "student_id", "year", "semester", "status", name="uq_record_term"),
    )

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    student_id = Column(String, nullable=False, index=True)

    year = Column(String, nullable=False)
    semester = Column(String, nullable=False)
    status = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    student = relationship("Student", back_populates="academic_records")
    courses = relationship(
        "Course",
        back_populates="academic_record",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Course.position",
    )


class Course(Base):
    __tablename__ = "courses"
    __table_args__ = (
        UniqueConstraint("academic_record_id", "course_code", name="uq_course_code_per_record"),
    )

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    academic_record_id = Column(
        String, ForeignKey("academic_records.id", ondelete="CASCADE"), nullable=False, index=True
    )

    course_name = Column(String, nullable=False)
    course_code = Column(String, nullable=False)
    grade = Column(String, nullable=False)
    credits = Column(Integer, nullable=False)
    # Insertion order inside the record, so courses read back the way they were entered.
    position = Column(Integer, nullable=False, default=0)

    academic_record = relationship("AcademicRecord", back_populates="courses")
