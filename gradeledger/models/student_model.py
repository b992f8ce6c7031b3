# /gradeledger/models/student_model.py

# --- Core Imports ---
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, ConfigDict, field_validator

from .academic_record_model import AcademicRecord, AcademicRecordWithGPA


# --- Core Enumerations ---
class Sex(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class Department(str, Enum):
    EDUCATION = "Education"
    SOCIOLOGY = "Sociology"
    CRIMINAL_JUSTICE = "Criminal Justice"


# --- Model Definitions ---

class StudentBase(BaseModel):
    """
    Fields shared by every representation of a student profile. The `id` is
    chosen by the caller (e.g. "STU001") and must be unique for its owner.
    """
    model_config = ConfigDict(use_enum_values=True, from_attributes=True)

    id: str = Field(..., min_length=1, description="Caller-assigned student identifier.")
    fullName: str = Field(..., min_length=1, description="The full name of the student.")
    sex: Sex
    contact: str = Field(default="", description="Phone number, e-mail or any free text.")
    department: Department

    @field_validator("id", "fullName")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("contact")
    @classmethod
    def strip_contact(cls, v: str) -> str:
        return v.strip()


class StudentCreate(StudentBase):
    """The payload used to add a new student profile."""
    pass


class Student(StudentBase):
    """A student profile as held in the workspace and returned by the API."""
    pass


class StudentWithRecords(Student):
    """
    Read-only join of a student with all of its academic records. Built on
    demand and never persisted.
    """
    academicRecords: List[AcademicRecord] = Field(default_factory=list)


class StudentDetail(Student):
    """Response shape of the student detail endpoint: each record carries its GPA."""
    academicRecords: List[AcademicRecordWithGPA] = Field(default_factory=list)
