# /gradeledger/models/academic_record_model.py

from enum import Enum
from typing import List, Optional
import uuid

from pydantic import BaseModel, Field, ConfigDict, field_validator

# --- Core Enumerations ---
class Semester(str, Enum):
    SEMESTER_1 = "Semester 1"; SEMESTER_2 = "Semester 2"

class AcademicStatus(str, Enum):
    FRESHMAN = "Freshman"; SOPHOMORE = "Sophomore"; JUNIOR = "Junior"; SENIOR = "Senior"

class LetterGrade(str, Enum):
    A_PLUS = "A+"; A = "A"; A_MINUS = "A-"
    B_PLUS = "B+"; B = "B"; B_MINUS = "B-"
    C_PLUS = "C+"; C = "C"; C_MINUS = "C-"
    D_PLUS = "D+"; D = "D"; F = "F"
    NG = "NG"  # No grade
    IP = "IP"  # In progress

class UpsertOutcome(str, Enum):
    CREATED = "created"      # New record with all its courses
    MERGED = "merged"        # Existing record, some new course codes added
    UNCHANGED = "unchanged"  # Existing record, every course code already present


def new_record_id() -> str:
    return f"rec_{uuid.uuid4().hex[:12]}"

def new_course_id() -> str:
    return f"crs_{uuid.uuid4().hex[:12]}"


# --- Course Models ---

class CourseBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True, from_attributes=True)

    courseName: str = Field(..., min_length=1)
    courseCode: str = Field(..., min_length=1, description="Unique within the owning academic record.")
    grade: LetterGrade

    @field_validator("courseName", "courseCode")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class CourseCreate(CourseBase):
    # Entry forms offer 1 to 6 credit hours.
    credits: int = Field(..., ge=1, le=6)


class Course(CourseBase):
    id: str = Field(default_factory=new_course_id)
    credits: int = Field(..., ge=0)


# --- Academic Record Models ---

class AcademicRecordKey(BaseModel):
    """The natural key: at most one record exists per key and owner."""
    model_config = ConfigDict(use_enum_values=True, from_attributes=True)

    studentId: str = Field(..., min_length=1)
    year: str = Field(..., pattern=r"^\d{4}$", description="Four-digit academic year, e.g. '2024'.")
    semester: Semester
    status: AcademicStatus


class AcademicRecordCreate(AcademicRecordKey):
    courses: List[CourseCreate] = Field(default_factory=list)

    @field_validator("courses")
    @classmethod
    def course_codes_unique(cls, v: List[CourseCreate]) -> List[CourseCreate]:
        codes = [c.courseCode for c in v]
        if len(codes) != len(set(codes)):
            raise ValueError("course codes must be unique within one record")
        return v


class AcademicRecord(AcademicRecordKey):
    id: str = Field(default_factory=new_record_id)
    courses: List[Course] = Field(default_factory=list)


class RecordUpsertResult(BaseModel):
    """What `add_academic_record` did. UNCHANGED is informational, not an error."""
    model_config = ConfigDict(use_enum_values=True)

    outcome: UpsertOutcome
    record: AcademicRecord
    addedCourses: List[Course] = Field(default_factory=list)
    message: str


class RecordGPA(BaseModel):
    recordId: str
    gpa: Optional[float] = Field(None, description="Null when the record has no credits.")
    defined: bool
    totalCredits: int
    qualityPoints: float


class AcademicRecordWithGPA(AcademicRecord):
    """An academic record as shown on the student detail page."""
    gpa: Optional[float] = None
