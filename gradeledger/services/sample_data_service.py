# /gradeledger/services/sample_data_service.py

"""
Demo students and academic records for a fresh account. They go through the
workspace like any other write, so ids, positions and validation are the
same as for data entered by hand.
"""

import logging

from ..models.student_model import StudentCreate
from ..models.academic_record_model import AcademicRecordCreate
from .database_service import DatabaseService
from .workspace_service import StudentWorkspace

logger = logging.getLogger(__name__)

SAMPLE_STUDENTS = [
    StudentCreate(id="STU001", fullName="Emma Johnson", sex="Female", contact="+1 (555) 123-4567", department="Education"),
    StudentCreate(id="STU002", fullName="Michael Chen", sex="Male", contact="michael.chen@email.com", department="Sociology"),
    StudentCreate(id="STU003", fullName="Sarah Rodriguez", sex="Female", contact="+1 (555) 987-6543", department="Criminal Justice"),
]

SAMPLE_RECORDS = [
    AcademicRecordCreate(studentId="STU001", year="2024", semester="Semester 1", status="Senior", courses=[
        {"courseName": "Advanced Calculus", "courseCode": "MATH401", "grade": "A", "credits": 3},
        {"courseName": "Computer Science Principles", "courseCode": "CS101", "grade": "A-", "credits": 4},
        {"courseName": "Physics II", "courseCode": "PHYS201", "grade": "B+", "credits": 3},
    ]),
    AcademicRecordCreate(studentId="STU001", year="2023", semester="Semester 2", status="Junior", courses=[
        {"courseName": "Organic Chemistry", "courseCode": "CHEM301", "grade": "B", "credits": 4},
        {"courseName": "Statistics", "courseCode": "MATH301", "grade": "A", "credits": 3},
    ]),
    AcademicRecordCreate(studentId="STU002", year="2024", semester="Semester 1", status="Sophomore", courses=[
        {"courseName": "Introduction to Programming", "courseCode": "CS150", "grade": "A+", "credits": 4},
        {"courseName": "English Literature", "courseCode": "ENG201", "grade": "B+", "credits": 3},
        {"courseName": "World History", "courseCode": "HIST101", "grade": "A-", "credits": 3},
    ]),
    AcademicRecordCreate(studentId="STU003", year="2024", semester="Semester 2", status="Freshman", courses=[
        {"courseName": "College Algebra", "courseCode": "MATH101", "grade": "B", "credits": 3},
        {"courseName": "Biology I", "courseCode": "BIO101", "grade": "A", "credits": 4},
    ]),
]


def seed_sample_data(workspace: StudentWorkspace, db: DatabaseService) -> bool:
    """
    Loads the demo dataset into an empty workspace. Returns False, and writes
    nothing, when the owner already has students or records.
    """
    if workspace.students or workspace.academic_records:
        logger.info("Owner %s already has data; sample data not loaded", workspace.owner_id)
        return False

    for student in SAMPLE_STUDENTS:
        workspace.add_student(db, student)
    for record in SAMPLE_RECORDS:
        workspace.add_academic_record(db, record)
    logger.info("Loaded sample data for owner %s", workspace.owner_id)
    return True
