# /gradeledger/routers/students_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..core.deps import get_workspace
from ..core.errors import RecordValidationError
from ..models import student_model, academic_record_model
from ..models.query_model import StudentFilters, SortField, SortOrder
from ..services import query_service, gpa_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.workspace_service import StudentWorkspace

router = APIRouter()


def _not_found(student_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")


# --- STUDENT COLLECTION ENDPOINTS (/api/students) ---

@router.get("", response_model=List[student_model.Student], summary="Search, Filter and Sort Students")
def list_students(
    q: str = Query("", description="Matches name, student ID or contact (case-insensitive)."),
    department: Optional[student_model.Department] = None,
    sex: Optional[student_model.Sex] = None,
    sortBy: SortField = SortField.NAME,
    sortOrder: SortOrder = SortOrder.ASC,
    workspace: StudentWorkspace = Depends(get_workspace),
):
    filters = StudentFilters(department=department, sex=sex, sortBy=sortBy, sortOrder=sortOrder)
    return query_service.filter_and_sort(workspace.students, query=q, filters=filters)


@router.post("", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Add a Student")
def create_student(
    student_create: student_model.StudentCreate,
    workspace: StudentWorkspace = Depends(get_workspace),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return workspace.add_student(db, student_create)
    except RecordValidationError as e:
        code = status.HTTP_409_CONFLICT if e.duplicate else status.HTTP_400_BAD_REQUEST
        raise HTTPException(status_code=code, detail=str(e))


# --- INDIVIDUAL STUDENT ENDPOINTS (/api/students/{student_id}) ---

@router.get("/{student_id}", response_model=student_model.StudentDetail, summary="Get a Student with Academic Records")
def get_student(student_id: str, workspace: StudentWorkspace = Depends(get_workspace)):
    student = workspace.get_student_with_records(student_id)
    if student is None:
        raise _not_found(student_id)
    records = [
        academic_record_model.AcademicRecordWithGPA(**r.model_dump(), gpa=gpa_service.compute_gpa(r))
        for r in student.academicRecords
    ]
    return student_model.StudentDetail(
        **student.model_dump(exclude={"academicRecords"}), academicRecords=records
    )


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Student and Their Records")
def delete_student(
    student_id: str,
    workspace: StudentWorkspace = Depends(get_workspace),
    db: DatabaseService = Depends(get_db_service),
):
    if not workspace.delete_student(db, student_id):
        raise _not_found(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{student_id}/records", response_model=List[academic_record_model.AcademicRecord], summary="List a Student's Academic Records")
def get_student_records(
    student_id: str,
    year: Optional[str] = None,
    semester: Optional[academic_record_model.Semester] = None,
    workspace: StudentWorkspace = Depends(get_workspace),
):
    if workspace.get_student(student_id) is None:
        raise _not_found(student_id)
    if year is not None and semester is not None:
        return workspace.filter_records_by_semester(student_id, year, semester.value)
    records = workspace.get_student_records(student_id)
    if year is not None:
        records = [r for r in records if r.year == year]
    if semester is not None:
        records = [r for r in records if r.semester == semester.value]
    return records
