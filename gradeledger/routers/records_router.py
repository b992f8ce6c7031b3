# /gradeledger/routers/records_router.py

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..core.deps import get_workspace
from ..core.errors import RecordValidationError
from ..models import academic_record_model
from ..services import gpa_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.workspace_service import StudentWorkspace

router = APIRouter()


@router.post(
    "",
    response_model=academic_record_model.RecordUpsertResult,
    status_code=status.HTTP_201_CREATED,
    summary="Add or Merge an Academic Record",
    description=(
        "Creates the record for (student, year, semester, status), or adds the courses "
        "whose code the existing record does not have yet. Responds 201 when a record "
        "was created and 200 otherwise."
    ),
)
def upsert_academic_record(
    record_create: academic_record_model.AcademicRecordCreate,
    response: Response,
    workspace: StudentWorkspace = Depends(get_workspace),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        result = workspace.add_academic_record(db, record_create)
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if result.outcome != academic_record_model.UpsertOutcome.CREATED.value:
        response.status_code = status.HTTP_200_OK
    return result


@router.get("/{record_id}/gpa", response_model=academic_record_model.RecordGPA, summary="Get the GPA of an Academic Record")
def get_record_gpa(record_id: str, workspace: StudentWorkspace = Depends(get_workspace)):
    record = workspace.get_record(record_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Academic record {record_id} not found")
    return gpa_service.describe_record_gpa(record)
