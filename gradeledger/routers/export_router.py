# /gradeledger/routers/export_router.py

import io

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from ..core.deps import get_workspace
from ..services import export_service
from ..services.workspace_service import StudentWorkspace

router = APIRouter()


def _attachment(content: bytes, media_type: str, file_name: str) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )


@router.get("/students.xlsx", summary="Export All Students and Records as a Spreadsheet")
def export_workbook(workspace: StudentWorkspace = Depends(get_workspace)):
    content = export_service.build_workbook(workspace.students, workspace.academic_records)
    return _attachment(content, export_service.XLSX_MEDIA_TYPE, export_service.workbook_filename())


@router.get("/roster.pdf", summary="Export the Student Database Report")
def export_roster(workspace: StudentWorkspace = Depends(get_workspace)):
    content = export_service.build_roster_pdf(workspace.students, workspace.academic_records)
    return _attachment(content, export_service.PDF_MEDIA_TYPE, export_service.roster_filename())


@router.get("/students/{student_id}/transcript.pdf", summary="Export a Student Transcript")
def export_transcript(student_id: str, workspace: StudentWorkspace = Depends(get_workspace)):
    student = workspace.get_student_with_records(student_id)
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    content = export_service.build_transcript_pdf(student)
    return _attachment(content, export_service.PDF_MEDIA_TYPE, export_service.transcript_filename(student.fullName))
