# /gradeledger/routers/dashboard_router.py

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import get_workspace
from ..models.dashboard_model import DashboardSummary
from ..services import dashboard_service, sample_data_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.workspace_service import StudentWorkspace

router = APIRouter()


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Student and record counts, average GPA and students per department.",
)
def get_dashboard_summary(workspace: StudentWorkspace = Depends(get_workspace)):
    return dashboard_service.get_summary(workspace)


@router.post(
    "/sample-data",
    response_model=DashboardSummary,
    status_code=status.HTTP_201_CREATED,
    summary="Load Demo Data",
    description="Adds three demo students with academic records. Does nothing (200) if the account already has data.",
)
def load_sample_data(
    response: Response,
    workspace: StudentWorkspace = Depends(get_workspace),
    db: DatabaseService = Depends(get_db_service),
):
    if not sample_data_service.seed_sample_data(workspace, db):
        response.status_code = status.HTTP_200_OK
    return dashboard_service.get_summary(workspace)
