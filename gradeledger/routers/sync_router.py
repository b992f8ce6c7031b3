# /gradeledger/routers/sync_router.py

import logging

from fastapi import APIRouter, Depends, Request

from ..core.deps import get_workspace
from ..core.errors import RemoteStoreError
from ..models.sync_model import SyncResult, SyncSource, SyncStatus
from ..services import sync_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.workspace_service import StudentWorkspace

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=SyncResult, summary="Reconcile the Workspace with the Local Snapshot Store")
def sync_workspace(
    request: Request,
    workspace: StudentWorkspace = Depends(get_workspace),
    db: DatabaseService = Depends(get_db_service),
):
    """
    Never fails on storage problems: if the snapshot store cannot be read or
    written, the workspace is returned unchanged. When the stored snapshot
    wins, it is written to the remote store before the workspace shows it;
    if that write fails, the local data is kept.
    """
    store = sync_service.store_for_owner(request.app.state.cache_dir, workspace.owner_id)
    try:
        result = store.sync(workspace.students, workspace.academic_records)
    finally:
        store.close()

    if result.source == SyncSource.REMOTE.value:
        try:
            workspace.adopt(db, result.students, result.academicRecords)
        except RemoteStoreError as e:
            logger.warning("Could not adopt stored snapshot for owner %s; keeping local data: %s", workspace.owner_id, e)
            return SyncResult(
                students=workspace.students,
                academicRecords=workspace.academic_records,
                source=SyncSource.LOCAL,
                pushed=False,
            )
        return result.model_copy(update={
            "students": workspace.students,
            "academicRecords": workspace.academic_records,
        })
    return result


@router.get("/status", response_model=SyncStatus, summary="Get the Last Sync Time")
def get_sync_status(request: Request, workspace: StudentWorkspace = Depends(get_workspace)):
    store = sync_service.store_for_owner(request.app.state.cache_dir, workspace.owner_id)
    try:
        return store.status()
    finally:
        store.close()
