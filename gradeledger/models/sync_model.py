# /gradeledger/models/sync_model.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from .student_model import Student
from .academic_record_model import AcademicRecord


class SyncSource(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


class Snapshot(BaseModel):
    """
    One whole copy of an owner's dataset as written to the local persistence
    layers. Field names match the stored JSON payload.
    """
    students: List[Student] = Field(default_factory=list)
    academicRecords: List[AcademicRecord] = Field(default_factory=list)
    lastModified: datetime
    userId: str


class SyncResult(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    students: List[Student]
    academicRecords: List[AcademicRecord]
    source: SyncSource
    pushed: bool = Field(..., description="True when the local data was written to the snapshot store.")


class SyncStatus(BaseModel):
    lastSyncTime: Optional[datetime] = None
    installationId: Optional[str] = Field(None, description="None when the local key-value layer is not writable.")
