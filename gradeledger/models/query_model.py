# /gradeledger/models/query_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .student_model import Department, Sex


class SortField(str, Enum):
    NAME = "name"
    ID = "id"
    DEPARTMENT = "department"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class StudentFilters(BaseModel):
    """Optional exact-match filters plus the sort settings for the student list."""
    model_config = ConfigDict(use_enum_values=True)

    department: Optional[Department] = None
    sex: Optional[Sex] = None
    sortBy: SortField = SortField.NAME
    sortOrder: SortOrder = SortOrder.ASC
