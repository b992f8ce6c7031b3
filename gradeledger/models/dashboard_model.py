# /gradeledger/models/dashboard_model.py

from typing import Dict

from pydantic import BaseModel, Field


class DashboardSummary(BaseModel):
    """
    Data contract for the dashboard summary cards.
    """

    totalStudents: int = Field(..., description="Number of student profiles.", examples=[3])
    totalRecords: int = Field(..., description="Number of academic records across all students.", examples=[5])
    averageGpa: float = Field(
        ...,
        description="Mean GPA over records whose GPA is defined. 0.0 when there are none.",
        examples=[3.42],
    )
    departmentCounts: Dict[str, int] = Field(default_factory=dict, description="Students per department.")
