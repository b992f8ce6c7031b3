# /gradeledger/services/dashboard_service.py

from collections import Counter

from ..models.dashboard_model import DashboardSummary
from .workspace_service import StudentWorkspace
from . import gpa_service


def get_summary(workspace: StudentWorkspace) -> DashboardSummary:
    """
    Summary cards for the home page. The average GPA only counts records whose
    GPA is defined; records without credits are left out instead of counting
    as 0.0.
    """
    students = workspace.students
    records = workspace.academic_records

    defined_gpas = [
        gpa for gpa in (gpa_service.compute_gpa(r) for r in records)
        if gpa is not gpa_service.UNDEFINED_GPA
    ]
    average = gpa_service.round_gpa(sum(defined_gpas) / len(defined_gpas)) if defined_gpas else 0.0

    return DashboardSummary(
        totalStudents=len(students),
        totalRecords=len(records),
        averageGpa=average,
        departmentCounts=dict(Counter(s.department for s in students)),
    )
