# /gradeledger/services/query_service.py

"""
Search, filter and sort over the in-memory student list.

The whole list is evaluated on every call; there is no paging or caching, so
callers simply re-run `filter_and_sort` whenever the query, the filters or the
student list change.
"""

import unicodedata
from typing import Callable, Dict, Iterable, List, Optional

from ..models.student_model import Student
from ..models.query_model import StudentFilters, SortField, SortOrder


def collation_key(value: str) -> tuple:
    """
    Locale-style ordering key: accents and case are ignored first, and the raw
    string only breaks ties between otherwise equal spellings.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), value)


SORT_KEYS: Dict[str, Callable[[Student], str]] = {
    SortField.NAME.value: lambda s: s.fullName,
    SortField.ID.value: lambda s: s.id,
    SortField.DEPARTMENT.value: lambda s: s.department,
}


def matches_query(student: Student, query: str) -> bool:
    """Case-insensitive substring match on name, id or contact. Blank matches all."""
    needle = query.strip().lower()
    if not needle:
        return True
    return (
        needle in student.fullName.lower()
        or needle in student.id.lower()
        or needle in student.contact.lower()
    )


def matches_filters(student: Student, filters: StudentFilters) -> bool:
    if filters.department and student.department != filters.department:
        return False
    if filters.sex and student.sex != filters.sex:
        return False
    return True


def filter_and_sort(
    students: Iterable[Student],
    query: str = "",
    filters: Optional[StudentFilters] = None,
) -> List[Student]:
    """
    Returns the students that match `query` and every set filter, ordered by
    `filters.sortBy`. The sort is stable in both directions: students that
    compare equal keep their input order.
    """
    filters = filters or StudentFilters()

    results = [s for s in students if matches_query(s, query) and matches_filters(s, filters)]

    key_of = SORT_KEYS[filters.sortBy]
    # list.sort with reverse=True keeps equal elements in their original order.
    results.sort(
        key=lambda s: collation_key(key_of(s)),
        reverse=filters.sortOrder == SortOrder.DESC.value,
    )
    return results


def search_students(students: Iterable[Student], query: str) -> List[Student]:
    """
    Quick search on name or id only, in input order. A blank query returns
    every student.
    """
    needle = query.strip().lower()
    if not needle:
        return list(students)
    return [s for s in students if needle in s.fullName.lower() or needle in s.id.lower()]
