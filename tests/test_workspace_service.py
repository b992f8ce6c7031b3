# /tests/test_workspace_service.py

import pytest

from gradeledger.core.errors import RecordValidationError, RemoteStoreError
from gradeledger.models.academic_record_model import AcademicRecord, Course, UpsertOutcome
from gradeledger.models.student_model import Student, StudentCreate
from gradeledger.services.database_helpers import row_mappers
from gradeledger.services.workspace_service import StudentWorkspace, WorkspaceRegistry


# --- Students ---

def test_add_student_is_visible_and_persisted(db, owner, workspace, sample_students):
    stored = workspace.add_student(db, sample_students[0])

    assert stored.id == "STU001"
    assert [s.id for s in workspace.students] == ["STU001"]

    fresh = StudentWorkspace(owner).ensure_loaded(db)
    assert [s.fullName for s in fresh.students] == ["Emma Johnson"]


def test_duplicate_student_id_is_rejected(db, seeded_workspace):
    duplicate = StudentCreate(id="STU001", fullName="Someone Else", sex="Male", department="Sociology")

    with pytest.raises(RecordValidationError) as exc_info:
        seeded_workspace.add_student(db, duplicate)

    assert exc_info.value.duplicate is True
    assert len(seeded_workspace.students) == 3


def test_student_ids_are_scoped_per_owner(db, seeded_workspace, other_owner, sample_students):
    other = StudentWorkspace(other_owner).ensure_loaded(db)
    assert other.students == []

    other.add_student(db, sample_students[0])
    assert [s.id for s in other.students] == ["STU001"]
    assert len(seeded_workspace.students) == 3


# --- Academic Record Upsert ---

def test_first_add_creates_the_record(db, seeded_workspace, record_factory):
    result = seeded_workspace.add_academic_record(db, record_factory())

    assert result.outcome == UpsertOutcome.CREATED.value
    assert result.message == "Academic record added successfully"
    assert [c.courseCode for c in result.record.courses] == ["EDU101", "ENG101", "MTH101"]
    assert result.record.id.startswith("rec_")
    assert len(seeded_workspace.academic_records) == 1


def test_repeating_an_add_is_idempotent(db, seeded_workspace, record_factory):
    first = seeded_workspace.add_academic_record(db, record_factory())
    second = seeded_workspace.add_academic_record(db, record_factory())

    assert second.outcome == UpsertOutcome.UNCHANGED.value
    assert second.message == "All courses already exist in this record"
    assert second.addedCourses == []
    assert second.record.id == first.record.id
    assert len(seeded_workspace.academic_records) == 1
    assert len(seeded_workspace.get_record(first.record.id).courses) == 3


def test_merge_adds_only_new_course_codes(db, seeded_workspace, record_factory):
    seeded_workspace.add_academic_record(db, record_factory())
    result = seeded_workspace.add_academic_record(db, record_factory(courses=[
        # Same code with a different grade is dropped, not updated.
        {"courseName": "Introduction to Education", "courseCode": "EDU101", "grade": "F", "credits": 3},
        {"courseName": "Child Psychology", "courseCode": "PSY110", "grade": "B", "credits": 3},
    ]))

    assert result.outcome == UpsertOutcome.MERGED.value
    assert result.message == "Courses added to existing record"
    assert [c.courseCode for c in result.addedCourses] == ["PSY110"]

    courses = seeded_workspace.get_record(result.record.id).courses
    assert [c.courseCode for c in courses] == ["EDU101", "ENG101", "MTH101", "PSY110"]
    assert courses[0].grade == "A"


def test_different_term_creates_a_separate_record(db, seeded_workspace, record_factory):
    seeded_workspace.add_academic_record(db, record_factory())
    result = seeded_workspace.add_academic_record(db, record_factory(semester="Semester 2"))

    assert result.outcome == UpsertOutcome.CREATED.value
    assert len(seeded_workspace.get_student_records("STU001")) == 2


def test_record_for_unknown_student_is_rejected(db, seeded_workspace, record_factory):
    with pytest.raises(RecordValidationError):
        seeded_workspace.add_academic_record(db, record_factory(student_id="STU999"))
    assert seeded_workspace.academic_records == []


def test_failed_remote_write_leaves_the_view_unchanged(db, seeded_workspace, mocker, record_factory):
    mocker.patch.object(db, "add_record_with_courses", side_effect=RemoteStoreError("remote store unavailable"))

    with pytest.raises(RemoteStoreError):
        seeded_workspace.add_academic_record(db, record_factory())

    assert seeded_workspace.academic_records == []


def test_failed_merge_leaves_existing_courses_alone(db, seeded_workspace, mocker, record_factory):
    created = seeded_workspace.add_academic_record(db, record_factory())
    mocker.patch.object(db, "add_courses", side_effect=RemoteStoreError("remote store unavailable"))

    with pytest.raises(RemoteStoreError):
        seeded_workspace.add_academic_record(db, record_factory(courses=[
            {"courseName": "Child Psychology", "courseCode": "PSY110", "grade": "B", "credits": 3},
        ]))

    assert len(seeded_workspace.get_record(created.record.id).courses) == 3


def test_course_conflict_rolls_back_the_new_record(db, owner, seeded_workspace, mocker, record_factory):
    original = row_mappers.courses_to_rows

    def with_clashing_code(*args, **kwargs):
        rows = original(*args, **kwargs)
        return rows + [{**rows[0], "id": "course-clash"}]

    mocker.patch.object(row_mappers, "courses_to_rows", side_effect=with_clashing_code)

    with pytest.raises(RemoteStoreError):
        seeded_workspace.add_academic_record(db, record_factory())

    assert db.get_records_with_courses(user_id=owner.owner_id) == []
    assert seeded_workspace.academic_records == []


def test_repository_writes_record_and_courses_together(db, owner, seeded_workspace):
    record = {"id": "rec_1", "user_id": owner.owner_id, "student_id": "STU001",
              "year": "2024", "semester": "Semester 1", "status": "Freshman"}
    course = {"id": "course_1", "user_id": owner.owner_id, "academic_record_id": "rec_1",
              "course_name": "Statistics", "course_code": "MATH301", "grade": "A", "credits": 3, "position": 0}

    with pytest.raises(RemoteStoreError):
        db.add_record_with_courses(record, [course, {**course, "id": "course_2", "position": 1}])

    assert db.get_records_with_courses(user_id=owner.owner_id) == []
    assert db.get_record_by_id("rec_1", owner.owner_id) is None


# --- Delete Cascade ---

def test_delete_student_cascades_to_records(db, owner, seeded_workspace, record_factory):
    seeded_workspace.add_academic_record(db, record_factory())
    seeded_workspace.add_academic_record(db, record_factory(semester="Semester 2"))
    seeded_workspace.add_academic_record(db, record_factory(student_id="STU002"))

    assert seeded_workspace.delete_student(db, "STU001") is True

    assert seeded_workspace.get_student("STU001") is None
    assert seeded_workspace.get_student_records("STU001") == []
    assert len(seeded_workspace.academic_records) == 1

    remaining = db.get_records_with_courses(user_id=owner.owner_id)
    assert [r.student_id for r in remaining] == ["STU002"]


def test_delete_unknown_student_returns_false(db, seeded_workspace):
    assert seeded_workspace.delete_student(db, "STU999") is False
    assert len(seeded_workspace.students) == 3


def test_failed_delete_keeps_student_and_records(db, seeded_workspace, mocker, record_factory):
    seeded_workspace.add_academic_record(db, record_factory())
    mocker.patch.object(db, "delete_student", side_effect=RemoteStoreError("remote store unavailable"))

    with pytest.raises(RemoteStoreError):
        seeded_workspace.delete_student(db, "STU001")

    assert seeded_workspace.get_student("STU001") is not None
    assert len(seeded_workspace.get_student_records("STU001")) == 1


# --- Adopting a Whole Dataset ---

def test_adopt_writes_the_dataset_to_the_store(db, owner, seeded_workspace, record_factory):
    kept = seeded_workspace.add_academic_record(db, record_factory()).record
    newcomer = Student(id="STU010", fullName="Grace Kollie", sex="Female", contact="", department="Sociology")
    new_record = AcademicRecord(
        studentId="STU010", year="2024", semester="Semester 2", status="Junior",
        courses=[Course(courseName="Social Theory", courseCode="SOC301", grade="B+", credits=3)],
    )
    students = [seeded_workspace.get_student("STU001"), newcomer]

    seeded_workspace.adopt(db, students, [kept, new_record])

    assert [s.id for s in seeded_workspace.students] == ["STU001", "STU010"]
    fresh = StudentWorkspace(owner).ensure_loaded(db)
    assert fresh.students == seeded_workspace.students
    assert [r.id for r in fresh.academic_records] == [kept.id, new_record.id]
    assert fresh.get_record(new_record.id).courses[0].courseCode == "SOC301"

    assert seeded_workspace.delete_student(db, "STU010") is True
    assert db.get_records_with_courses(user_id=owner.owner_id)[0].id == kept.id


def test_failed_adopt_leaves_store_and_view_alone(db, owner, seeded_workspace, record_factory):
    seeded_workspace.add_academic_record(db, record_factory())
    orphan = AcademicRecord(studentId="STU404", year="2024", semester="Semester 1", status="Freshman")
    before_students = seeded_workspace.students
    before_records = seeded_workspace.academic_records

    with pytest.raises(RemoteStoreError):
        seeded_workspace.adopt(db, before_students[:1], [orphan])

    assert seeded_workspace.students == before_students
    assert seeded_workspace.academic_records == before_records
    fresh = StudentWorkspace(owner).ensure_loaded(db)
    assert [s.id for s in fresh.students] == ["STU001", "STU002", "STU003"]
    assert len(fresh.academic_records) == 1


# --- Read Helpers ---

def test_student_with_records_and_semester_filter(db, seeded_workspace, record_factory):
    seeded_workspace.add_academic_record(db, record_factory())
    seeded_workspace.add_academic_record(db, record_factory(year="2025", status="Sophomore"))

    joined = seeded_workspace.get_student_with_records("STU001")
    assert joined.fullName == "Emma Johnson"
    assert len(joined.academicRecords) == 2

    filtered = seeded_workspace.filter_records_by_semester("STU001", "2025", "Semester 1")
    assert [r.status for r in filtered] == ["Sophomore"]
    assert seeded_workspace.get_student_with_records("STU999") is None


def test_search_students(seeded_workspace):
    assert [s.id for s in seeded_workspace.search_students("rodriguez")] == ["STU003"]
    assert len(seeded_workspace.search_students("")) == 3


def test_reload_keeps_insertion_order(db, owner, workspace, record_factory):
    for student_id in ("STU009", "STU001", "STU005"):
        workspace.add_student(db, StudentCreate(id=student_id, fullName=f"Student {student_id}", sex="Other", department="Education"))
    for year in ("2025", "2023", "2024"):
        workspace.add_academic_record(db, record_factory(student_id="STU001", year=year))

    fresh = StudentWorkspace(owner).ensure_loaded(db)

    assert [s.id for s in fresh.students] == ["STU009", "STU001", "STU005"]
    assert [r.year for r in fresh.academic_records] == ["2025", "2023", "2024"]


def test_load_skips_corrupted_rows(db, db_session, owner, seeded_workspace):
    row = db.get_student("STU002", owner.owner_id)
    row.department = "Astrology"
    db_session.commit()

    fresh = StudentWorkspace(owner).ensure_loaded(db)
    assert [s.id for s in fresh.students] == ["STU001", "STU003"]


# --- Registry ---

def test_registry_returns_one_workspace_per_owner_and_discard_clears_it(db, owner, other_owner, sample_students):
    registry = WorkspaceRegistry()
    workspace = registry.get(owner).ensure_loaded(db)
    workspace.add_student(db, sample_students[0])

    assert registry.get(owner) is workspace
    assert registry.get(other_owner) is not workspace

    registry.discard(owner)
    assert workspace.students == []
    assert workspace.is_loaded is False
    assert registry.get(owner) is not workspace
