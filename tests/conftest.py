# /tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from gradeledger.db.base import Base
from gradeledger.db.database import create_db_engine
from gradeledger.main import create_app
from gradeledger.models.student_model import StudentCreate
from gradeledger.models.academic_record_model import AcademicRecordCreate
from gradeledger.models.user_model import SessionContext
from gradeledger.services.database_service import DatabaseService
from gradeledger.services.workspace_service import StudentWorkspace


# --- Remote Store Fixtures ---

@pytest.fixture
def engine():
    """A fresh in-memory database per test; StaticPool keeps it on one connection."""
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def db(db_session):
    return DatabaseService(db_session=db_session)


def _make_owner(db: DatabaseService, user_id: str) -> SessionContext:
    db.add_user({
        "id": user_id,
        "email": f"{user_id}@example.com",
        "password_hash": "not-a-real-hash",
        "is_active": True,
    })
    return SessionContext(owner_id=user_id, email=f"{user_id}@example.com")


@pytest.fixture
def owner(db):
    return _make_owner(db, "owner-1")


@pytest.fixture
def other_owner(db):
    return _make_owner(db, "owner-2")


# --- Sample Data ---

@pytest.fixture
def sample_students():
    return [
        StudentCreate(id="STU001", fullName="Emma Johnson", sex="Female", contact="emma.johnson@email.com", department="Education"),
        StudentCreate(id="STU002", fullName="Michael Chen", sex="Male", contact="+231 555 0102", department="Sociology"),
        StudentCreate(id="STU003", fullName="Sarah Rodriguez", sex="Female", contact="sarah.r@email.com", department="Criminal Justice"),
    ]


def make_record(student_id="STU001", year="2024", semester="Semester 1", status="Freshman", courses=None):
    if courses is None:
        courses = [
            {"courseName": "Introduction to Education", "courseCode": "EDU101", "grade": "A", "credits": 3},
            {"courseName": "English Composition", "courseCode": "ENG101", "grade": "B+", "credits": 3},
            {"courseName": "College Algebra", "courseCode": "MTH101", "grade": "C", "credits": 2},
        ]
    return AcademicRecordCreate(studentId=student_id, year=year, semester=semester, status=status, courses=courses)


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def workspace(db, owner):
    return StudentWorkspace(owner).ensure_loaded(db)


@pytest.fixture
def seeded_workspace(db, workspace, sample_students):
    for student in sample_students:
        workspace.add_student(db, student)
    return workspace


# --- API Fixtures ---

@pytest.fixture
def client(session_factory, tmp_path):
    app = create_app(session_factory=session_factory, cache_dir=tmp_path / "cache")
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    credentials = {"email": "registrar@example.com", "password": "secret123"}
    assert client.post("/api/auth/signup", json=credentials).status_code == 201
    response = client.post(
        "/api/auth/token",
        data={"username": credentials["email"], "password": credentials["password"]},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
