# /tests/test_sync_service.py

import json
import re
from datetime import datetime, timedelta, timezone

import pytest

from gradeledger.core.errors import PersistenceDegradation
from gradeledger.models.student_model import Student
from gradeledger.models.academic_record_model import AcademicRecord, Course
from gradeledger.services import sync_service
from gradeledger.services.sync_service import ReconciliationStore, SNAPSHOT_KEY, SYNC_KEY


class FakeClock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(tmp_path, clock):
    store = ReconciliationStore.for_directory(tmp_path / "cache", clock=clock)
    yield store
    store.close()


@pytest.fixture
def local_data():
    students = [Student(id="STU001", fullName="Emma Johnson", sex="Female", contact="", department="Education")]
    records = [AcademicRecord(
        studentId="STU001", year="2024", semester="Semester 1", status="Freshman",
        courses=[Course(courseName="Introduction to Education", courseCode="EDU101", grade="A", credits=3)],
    )]
    return students, records


@pytest.fixture
def remote_data():
    students = [
        Student(id="STU002", fullName="Michael Chen", sex="Male", contact="", department="Sociology"),
        Student(id="STU003", fullName="Sarah Rodriguez", sex="Female", contact="", department="Criminal Justice"),
    ]
    return students, []


# --- Identity ---

def test_installation_id_is_created_once(store):
    first = store.get_installation_id()
    assert re.fullmatch(r"user_\d+_[0-9a-z]{9}", first)
    assert store.get_installation_id() == first


# --- Reconciliation ---

def test_sync_without_snapshot_pushes_local(store, local_data):
    students, records = local_data
    result = store.sync(students, records)

    assert result.source == "local"
    assert result.pushed is True
    assert result.students == students

    snapshot = store.load_snapshot()
    assert [s.id for s in snapshot.students] == ["STU001"]
    assert snapshot.academicRecords[0].courses[0].courseCode == "EDU101"
    assert store.get_last_sync_time() is not None


def test_newer_snapshot_replaces_local_data_verbatim(store, clock, local_data, remote_data):
    store.save_snapshot(*remote_data)
    # This installation last synced an hour before the snapshot was written.
    store.key_value.set(SYNC_KEY, (clock() - timedelta(hours=1)).isoformat())

    result = store.sync(*local_data)

    assert result.source == "remote"
    assert result.pushed is False
    assert [s.id for s in result.students] == ["STU002", "STU003"]
    assert result.academicRecords == []


def test_local_data_wins_when_snapshot_is_not_newer(store, clock, local_data, remote_data):
    store.save_snapshot(*remote_data)
    clock.advance(minutes=5)

    result = store.sync(*local_data)

    assert result.source == "local"
    assert result.pushed is True
    snapshot = store.load_snapshot()
    assert [s.id for s in snapshot.students] == ["STU001"]
    assert snapshot.lastModified == clock()


def test_missing_sync_time_counts_as_epoch(store, local_data, remote_data):
    store.save_snapshot(*remote_data)
    store.key_value.remove(SYNC_KEY)

    result = store.sync(*local_data)

    assert result.source == "remote"


def test_sync_never_raises_when_storage_fails(store, local_data, mocker):
    mocker.patch.object(store.record_store, "put", side_effect=OSError("disk full"))

    result = store.sync(*local_data)

    assert result.source == "local"
    assert result.pushed is False
    assert result.students == local_data[0]


# --- Read Fallbacks ---

def test_read_falls_back_to_key_value_layer(store, local_data, mocker):
    store.save_snapshot(*local_data)
    mocker.patch.object(store.record_store, "get", side_effect=RuntimeError("corrupted database"))

    snapshot = store.read()

    assert [s.id for s in snapshot.students] == ["STU001"]


def test_read_returns_none_when_both_layers_fail(store, local_data, mocker):
    store.save_snapshot(*local_data)
    mocker.patch.object(store.record_store, "get", side_effect=RuntimeError("corrupted database"))
    store.key_value.set(SNAPSHOT_KEY, "not a snapshot")

    assert store.read() is None


def test_key_value_layer_accepts_plain_json(store, local_data, mocker):
    students, records = local_data
    payload = {
        "students": [s.model_dump() for s in students],
        "academicRecords": [],
        "lastModified": "2026-03-01T12:00:00+00:00",
        "userId": "user_1_abcdefghi",
    }
    store.key_value.set(SNAPSHOT_KEY, json.dumps(payload))
    mocker.patch.object(store.record_store, "get", return_value=None)

    snapshot = store.read()

    assert snapshot.userId == "user_1_abcdefghi"
    assert snapshot.students[0].fullName == "Emma Johnson"


def test_snapshot_payload_is_base64_in_key_value_layer(store, local_data):
    store.save_snapshot(*local_data)

    stored = store.key_value.get(SNAPSHOT_KEY)

    assert not stored.startswith("{")
    assert json.loads(sync_service.decode_payload(stored))["students"][0]["id"] == "STU001"


# --- Push ---

def test_push_failure_raises_persistence_degradation(store, local_data, mocker):
    store.get_installation_id()
    mocker.patch.object(store.key_value, "set", side_effect=OSError("read-only file system"))

    with pytest.raises(PersistenceDegradation):
        store.save_snapshot(*local_data)

def test_unwritable_key_value_layer_raises_persistence_degradation(store, local_data, mocker):
    mocker.patch.object(store.key_value, "set", side_effect=OSError("read-only file system"))

    with pytest.raises(PersistenceDegradation):
        store.get_installation_id()
    with pytest.raises(PersistenceDegradation):
        store.save_snapshot(*local_data)


def test_status_degrades_when_installation_id_cannot_be_stored(store, mocker):
    mocker.patch.object(store.key_value, "set", side_effect=OSError("read-only file system"))

    status = store.status()

    assert status.installationId is None
    assert status.lastSyncTime is None


def test_store_for_owner_separates_owners(tmp_path, local_data):
    first = sync_service.store_for_owner(tmp_path, "owner-1")
    second = sync_service.store_for_owner(tmp_path, "owner-2")
    try:
        first.save_snapshot(*local_data)
        assert first.load_snapshot() is not None
        assert second.load_snapshot() is None
    finally:
        first.close()
        second.close()
