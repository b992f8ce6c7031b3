# /gradeledger/services/sync_service.py

"""
Snapshot reconciliation between an owner's working data and the local
snapshot store.

The snapshot store is written to two independent local layers: a key-value
layer (one file per key) and a transactional record store (SQLite). Reads
prefer the record store, fall back to the key-value layer, and finally to
"no snapshot", so one cleared layer never causes a hard failure.

Conflicts are resolved at whole-snapshot granularity: when the stored
snapshot is newer than this installation's last sync, it replaces the local
data entirely; otherwise the local data overwrites it.
"""

import base64
import binascii
import json
import logging
import random
import string
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, Union

from ..core.errors import PersistenceDegradation
from ..models.student_model import Student
from ..models.academic_record_model import AcademicRecord
from ..models.sync_model import Snapshot, SyncResult, SyncSource, SyncStatus
from .sync_helpers.key_value_store import KeyValueStore
from .sync_helpers.record_store import SnapshotRecordStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "grade-ledger-data"
SNAPSHOT_KEY = f"{STORAGE_KEY}-cloud"
SYNC_KEY = "grade-ledger-sync-last"
USER_KEY = "grade-ledger-user"
SNAPSHOT_RECORD_ID = "main"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_BASE36 = string.digits + string.ascii_lowercase


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def encode_payload(raw_json: str) -> str:
    return base64.b64encode(raw_json.encode("utf-8")).decode("ascii")


def decode_payload(stored: str) -> str:
    """Accepts both base64-wrapped and plain JSON payloads."""
    try:
        return base64.b64decode(stored, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return stored


class ReconciliationStore:
    def __init__(
        self,
        key_value: KeyValueStore,
        record_store: SnapshotRecordStore,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.key_value = key_value
        self.record_store = record_store
        self.clock = clock

    @classmethod
    def for_directory(cls, directory: Union[str, Path], clock: Callable[[], datetime] = utc_now) -> "ReconciliationStore":
        directory = Path(directory)
        return cls(
            KeyValueStore(directory / "kv"),
            SnapshotRecordStore(directory / "snapshots.sqlite3"),
            clock=clock,
        )

    # --- Identity & Timestamps ---

    def get_installation_id(self) -> str:
        """
        Pseudo-identity of this installation, created on first use:
        `user_<epoch ms>_<9 base36 chars>`. Raises PersistenceDegradation if
        the key-value layer cannot be read or written.
        """
        try:
            user_id = self.key_value.get(USER_KEY)
            if not user_id:
                suffix = "".join(random.choice(_BASE36) for _ in range(9))
                user_id = f"user_{int(time.time() * 1000)}_{suffix}"
                self.key_value.set(USER_KEY, user_id)
        except OSError as e:
            logger.error("Failed to read or store the installation id: %s", e)
            raise PersistenceDegradation(f"Failed to store installation id: {e}") from e
        return user_id

    def get_last_sync_time(self) -> Optional[datetime]:
        try:
            raw = self.key_value.get(SYNC_KEY)
        except OSError:
            logger.warning("Could not read the last sync time", exc_info=True)
            return None
        if not raw:
            return None
        try:
            return _as_aware(datetime.fromisoformat(raw.strip()))
        except ValueError:
            logger.warning("Ignoring malformed sync timestamp %r", raw)
            return None

    def _record_sync_time(self, when: datetime) -> None:
        self.key_value.set(SYNC_KEY, when.isoformat())

    def status(self) -> SyncStatus:
        try:
            installation_id = self.get_installation_id()
        except PersistenceDegradation:
            installation_id = None
        return SyncStatus(lastSyncTime=self.get_last_sync_time(), installationId=installation_id)

    # --- Push / Read ---

    def push(self, snapshot: Snapshot) -> None:
        """
        Writes a snapshot to both local layers. Raises PersistenceDegradation if
        either write fails; the two writes are not atomic with each other.
        """
        raw_json = snapshot.model_dump_json()
        try:
            self.key_value.set(SNAPSHOT_KEY, encode_payload(raw_json))
            self.record_store.put(SNAPSHOT_RECORD_ID, json.loads(raw_json))
        except Exception as e:
            logger.error("Failed to write snapshot to local storage: %s", e)
            raise PersistenceDegradation(f"Failed to write snapshot: {e}") from e
        logger.info(
            "Snapshot written (%d students, %d records)",
            len(snapshot.students), len(snapshot.academicRecords),
        )

    def _read_record_store(self) -> Optional[Snapshot]:
        try:
            payload = self.record_store.get(SNAPSHOT_RECORD_ID)
            return Snapshot.model_validate(payload) if payload else None
        except Exception as e:
            logger.warning("Record store unreadable, falling back to key-value layer: %s", e)
            return None

    def _read_key_value(self) -> Optional[Snapshot]:
        try:
            stored = self.key_value.get(SNAPSHOT_KEY)
            if not stored:
                return None
            return Snapshot.model_validate_json(decode_payload(stored))
        except Exception as e:
            logger.warning("Key-value snapshot unreadable: %s", e)
            return None

    def read(self) -> Optional[Snapshot]:
        """Record store first, then the key-value layer, then None."""
        return self._read_record_store() or self._read_key_value()

    # --- Public Operations ---

    def save_snapshot(self, students: List[Student], records: List[AcademicRecord]) -> Snapshot:
        snapshot = Snapshot(
            students=students,
            academicRecords=records,
            lastModified=self.clock(),
            userId=self.get_installation_id(),
        )
        self.push(snapshot)
        try:
            self._record_sync_time(self.clock())
        except OSError as e:
            raise PersistenceDegradation(f"Failed to record sync time: {e}") from e
        return snapshot

    def load_snapshot(self) -> Optional[Snapshot]:
        return self.read()

    def close(self) -> None:
        self.record_store.close()

    def sync(self, local_students: List[Student], local_records: List[AcademicRecord]) -> SyncResult:
        """
        Reconciles local data with the stored snapshot.

        - No snapshot: push local data, keep local data.
        - Snapshot strictly newer than the last local sync: return the
          snapshot's students and records verbatim.
        - Otherwise: push local data over the snapshot, keep local data.

        Never raises. Any storage failure is logged and the local data is
        returned unchanged.
        """
        local = SyncResult(students=local_students, academicRecords=local_records, source=SyncSource.LOCAL, pushed=False)
        try:
            remote = self.read()
            if remote is None:
                self.save_snapshot(local_students, local_records)
                logger.info("No stored snapshot; pushed local data")
                return local.model_copy(update={"pushed": True})

            local_timestamp = self.get_last_sync_time() or EPOCH
            if _as_aware(remote.lastModified) > local_timestamp:
                logger.info("Using stored snapshot (newer)")
                return SyncResult(
                    students=remote.students,
                    academicRecords=remote.academicRecords,
                    source=SyncSource.REMOTE,
                    pushed=False,
                )

            logger.info("Using local data (newer)")
            self.save_snapshot(local_students, local_records)
            return local.model_copy(update={"pushed": True})
        except Exception:
            logger.exception("Sync failed; keeping local data")
            return local


def store_for_owner(cache_dir: Union[str, Path], owner_id: str) -> ReconciliationStore:
    """Each owner gets its own pair of local layers under the cache directory."""
    return ReconciliationStore.for_directory(Path(cache_dir) / owner_id)
