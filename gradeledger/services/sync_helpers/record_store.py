# /gradeledger/services/sync_helpers/record_store.py

"""
The transactional local persistence layer: a SQLite file holding whole
snapshot payloads, one row per record id. Each put is its own transaction.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from sqlalchemy import Column, String, JSON, DateTime, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.sql import func

# Kept apart from the remote store's metadata: this table only exists locally.
CacheBase = declarative_base()


class SnapshotRow(CacheBase):
    __tablename__ = "snapshots"

    id = Column(String, primary_key=True)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class SnapshotRecordStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._engine = None
        self._session_factory = None

    def _sessions(self):
        # Opened lazily so that a missing or unwritable cache directory only
        # fails the operation that needs it.
        if self._session_factory is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(f"sqlite:///{self.path}", connect_args={"check_same_thread": False})
            CacheBase.metadata.create_all(bind=engine)
            self._engine = engine
            self._session_factory = sessionmaker(bind=engine, autoflush=False)
        return self._session_factory

    def put(self, record_id: str, payload: Dict[str, Any]) -> None:
        with self._sessions()() as session:
            with session.begin():
                row = session.get(SnapshotRow, record_id)
                if row is None:
                    session.add(SnapshotRow(id=record_id, payload=payload))
                else:
                    row.payload = payload

    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        if self._session_factory is None and not self.path.exists():
            return None
        with self._sessions()() as session:
            row = session.get(SnapshotRow, record_id)
            return dict(row.payload) if row is not None else None

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
