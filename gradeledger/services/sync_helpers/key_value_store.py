# /gradeledger/services/sync_helpers/key_value_store.py

"""
The simple local persistence layer: one small text file per fixed key.

Reads and writes are synchronous. A write goes to a temporary file that is
then renamed over the target, so a reader never sees half a value.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Union

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class KeyValueStore:
    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_CHARS.sub('_', key)}.kv"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self._path_for(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=".kv")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, target)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def remove(self, key: str) -> None:
        path = self._path_for(key)
        if path.exists():
            path.unlink()
