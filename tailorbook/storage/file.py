import os
import re
import logging
import tempfile
from pathlib import Path
from typing import Optional
from tailorbook.storage.base import StorageBackend, StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


class FileStorage(StorageBackend):
    """One `<key>.json` file per key inside a directory"""

    name = "file"

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        # Keys become file names; keep them to a safe charset
        safe = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        return self.directory / f"{safe}.json"

    def read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageReadError(f"Could not read {path}: {e}") from e

    def write(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error(f"Write to {path} failed: {e}")
            raise StorageWriteError(f"Could not write {path}: {e}") from e

    def health(self) -> bool:
        return self.directory.exists() and os.access(self.directory, os.W_OK)
