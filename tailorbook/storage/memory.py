from typing import Dict, Optional
from tailorbook.storage.base import StorageBackend


class MemoryStorage(StorageBackend):
    """In-process storage, used by tests and throwaway sessions"""

    name = "memory"

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        self.data[key] = value
