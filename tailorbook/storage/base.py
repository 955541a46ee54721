from typing import Optional


class StorageError(Exception):
    """Base error for storage backends"""


class StorageReadError(StorageError):
    """Backend could not read a key"""


class StorageWriteError(StorageError):
    """Backend could not persist a key (disk full, database down, ...)"""


class StorageBackend:
    """
    Key-value storage holding one serialized collection per key.

    Implementations store and return opaque strings; parsing is left to
    the repositories.
    """

    name = "base"

    def read(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key was never written"""
        raise NotImplementedError

    def write(self, key: str, value: str) -> None:
        """Replace the value stored under key"""
        raise NotImplementedError

    def health(self) -> bool:
        return True
