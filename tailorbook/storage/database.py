import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from tailorbook.database import check_database_health
from tailorbook.models.kv_entry import KeyValueEntry
from tailorbook.storage.base import StorageBackend, StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


class DatabaseStorage(StorageBackend):
    """Key-value rows in the `kv_store` table, one row per collection"""

    name = "database"

    def __init__(self, engine):
        self.engine = engine
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def read(self, key: str) -> Optional[str]:
        try:
            with self.session_factory() as db:
                entry = db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
                return entry.value if entry else None
        except SQLAlchemyError as e:
            raise StorageReadError(f"Could not read key {key}: {e}") from e

    def write(self, key: str, value: str) -> None:
        try:
            with self.session_factory() as db:
                entry = db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
                if entry:
                    entry.value = value
                else:
                    db.add(KeyValueEntry(key=key, value=value))
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Write of key {key} failed: {e}")
            raise StorageWriteError(f"Could not write key {key}: {e}") from e

    def health(self) -> bool:
        return check_database_health(self.engine)
