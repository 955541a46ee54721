import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Generic, List, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError
from tailorbook.storage.base import StorageBackend, StorageReadError
from tailorbook.utils.helpers import format_timestamp, generate_record_id, utc_now

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

# Fields the store owns; never taken from a partial update
PROTECTED_FIELDS = {"id", "created_at", "updated_at"}


@dataclass
class LoadResult(Generic[RecordT]):
    """Outcome of reading a collection: either records, or a corrupt/unreadable store"""

    records: List[RecordT] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def corrupt(self) -> bool:
        return self.error is not None


class JsonCollectionRepository(Generic[RecordT]):
    """
    One collection persisted as a JSON array under a single storage key.

    Every mutation reads the whole collection, changes it and writes the
    whole collection back. Two writers sharing a backend can overwrite each
    other; there is no locking.
    """

    record_model: Type[RecordT]

    def __init__(
        self,
        storage: StorageBackend,
        key: str,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.storage = storage
        self.key = key
        self.clock = clock

    def load(self) -> LoadResult[RecordT]:
        """Read and parse the collection, reporting corruption instead of raising"""
        try:
            raw = self.storage.read(self.key)
        except StorageReadError as e:
            logger.warning(f"Could not read '{self.key}', treating as empty: {e}")
            return LoadResult(error=str(e))

        if not raw:
            return LoadResult()

        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError(f"expected a JSON array, got {type(items).__name__}")
            records = [self.record_model.model_validate(item) for item in items]
        except (ValueError, ValidationError) as e:
            logger.warning(f"Corrupt collection '{self.key}', treating as empty: {e}")
            return LoadResult(error=str(e))

        return LoadResult(records=records)

    def list(self) -> List[RecordT]:
        """All records in persisted order; empty if missing or corrupt"""
        return self.load().records

    def get(self, record_id: str) -> Optional[RecordT]:
        """Get record by ID"""
        for record in self.list():
            if record.id == record_id:
                return record
        return None

    def _save(self, records: List[RecordT]) -> None:
        payload = [r.model_dump(by_alias=True, exclude_none=True) for r in records]
        self.storage.write(self.key, json.dumps(payload))

    def _load_for_write(self) -> List[RecordT]:
        """Records to mutate; refuses to rewrite a collection it could not fully read"""
        result = self.load()
        if result.corrupt:
            raise StorageReadError(f"Refusing to rewrite unreadable collection '{self.key}': {result.error}")
        return result.records

    def _field_names(self, fields: dict) -> dict:
        """Map camelCase aliases in fields to model field names"""
        aliases = {info.alias: name for name, info in self.record_model.model_fields.items() if info.alias}
        return {aliases.get(k, k): v for k, v in fields.items()}

    def _insert(self, fields: dict) -> RecordT:
        records = self._load_for_write()
        timestamp = format_timestamp(self.clock())
        record = self.record_model.model_validate({
            **fields,
            "id": generate_record_id(),
            "created_at": timestamp,
            "updated_at": timestamp,
        })
        records.append(record)
        self._save(records)
        return record

    def update(self, record_id: str, **kwargs) -> Optional[RecordT]:
        """Shallow-merge kwargs over the record and refresh updated_at"""
        records = self._load_for_write()
        for index, record in enumerate(records):
            if record.id == record_id:
                break
        else:
            return None

        changes = {k: v for k, v in self._field_names(kwargs).items() if k not in PROTECTED_FIELDS}
        merged = record.model_dump()
        merged.update(changes)
        merged["updated_at"] = format_timestamp(self.clock())

        records[index] = self.record_model.model_validate(merged)
        self._save(records)
        return records[index]

    def delete(self, record_id: str) -> bool:
        """Delete record; False (and no write) if it does not exist"""
        records = self._load_for_write()
        remaining = [r for r in records if r.id != record_id]

        if len(remaining) == len(records):
            return False

        self._save(remaining)
        return True
