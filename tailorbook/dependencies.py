"""
Store wiring: one storage backend per process, repositories handed to routers via Depends.
"""

import logging
from fastapi import Depends, Request
from tailorbook.config import settings
from tailorbook.repositories.customer_repo import CustomerRepository
from tailorbook.repositories.order_repo import OrderRepository
from tailorbook.services.notifier import DueSoonNotifier
from tailorbook.storage.base import StorageBackend

logger = logging.getLogger(__name__)

# Singleton instance
_storage = None


def create_storage(backend: str = None) -> StorageBackend:
    """Build the backend named in settings (memory, file, database)"""
    backend = (backend or settings.STORAGE_BACKEND).lower()

    if backend == "memory":
        from tailorbook.storage.memory import MemoryStorage
        storage = MemoryStorage()
    elif backend == "file":
        from tailorbook.storage.file import FileStorage
        storage = FileStorage(settings.STORAGE_DIR)
    elif backend == "database":
        from tailorbook.database import get_engine, init_db
        from tailorbook.storage.database import DatabaseStorage
        engine = get_engine()
        init_db(engine)
        storage = DatabaseStorage(engine)
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND '{backend}' (expected memory, file or database)")

    logger.info(f"Using {storage.name} storage backend")
    return storage


def get_storage() -> StorageBackend:
    """Lazy storage initialization to prevent import-time crashes."""
    global _storage
    if _storage is None:
        _storage = create_storage()
    return _storage


def get_customer_repo(storage: StorageBackend = Depends(get_storage)) -> CustomerRepository:
    return CustomerRepository(storage, settings.CUSTOMERS_KEY)


def get_order_repo(storage: StorageBackend = Depends(get_storage)) -> OrderRepository:
    return OrderRepository(storage, settings.ORDERS_KEY)


def get_notifier(request: Request) -> DueSoonNotifier:
    return request.app.state.notifier
