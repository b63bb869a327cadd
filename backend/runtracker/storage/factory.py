from runtracker.core.config import settings
from runtracker.db import SessionLocal
from runtracker.storage.memory import MemoryStorage
from runtracker.storage.sql import SqlStorage

# Shared across requests when STORAGE_BACKEND=memory
memory_storage = MemoryStorage()


# Dependency we will use in FastAPI routes
def get_storage():
    if settings.storage_backend == "memory":
        yield memory_storage
        return

    db = SessionLocal()
    try:
        yield SqlStorage(db)
    finally:
        db.close()
