# channel_service/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # App-level errors (RepositoryError, ConflictError, NotFoundError, InternalError)
# │   ├── integrity_classifier.py    # Reads the database-native descriptor (message + code) off a driver error
# │   └── mapper.py                  # Classifies storage failures into app-level errors, exactly once

from .base import RepositoryError, ConflictError, NotFoundError, InternalError
from .mapper import classify_storage_error, db_error_handler

__all__ = [
    "RepositoryError",
    "ConflictError",
    "NotFoundError",
    "InternalError",
    "classify_storage_error",
    "db_error_handler",
]
