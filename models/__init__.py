"""
Models Package

This file ensures all SQLAlchemy models are imported and registered,
which is required for create_all() to see every table.
"""

from models.base import Base
from models.storage_entry import StorageEntry

__all__ = [
    'Base',
    'StorageEntry',
]
