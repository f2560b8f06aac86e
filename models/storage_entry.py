# key/value store standing in for the browser's local storage. The cart is
# written here as a single JSON document under config.CART_STORAGE_KEY and
# survives restarts of the client process.
from datetime import datetime

from sqlalchemy import Column, String, Text, DateTime

from models.base import Base


class StorageEntry(Base):
    __tablename__ = "client_storage"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
