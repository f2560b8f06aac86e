from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from models.storage_entry import StorageEntry


class StorageRepository:
    """
    Key/value access to client storage.

    All methods commit immediately: a cart mutation is durable as soon as
    the call returns.
    """

    @staticmethod
    def get(key: str, session: Session) -> str | None:
        stmt = select(StorageEntry.value).where(StorageEntry.key == key)
        return session.execute(stmt).scalar()

    @staticmethod
    def set(key: str, value: str, session: Session) -> None:
        entry = session.get(StorageEntry, key)
        if entry is None:
            session.add(StorageEntry(key=key, value=value))
        else:
            entry.value = value
        session.commit()

    @staticmethod
    def delete(key: str, session: Session) -> None:
        session.execute(delete(StorageEntry).where(StorageEntry.key == key))
        session.commit()
