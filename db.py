from contextlib import contextmanager
from pathlib import Path
import logging
import sqlite3

from sqlalchemy import event, Engine, create_engine, inspect
from sqlalchemy.orm import sessionmaker, Session

import config
from models.base import Base
# Imports of these models are needed to correctly create tables in the database.
from models.storage_entry import StorageEntry  # noqa: F401

logger = logging.getLogger(__name__)

# HARD DISABLE SQL echo - storage writes happen on every cart mutation
sql_echo = False

if config.DB_URL.startswith("sqlite:///") and not config.DB_URL.startswith("sqlite:///:memory:"):
    data_folder = Path(config.DB_URL.removeprefix("sqlite:///")).parent
    if data_folder.exists() is False:
        data_folder.mkdir(parents=True)

engine = create_engine(config.DB_URL, echo=sql_echo)
session_maker = sessionmaker(engine, expire_on_commit=False)


@contextmanager
def get_db_session() -> Session:
    session = session_maker()
    try:
        yield session
    finally:
        session.close()


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def check_all_tables_exist(bind: Engine = None) -> bool:
    existing = set(inspect(bind or engine).get_table_names())
    return all(table.name in existing for table in Base.metadata.tables.values())


def create_db_and_tables(bind: Engine = None):
    bind = bind or engine
    if check_all_tables_exist(bind):
        return
    logger.info("Creating client storage tables")
    Base.metadata.create_all(bind=bind)
