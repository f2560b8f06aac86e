"""
Unit Tests: StorageRepository and table bootstrap
"""

from sqlalchemy import create_engine

from db import check_all_tables_exist, create_db_and_tables
from repositories.storage import StorageRepository


class TestStorageRepository:

    def test_get_missing_key(self, session):
        assert StorageRepository.get("cart", session) is None

    def test_set_and_overwrite(self, session):
        StorageRepository.set("cart", "first", session)
        StorageRepository.set("cart", "second", session)

        assert StorageRepository.get("cart", session) == "second"

    def test_delete(self, session):
        StorageRepository.set("cart", "value", session)

        StorageRepository.delete("cart", session)

        assert StorageRepository.get("cart", session) is None

    def test_delete_missing_key_is_noop(self, session):
        StorageRepository.delete("nothing", session)


class TestCreateTables:

    def test_create_db_and_tables(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'client.db'}")
        assert check_all_tables_exist(engine) is False

        create_db_and_tables(engine)

        assert check_all_tables_exist(engine) is True
        engine.dispose()
