"""Unit tests for database migrator."""

from pathlib import Path
from unittest.mock import patch

import aiosqlite
import pytest

from src.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    MigrationInfo,
    create_backup,
    discover_migrations,
    get_applied_migrations,
    get_current_version,
    get_migration_status,
    initialize_database,
    restore_backup,
    verify_schema_integrity,
)

MIGRATIONS_DIR_PATH = "src.infrastructure.storage.sqlite.migrations.migrator.MIGRATIONS_DIR"

TRACKING_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS schema_migrations (
        version TEXT PRIMARY KEY,
        name TEXT,
        checksum TEXT,
        applied_at TEXT DEFAULT (datetime('now')),
        execution_time_ms INTEGER
    );
"""


class TestMigrationInfo:
    """Tests for MigrationInfo."""

    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v007_add_reminders.sql"
        migration_file.write_text("SELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "007"
        assert info.name == "add_reminders"
        assert len(info.checksum) == 16

    def test_checksum_depends_on_content(self, tmp_path: Path):
        first = tmp_path / "v001_a.sql"
        second = tmp_path / "v002_b.sql"
        first.write_text("SELECT 1;")
        second.write_text("SELECT 2;")

        assert MigrationInfo.from_file(first).checksum != MigrationInfo.from_file(second).checksum

    @pytest.mark.parametrize("filename", ["invalid_migration.sql", "v_no_number.sql"])
    def test_invalid_filename_raises(self, tmp_path: Path, filename: str):
        path = tmp_path / filename
        path.write_text("SELECT 1;")

        with pytest.raises(ValueError, match="Invalid migration filename"):
            MigrationInfo.from_file(path)


class TestDiscoverMigrations:
    def test_bundled_schema_is_discovered(self):
        migrations = discover_migrations()

        assert migrations[0].version == "001"
        assert migrations[0].name == "organizer_schema"

    def test_sorted_and_skips_invalid(self, tmp_path: Path):
        (tmp_path / "v002_second.sql").write_text("SELECT 2;")
        (tmp_path / "v001_first.sql").write_text("SELECT 1;")
        (tmp_path / "vbad.sql").write_text("SELECT 3;")
        (tmp_path / "notes.txt").write_text("not a migration")

        with patch(MIGRATIONS_DIR_PATH, tmp_path):
            result = discover_migrations()

        assert [m.version for m in result] == ["001", "002"]


class TestVersionTracking:
    async def test_no_table_means_nothing_applied(self, temp_db_path: Path):
        async with aiosqlite.connect(temp_db_path) as conn:
            assert await get_applied_migrations(conn) == {}
            assert await get_current_version(conn) is None

    async def test_reads_applied_versions(self, temp_db_path: Path):
        async with aiosqlite.connect(temp_db_path) as conn:
            await conn.execute(TRACKING_TABLE_SQL)
            await conn.executemany(
                "INSERT INTO schema_migrations (version, checksum) VALUES (?, ?)",
                [("001", "abc"), ("002", "def")],
            )
            await conn.commit()

            assert await get_applied_migrations(conn) == {"001": "abc", "002": "def"}
            assert await get_current_version(conn) == "002"


class TestBackups:
    def test_create_and_restore(self, tmp_path: Path):
        db_path = tmp_path / "test.db"
        db_path.write_text("original")

        backup_path = create_backup(db_path)
        db_path.write_text("corrupted")
        restore_backup(db_path, backup_path)

        assert ".backup_" in backup_path.name
        assert db_path.read_text() == "original"


class TestInitializeDatabase:
    async def test_creates_organizer_tables(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "organext.db"

        results = await initialize_database(db_path)

        assert [r.version for r in results] == ["001"]
        assert all(r.success for r in results)
        async with aiosqlite.connect(db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
        assert set(REQUIRED_TABLES) <= tables

    async def test_second_run_is_noop(self, temp_db_path: Path):
        await initialize_database(temp_db_path)

        assert await initialize_database(temp_db_path) == []

    async def test_failed_migration_stops(self, temp_db_path: Path, tmp_path: Path):
        migrations_dir = tmp_path / "migrations"
        migrations_dir.mkdir()
        (migrations_dir / "v001_init.sql").write_text(TRACKING_TABLE_SQL)
        (migrations_dir / "v002_broken.sql").write_text("CREATE TABLE oops (;")
        (migrations_dir / "v003_never.sql").write_text("SELECT 1;")

        with patch(MIGRATIONS_DIR_PATH, migrations_dir):
            results = await initialize_database(temp_db_path, create_backup_before=False)

        assert [r.success for r in results] == [True, False]
        assert results[1].error

    async def test_backup_cleaned_up_after_success(self, tmp_path: Path):
        db_path = tmp_path / "test.db"
        migrations_dir = tmp_path / "migrations"
        migrations_dir.mkdir()
        (migrations_dir / "v001_init.sql").write_text(TRACKING_TABLE_SQL)

        with patch(MIGRATIONS_DIR_PATH, migrations_dir):
            await initialize_database(db_path)
            (migrations_dir / "v002_more.sql").write_text("CREATE TABLE extra (id INTEGER);")
            results = await initialize_database(db_path)

        assert [r.version for r in results] == ["002"]
        assert list(tmp_path.glob("*.backup_*.db")) == []


class TestStatusAndIntegrity:
    async def test_status_when_missing(self, temp_db_path: Path):
        status = await get_migration_status(temp_db_path)

        assert status["exists"] is False
        assert status["current_version"] is None

    async def test_status_after_initialize(self, db_path: Path):
        status = await get_migration_status(db_path)

        assert status["exists"] is True
        assert status["current_version"] == "001"
        assert status["pending_migrations"] == []

    async def test_integrity_checks_pass(self, db_path: Path):
        checks = {c["check"]: c for c in await verify_schema_integrity(db_path)}

        assert checks["integrity"]["status"] == "PASS"
        assert checks["required_tables"]["status"] == "PASS"
        assert checks["required_tables"]["missing"] == []

    async def test_missing_tables_reported(self, temp_db_path: Path):
        async with aiosqlite.connect(temp_db_path) as conn:
            await conn.execute("CREATE TABLE tasks (id TEXT)")
            await conn.commit()

        checks = {c["check"]: c for c in await verify_schema_integrity(temp_db_path)}

        assert checks["required_tables"]["status"] == "FAIL"
        assert "appointments" in checks["required_tables"]["missing"]


class TestPackageExports:
    def test_public_names_resolve(self):
        import src.infrastructure.storage.sqlite.migrations as migrations
        from src.infrastructure.storage.sqlite.migrations import migrator

        for name in migrations.__all__:
            assert getattr(migrations, name) is getattr(migrator, name)

    async def test_initialize_through_package(self, temp_db_path: Path):
        from src.infrastructure.storage.sqlite.migrations import initialize_database as init_db

        results = await init_db(temp_db_path)

        assert [r.version for r in results] == ["001"]
        assert all(r.success for r in results)
