"""
Tests for the migration planning helpers in run_migrations.

Only the file-level logic is covered; applying SQL needs a live database.
"""

from datetime import datetime, timezone

import pytest

from run_migrations import (
    MIGRATIONS_DIR,
    AppliedMigration,
    changed_migrations,
    checksum_of,
    find_migration,
    load_migrations,
    pending_migrations,
)


@pytest.fixture
def migrations_dir(tmp_path):
    (tmp_path / "002_rate_limits.sql").write_text("CREATE TABLE rate_limits ();")
    (tmp_path / "001_user_profiles.sql").write_text("CREATE TABLE user_profiles ();")
    (tmp_path / "notes.txt").write_text("not a migration")
    return tmp_path


def applied(name: str, content: str) -> AppliedMigration:
    return AppliedMigration(name, checksum_of(content), datetime.now(timezone.utc))


class TestLoadMigrations:
    def test_sorted_by_prefix(self, migrations_dir):
        names = [m.name for m in load_migrations(migrations_dir)]
        assert names == ["001_user_profiles.sql", "002_rate_limits.sql"]

    def test_missing_directory(self, tmp_path):
        assert load_migrations(tmp_path / "missing") == []

    def test_checksum_tracks_content(self, migrations_dir):
        first = load_migrations(migrations_dir)[0]
        assert first.checksum == checksum_of("CREATE TABLE user_profiles ();")
        assert len(first.checksum) == 16

    def test_shipped_migrations(self):
        names = [m.name for m in load_migrations(MIGRATIONS_DIR)]
        assert names[:3] == [
            "001_user_profiles_billing.sql",
            "002_rate_limits.sql",
            "003_apply_referral_code.sql",
        ]


class TestPlanning:
    def test_pending_excludes_applied(self, migrations_dir):
        migrations = load_migrations(migrations_dir)
        done = {"001_user_profiles.sql": applied("001_user_profiles.sql", "CREATE TABLE user_profiles ();")}

        assert [m.name for m in pending_migrations(migrations, done)] == ["002_rate_limits.sql"]
        assert changed_migrations(migrations, done) == []

    def test_changed_after_apply(self, migrations_dir):
        migrations = load_migrations(migrations_dir)
        done = {"001_user_profiles.sql": applied("001_user_profiles.sql", "CREATE TABLE old ();")}

        assert [m.name for m in changed_migrations(migrations, done)] == ["001_user_profiles.sql"]


class TestFindMigration:
    def test_unique_prefix(self, migrations_dir):
        migration = find_migration(load_migrations(migrations_dir), "002")
        assert migration.name == "002_rate_limits.sql"
        assert "rate_limits" in migration.sql

    def test_no_match(self, migrations_dir):
        with pytest.raises(LookupError, match="No migration found"):
            find_migration(load_migrations(migrations_dir), "009")

    def test_ambiguous(self, migrations_dir):
        with pytest.raises(LookupError, match="Multiple migrations"):
            find_migration(load_migrations(migrations_dir), "00")
