"""Unit tests for the database setup script."""

from pathlib import Path

from scripts.setup_database import MIGRATIONS_DIR, extract_statements


def test_extract_statements_skips_comments_and_blanks():
    sql = """
    -- header comment
    CREATE SCHEMA IF NOT EXISTS aml;

    -- only a comment;
    CREATE TABLE t (id INT);
    """
    assert extract_statements(sql) == [
        "CREATE SCHEMA IF NOT EXISTS aml",
        "CREATE TABLE t (id INT)",
    ]


def test_migrations_create_registrar_table():
    files = sorted(Path(MIGRATIONS_DIR).glob("*.sql"))
    assert files, "no migrations found"

    statements = [s for f in files for s in extract_statements(f.read_text())]
    joined = "\n".join(statements)
    assert "CREATE SCHEMA IF NOT EXISTS aml" in joined
    assert "aml.registrar_policy" in joined
    assert "BYTEA" in joined
