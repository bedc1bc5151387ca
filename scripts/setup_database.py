"""Create the AML registrar tables.

Runs every db/migrations/*.sql file in name order. Statements that fail
(e.g. objects that already exist) are skipped without aborting the file.
"""

import asyncio
import sys
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent.parent / "db" / "migrations"


def extract_statements(sql: str) -> list[str]:
    """Split SQL on ';' and drop comment-only chunks, returning executable statements."""
    statements = []
    for chunk in sql.split(";"):
        sql_lines = [line for line in chunk.splitlines() if not line.strip().startswith("--")]
        stmt = "\n".join(sql_lines).strip()
        if stmt:
            statements.append(stmt)
    return statements


async def setup(migrations_dir: Path = MIGRATIONS_DIR) -> None:
    """Apply migrations using the admin connection."""
    from sqlalchemy import text
    from sqlalchemy.ext.asyncio import create_async_engine

    from aml_registrar.core.config import get_settings

    database = get_settings().database
    if not (database.url_admin or database.url_app or database.password.get_secret_value()):
        logger.error("DATABASE_URL_ADMIN (or DATABASE_URL_APP) not set")
        sys.exit(1)

    engine = create_async_engine(database.admin_async_url)

    # One transaction per file so a failure in one file keeps earlier tables.
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        logger.info("Running migration", file=migration_file.name)
        async with engine.begin() as conn:
            for statement in extract_statements(migration_file.read_text()):
                try:
                    await conn.execute(text("SAVEPOINT _migration_stmt"))
                    await conn.execute(text(statement))
                    await conn.execute(text("RELEASE SAVEPOINT _migration_stmt"))
                except Exception as e:
                    await conn.execute(text("ROLLBACK TO SAVEPOINT _migration_stmt"))
                    logger.warning("Statement skipped", file=migration_file.name, error=str(e))

    await engine.dispose()
    logger.info("Database setup complete")


def main() -> None:
    from aml_registrar.core.logging import setup_logging

    setup_logging()
    asyncio.run(setup())


if __name__ == "__main__":
    main()
