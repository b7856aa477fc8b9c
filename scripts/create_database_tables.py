"""
Create Database Tables Using SQLAlchemy

Creates the EstateHub tables directly with create_all(). This bypasses
Alembic migrations and is meant for local development and demos.
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import sqlalchemy as sa

from src.estatehub.db.session import create_all_tables, drop_all_tables, engine
from src.estatehub.utils.logger import get_logger

logger = get_logger(__name__)


def main():
    """Create all database tables."""
    parser = argparse.ArgumentParser(description="Create EstateHub database tables")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing EstateHub tables first (destroys data)",
    )
    args = parser.parse_args()

    if args.drop:
        logger.warning("dropping_existing_tables")
        drop_all_tables()

    logger.info("creating_database_tables", url=engine.url.render_as_string(hide_password=True))
    create_all_tables()

    tables = sorted(sa.inspect(engine).get_table_names())
    logger.info("database_setup_complete", table_count=len(tables), tables=tables)


if __name__ == "__main__":
    main()
