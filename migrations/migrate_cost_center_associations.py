#!/usr/bin/env python3
"""Migration script to move cost center business lines into the association table.

Older databases linked each cost center to at most one business line through
a ``cost_centers.business_line_id`` column. This migration:
- copies every non-null link into ``cost_center_business_lines``
  (links to business lines that no longer exist are dropped)
- rebuilds ``cost_centers`` without the ``business_line_id`` column

Running it again on a migrated database does nothing.

Usage:
    python migrations/migrate_cost_center_associations.py [--db-path PATH]
"""

import sys
from pathlib import Path

# Add src to path so we can import budgetline modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import MetaData, create_engine, inspect, text
from budgetline.database.factories import create_sqlite_database
from budgetline.database.models import CostCenter

LEGACY_COLUMN = "business_line_id"
KEPT_COLUMNS = ("id", "name", "created_at", "updated_at")


def column_exists(engine, table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table.

    Args:
        engine: SQLAlchemy engine
        table_name: Name of the table
        column_name: Name of the column

    Returns:
        True if column exists, False otherwise
    """
    inspector = inspect(engine)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def copy_associations(conn) -> int:
    """Copy legacy links into the association table.

    Returns:
        Number of rows inserted
    """
    result = conn.execute(
        text(
            "INSERT OR IGNORE INTO cost_center_business_lines (cost_center_id, business_line_id) "
            "SELECT id, business_line_id FROM cost_centers "
            "WHERE business_line_id IS NOT NULL "
            "AND business_line_id IN (SELECT id FROM business_lines)"
        )
    )
    return result.rowcount


def rebuild_cost_centers(conn, legacy_columns: list[str]) -> None:
    """Recreate cost_centers from the current model, keeping ids and names.

    Must run with foreign key enforcement off, otherwise dropping the old
    table would cascade into the association and ledger tables.
    """
    CostCenter.__table__.to_metadata(MetaData(), name="cost_centers_new").create(conn)

    selected = []
    for column in KEPT_COLUMNS:
        if column in legacy_columns:
            selected.append(column)
        elif column == "created_at":
            selected.append("CURRENT_TIMESTAMP")
        else:
            selected.append("NULL")

    conn.execute(
        text(
            f"INSERT INTO cost_centers_new ({', '.join(KEPT_COLUMNS)}) "
            f"SELECT {', '.join(selected)} FROM cost_centers"
        )
    )
    conn.execute(text("DROP TABLE cost_centers"))
    conn.execute(text("ALTER TABLE cost_centers_new RENAME TO cost_centers"))


def migrate_database(database_path: str | None = None) -> None:
    """Migrate database to the many-to-many cost center model.

    Args:
        database_path: Path to database file. If None, uses default location.

    Raises:
        Exception: If migration fails
    """
    # Creating the application database also creates the association table
    # when it is missing
    db = create_sqlite_database(database_path=database_path)
    # A plain engine leaves SQLite foreign key enforcement off
    engine = create_engine(db.database_url)

    try:
        inspector = inspect(engine)
        if "cost_centers" not in inspector.get_table_names():
            raise Exception("Table 'cost_centers' does not exist. Please initialize the database schema first.")

        if not column_exists(engine, "cost_centers", LEGACY_COLUMN):
            print("Migration already applied: cost_centers has no business_line_id column")
            return

        print("Starting migration: moving cost center business lines to associations...")
        legacy_columns = [col["name"] for col in inspector.get_columns("cost_centers")]

        with engine.begin() as conn:
            copied = copy_associations(conn)
            print(f"  Copied {copied} association(s)")
            rebuild_cost_centers(conn, legacy_columns)
            print("  Rebuilt table: cost_centers")

        print("Migration completed successfully!")

    except Exception as e:
        print(f"Migration failed: {e}")
        raise
    finally:
        engine.dispose()
        db.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Migrate cost center business lines to the association table"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides BUDGETLINE_DB_PATH environment variable)",
    )
    args = parser.parse_args()

    try:
        migrate_database(database_path=args.db_path)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
