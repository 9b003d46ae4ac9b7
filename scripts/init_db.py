#!/usr/bin/env python3
"""
Standalone database initialization script
Creates or upgrades the database file and optionally resets the sample data.

Usage:
    python scripts/init_db.py [--path FILE] [--no-seed] [--reset]
"""

import argparse
import os
import sys

# Ensure we're using the right Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from app.container import build_container  # noqa: E402
from app.exceptions import DatabaseError  # noqa: E402
from app.logging_config import configure_logging  # noqa: E402


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the RecipeKeeper database")
    parser.add_argument("--path", help="Database file (defaults to DATABASE_PATH)")
    parser.add_argument("--no-seed", action="store_true", help="Do not seed sample recipes")
    parser.add_argument(
        "--reset", action="store_true", help="Soft-delete all recipes and seed again"
    )
    args = parser.parse_args(argv)

    configure_logging()
    keeper = build_container(args.path)
    try:
        status = keeper.database.initialize(seed=not args.no_seed)
        if args.reset:
            keeper.seeder.reset_database()
            status = keeper.database.get_status()
    except DatabaseError as e:
        print(f"\nFAILED! [{e.code}] {e.message}")
        return 1
    finally:
        keeper.close()

    print("\n" + "=" * 60)
    print(f"Database ready: {keeper.connection.database_path}")
    print(f"Schema version: {status.current_version} (latest {status.latest_version})")
    for info in status.migrations:
        marker = "applied" if info.applied else "pending"
        print(f"  • {info.version:03d} {info.name} [{marker}]")
    print("=" * 60 + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
