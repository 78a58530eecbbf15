#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify the database is reachable and the schema is in place.
Usage: python scripts/check_connections.py
"""
import sys

from sqlalchemy import text

from jobportal.core.config import get_settings
from jobportal.db.database import check_database_connection, get_db_session
from jobportal.db.schema import TABLES


def main():
    settings = get_settings()
    print("=" * 50)
    print("JOB PORTAL - CONNECTION TEST")
    print("=" * 50)

    url = settings.sqlalchemy_url
    if settings.postgres_password and settings.postgres_password in url:
        url = url.replace(settings.postgres_password, "****")

    print("\n[1] Testing database...")
    print(f"    URL: {url}")
    if not check_database_connection():
        print("    ❌ Database: FAILED")
        return 1
    print("    ✅ Database: CONNECTED")

    print("\n[2] Checking tables...")
    missing = 0
    with get_db_session() as db:
        for table in TABLES:
            try:
                count = db.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar()
                print(f"    ✅ {table}: {count} row(s)")
            except Exception as e:
                missing += 1
                print(f"    ❌ {table}: {e.__class__.__name__}")
                db.rollback()

    if missing:
        print("\n    ⚠️  Run scripts/init_db.py to create missing tables")

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)
    return 1 if missing else 0


if __name__ == "__main__":
    sys.exit(main())
