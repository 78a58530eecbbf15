"""
Database module - SQLAlchemy engine, unit-of-work sessions and schema.
"""
from jobportal.db.database import get_db_session, execute_raw_sql, check_database_connection
from jobportal.db.schema import init_schema, drop_schema

__all__ = [
    "get_db_session",
    "execute_raw_sql",
    "check_database_connection",
    "init_schema",
    "drop_schema",
]
