"""
Relational schema for the job portal.

Tables:
1. user_login         - accounts (email + bcrypt hash)
2. user_details       - shared profile, role, company projection
3. freelancer_details - skills and aggregate experience
4. job_posts          - postings owned by a company account
5. job_applications   - one row per (job, applicant), with status

Statements are written once and rendered for the connected dialect:
PostgreSQL in deployment, SQLite for tests and local runs.
"""

import logging
from sqlalchemy import text
from sqlalchemy.engine import Engine

from jobportal.db.database import engine as default_engine

logger = logging.getLogger(__name__)

TABLES = [
    "user_login",
    "user_details",
    "freelancer_details",
    "job_posts",
    "job_applications",
]

_DDL = [
    """
    CREATE TABLE IF NOT EXISTS user_login (
        id {pk},
        user_email VARCHAR(255) NOT NULL UNIQUE,
        password VARCHAR(255) NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_details (
        id {pk},
        user_id INTEGER NOT NULL UNIQUE REFERENCES user_login(id),
        name VARCHAR(255),
        age INTEGER,
        role VARCHAR(20) CHECK (role IN ('company', 'freelancer')),
        company_name VARCHAR(255),
        location VARCHAR(255),
        companies TEXT,
        details_completed BOOLEAN NOT NULL DEFAULT FALSE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS freelancer_details (
        id {pk},
        user_id INTEGER NOT NULL UNIQUE REFERENCES user_login(id),
        name VARCHAR(255),
        skills_json TEXT,
        experience INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS job_posts (
        id {pk},
        company_id INTEGER NOT NULL REFERENCES user_login(id),
        title VARCHAR(255) NOT NULL,
        description TEXT NOT NULL,
        location VARCHAR(255),
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS job_applications (
        id {pk},
        job_id INTEGER NOT NULL REFERENCES job_posts(id),
        applicant_id INTEGER NOT NULL REFERENCES user_login(id),
        status VARCHAR(10) NOT NULL DEFAULT 'pending'
            CHECK (status IN ('pending', 'accept', 'reject')),
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        CONSTRAINT uq_job_applicant UNIQUE (job_id, applicant_id)
    )
    """,
]

_PRIMARY_KEYS = {
    "sqlite": "INTEGER PRIMARY KEY AUTOINCREMENT",
    "postgresql": "SERIAL PRIMARY KEY",
}


def render_ddl(dialect_name: str) -> list:
    """Return the CREATE TABLE statements for a dialect."""
    pk = _PRIMARY_KEYS.get(dialect_name, _PRIMARY_KEYS["postgresql"])
    return [stmt.format(pk=pk).strip() for stmt in _DDL]


def init_schema(engine: Engine = None) -> None:
    """Create all tables if they do not exist yet."""
    engine = engine or default_engine
    with engine.begin() as conn:
        for stmt in render_ddl(engine.dialect.name):
            conn.execute(text(stmt))
    logger.info("Schema ready (%s)", engine.dialect.name)


def drop_schema(engine: Engine = None) -> None:
    """Drop every table, children first."""
    engine = engine or default_engine
    with engine.begin() as conn:
        for table in reversed(TABLES):
            conn.execute(text(f"DROP TABLE IF EXISTS {table}"))
    logger.info("Schema dropped")
