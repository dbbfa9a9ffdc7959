from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

DEFAULT_ADMIN = {
    "name": "Administrator",
    "email": "admin@attendance.local",
    "password": "admin123",
    "job_title": "HR Manager",
    "division": "Human Resources",
}


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Split on ';' outside of quoted literals.
    buf: list[str] = []
    quote: str | None = None

    for ch in sql:
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(conn_factory)
    sql = _strip_comments(Path(schema_path).read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied to %s", conn_factory.config.database)


def ensure_default_admin(conn_factory: DatabaseConnection) -> bool:
    """Create the default administrator if no admin exists. Returns True when created."""

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT user_id FROM users WHERE role=%s LIMIT 1", (Role.ADMIN.value,))
        if cur.fetchone():
            return False

        cur.execute(
            """
            INSERT INTO users (name, email, password_hash, role, job_title, division, join_date)
            VALUES (%s, %s, %s, %s, %s, %s, CURDATE())
            """,
            (
                DEFAULT_ADMIN["name"],
                DEFAULT_ADMIN["email"],
                generate_password_hash(DEFAULT_ADMIN["password"]),
                Role.ADMIN.value,
                DEFAULT_ADMIN["job_title"],
                DEFAULT_ADMIN["division"],
            ),
        )
        conn.commit()
    finally:
        conn.close()

    logger.warning("default administrator created (%s); change its password", DEFAULT_ADMIN["email"])
    return True


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
