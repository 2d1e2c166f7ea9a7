from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Optional

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.logging import get_logger
from .connection import DBConfig

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"
SEED_PATH = Path(__file__).resolve().parent / "seed.sql"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _exec_file(target: DBConfig, path: Path) -> None:
    sql = _strip_create_db_and_use(_strip_comments(path.read_text(encoding="utf-8")))
    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Optional[Path] = None) -> None:
    ensure_database_exists(db_config)
    _exec_file(DBConfig.from_dict(db_config), Path(schema_path or SCHEMA_PATH))
    logger.info("Schema applied to %s", db_config.get("database"))


def apply_seed(db_config: dict, *, seed_path: Optional[Path] = None) -> None:
    target = DBConfig.from_dict(db_config)
    _exec_file(target, Path(seed_path or SEED_PATH))
    ensure_admin(db_config, email="admin@company.com", password="admin123", full_name="Admin Demo")


def ensure_admin(db_config: dict, *, email: str, password: str, full_name: str) -> None:
    """Create or reset the demo admin account."""
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        password_hash = generate_password_hash(password)
        cur.execute("SELECT employee_id FROM employees WHERE email=%s", (email,))
        if cur.fetchone():
            cur.execute(
                "UPDATE employees SET full_name=%s, password_hash=%s, role='admin' WHERE email=%s",
                (full_name, password_hash, email),
            )
        else:
            cur.execute(
                """
                INSERT INTO employees (full_name, email, password_hash, role, annual_leaves, casual_leaves)
                VALUES (%s, %s, %s, 'admin', 0, 0)
                """,
                (full_name, email, password_hash),
            )
        conn.commit()
        logger.info("Demo admin ready: %s", email)
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
