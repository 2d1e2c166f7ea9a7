from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional, Union

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import PersistenceError
from .connection import BoundConnection, DatabaseConnection

ConnectionFactory = Union[DatabaseConnection, BoundConnection]


@contextmanager
def db_cursor(conn_factory: ConnectionFactory, *, dictionary: bool = True):
    """Yield (connection, cursor).

    Standalone factories get a fresh connection that is committed on success and
    rolled back on error. Bound factories reuse the open transaction untouched.
    Driver errors surface as PersistenceError; IntegrityError passes through so
    repositories can map unique-key violations to domain errors.
    """

    if isinstance(conn_factory, BoundConnection):
        conn = conn_factory.connect()
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
        except mysql.connector.IntegrityError:
            raise
        except mysql.connector.Error as e:
            raise PersistenceError(str(e)) from e
        finally:
            cur.close()
        return

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError:
        conn.rollback()
        raise
    except mysql.connector.Error as e:
        conn.rollback()
        raise PersistenceError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def is_duplicate_key(error: mysql.connector.Error) -> bool:
    return getattr(error, "errno", None) == errorcode.ER_DUP_ENTRY


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
