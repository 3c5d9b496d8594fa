from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, TypeVar

import mysql.connector

from ..core.constants import DB_MAX_RETRIES, DB_RETRY_BASE_DELAY
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Connection-level failures (server asleep, dropped socket, refused connect).
TRANSIENT_ERRORS = (mysql.connector.errors.InterfaceError, mysql.connector.errors.OperationalError)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, rollback on error."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def with_retry(
    operation: Callable[[], T],
    *,
    max_retries: int = DB_MAX_RETRIES,
    base_delay: float = DB_RETRY_BASE_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run ``operation``, retrying transient connection failures.

    At most ``max_retries`` extra attempts are made; the n-th retry waits
    ``base_delay * n`` seconds. Any other error propagates immediately.
    """
    attempt = 0
    while True:
        try:
            return operation()
        except TRANSIENT_ERRORS as e:
            attempt += 1
            if attempt > max_retries:
                raise
            delay = base_delay * attempt
            logger.warning("Database connection attempt %d failed (%s), retrying in %.2fs", attempt, e, delay)
            sleep(delay)


def retrying(method: Callable[..., T]) -> Callable[..., T]:
    """Repository method decorator applying ``with_retry``."""

    @wraps(method)
    def wrapper(*args, **kwargs) -> T:
        return with_retry(lambda: method(*args, **kwargs))

    return wrapper
