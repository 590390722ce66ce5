"""
PostgreSQL connection helpers for the user database.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator

import psycopg2
from psycopg2.extensions import connection as PGConnection, cursor as PGCursor

from sagiri.config import config

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT_SECONDS = 5


def _get_db_params() -> Dict[str, object]:
    """
    Collect connection keyword arguments from the configuration.

    Raises:
        ValueError: If host, name, user or password is not configured.
    """
    params = {
        "host": config.DB_HOST,
        "port": config.DB_PORT,
        "dbname": config.DB_NAME,
        "user": config.DB_USER,
        "password": config.DB_PASSWORD,
    }
    missing = [name for name in ("host", "dbname", "user", "password") if not params[name]]
    if missing:
        logger.error(f"Missing database settings: {', '.join(missing)}")
        raise ValueError("Missing required database environment variables")
    return params


def get_connection() -> PGConnection:
    """Open a new connection to the user database."""
    params = _get_db_params()
    logger.info(f"Connecting to database {params['dbname']} at {params['host']}:{params['port']}")
    return psycopg2.connect(
        connect_timeout=CONNECT_TIMEOUT_SECONDS,
        application_name="sagiri",
        **params,
    )


@contextmanager
def get_cursor(readonly: bool = False) -> Iterator[PGCursor]:
    """
    Yield a cursor inside a transaction that is committed on success.

    Usage:
        with get_cursor(readonly=True) as cur:
            cur.execute(...)
    """
    conn = get_connection()
    try:
        conn.set_session(readonly=readonly)
        with conn.cursor() as cur:
            yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        logger.exception("Database operation failed")
        raise
    finally:
        conn.close()
