"""
Execute compiled SQL on a live connection and normalize the result.

- include_metadata=False: list[dict] of rows (column name -> value)
- include_metadata=True: {"metadata": [...], "rows": [...], "rowcount": n}

Autocommit is on, so a successful DML statement is committed right away.
The connection is always closed afterwards; a close failure is logged and
never hides the execution result or error.

Uses core.db (execute, cursor_to_dicts, cursor_metadata).
"""

import logging
from collections.abc import Mapping
from typing import Any

from oraquery.core.db import cursor_metadata, cursor_to_dicts, execute
from oraquery.models import BindValue

_log = logging.getLogger(__name__)


class QueryExecutionError(RuntimeError):
    """Raised when the driver fails to connect or run a statement (not retried)."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class ConnectionReleaseError(RuntimeError):
    """Closing the connection failed; logged, never raised to the caller."""

    pass


def driver_error_code(exc: BaseException) -> str | None:
    """Oracle error code (e.g. ``ORA-00942``, ``DPY-4024``) carried by a driver error."""
    err = exc.args[0] if exc.args else None
    return getattr(err, "full_code", None)


def release_connection(conn: Any) -> None:
    """Close *conn*; a failure is logged as ConnectionReleaseError and not raised."""
    try:
        conn.close()
    except Exception as e:
        err = ConnectionReleaseError(f"Error closing connection: {e}")
        err.__cause__ = e
        _log.warning("%s", err, exc_info=err)


def execute_query(
    conn: Any,
    sql: str,
    binds: Mapping[str, BindValue],
    *,
    include_metadata: bool = False,
) -> list[dict[str, Any]] | dict[str, Any]:
    """
    Run *sql* with *binds* on *conn* and close *conn*.

    Returns rows, or the full result envelope when include_metadata is set.
    Raises QueryExecutionError wrapping the driver error.
    """
    try:
        try:
            conn.autocommit = True
            cur = execute(conn, sql, binds)
            rows = cursor_to_dicts(cur)
            if not include_metadata:
                return rows
            return {
                "metadata": cursor_metadata(cur),
                "rows": rows,
                "rowcount": cur.rowcount if cur.rowcount is not None else 0,
            }
        except Exception as e:
            code = driver_error_code(e)
            _log.error("SQL execution failed: %s. SQL: %s", e, sql, exc_info=True)
            raise QueryExecutionError(f"SQL execution failed: {e}", code=code) from e
    finally:
        release_connection(conn)
