"""
Oracle connection helpers (python-oracledb).

Thin mode (pure Python) by default; ``thin_mode=False`` switches the whole
process to thick mode by loading the Oracle Client libraries once. The
driver cannot go back to thin mode after that.
"""

import logging
import threading
from collections.abc import Mapping
from typing import Any

import oracledb

from oraquery.core.config import settings
from oraquery.models import BindValue, DataTypeEnum, OracleCredentials

_log = logging.getLogger(__name__)

_thick_lock = threading.Lock()
_thick_initialized = False


def _init_thick_mode() -> None:
    """Load the Oracle Client libraries once per process (double-checked locking)."""
    global _thick_initialized
    if _thick_initialized:
        return
    with _thick_lock:
        if _thick_initialized:
            return
        oracledb.init_oracle_client(lib_dir=settings.ORACLE_CLIENT_LIB_DIR)
        _thick_initialized = True
        _log.info(
            "Oracle Client initialized (thick mode), lib_dir=%s",
            settings.ORACLE_CLIENT_LIB_DIR,
        )


def connect(credentials: OracleCredentials | Mapping[str, Any]) -> Any:
    """
    Open a connection from OracleCredentials or a credentials dict.

    - credentials: user, password, connection_string (or connectionString),
      thin_mode (or thinMode).
    """
    creds = (
        credentials
        if isinstance(credentials, OracleCredentials)
        else OracleCredentials.model_validate(dict(credentials))
    )
    for name, val in [
        ("user", creds.user),
        ("connection_string", creds.connection_string),
    ]:
        if not val:
            raise ValueError(f"credentials must provide {name}")

    if not creds.thin_mode:
        _init_thick_mode()
    elif _thick_initialized:
        _log.warning(
            "Thin mode requested but the Oracle Client is already loaded; "
            "connecting in thick mode"
        )

    return oracledb.connect(
        user=creds.user,
        password=creds.password,
        dsn=creds.connection_string,
        tcp_connect_timeout=settings.EXTERNAL_DB_CONNECT_TIMEOUT,
    )


def _bind_variables(cursor: Any, binds: Mapping[str, BindValue]) -> dict[str, Any]:
    """Create one typed driver variable per bind (NUMBER or VARCHAR)."""
    out: dict[str, Any] = {}
    for name, bind in binds.items():
        if bind.type == DataTypeEnum.NUMBER:
            var = cursor.var(oracledb.DB_TYPE_NUMBER)
        else:
            size = max(len(str(bind.value).encode()), 1)
            var = cursor.var(oracledb.DB_TYPE_VARCHAR, size)
        var.setvalue(0, bind.value)
        out[name] = var
    return out


def execute(
    conn: Any,
    sql: str,
    binds: Mapping[str, BindValue] | None = None,
) -> Any:
    """
    Execute SQL and return the cursor. Caller uses cursor_to_dicts(cursor) or cursor.rowcount.

    EXTERNAL_DB_STATEMENT_TIMEOUT (seconds) is applied as the connection's
    call_timeout; a timed-out call raises the driver error.
    """
    timeout_sec = settings.EXTERNAL_DB_STATEMENT_TIMEOUT
    if timeout_sec is not None and timeout_sec > 0:
        conn.call_timeout = int(timeout_sec * 1000)

    cur = conn.cursor()
    if binds:
        cur.execute(sql, _bind_variables(cur, binds))
    else:
        cur.execute(sql)
    return cur


def _read_value(value: Any) -> Any:
    # LOB locators are only readable while the connection is open
    if isinstance(value, oracledb.LOB):
        return value.read()
    return value


def cursor_to_dicts(cursor: Any) -> list[dict[str, Any]]:
    """Convert cursor result to list of dicts (column name -> value), CLOB/BLOB read to str/bytes."""
    desc = cursor.description
    if not desc:
        return []
    names = [d[0] for d in desc]
    return [
        dict(zip(names, (_read_value(v) for v in row), strict=True))
        for row in cursor.fetchall()
    ]


def cursor_metadata(cursor: Any) -> list[dict[str, Any]]:
    """Column metadata from the DB-API description (one dict per column)."""
    desc = cursor.description
    if not desc:
        return []
    out: list[dict[str, Any]] = []
    for d in desc:
        type_code = d[1]
        out.append(
            {
                "name": d[0],
                "type": getattr(type_code, "name", None) or str(type_code),
                "display_size": d[2],
                "internal_size": d[3],
                "precision": d[4],
                "scale": d[5],
                "nullable": d[6],
            }
        )
    return out
