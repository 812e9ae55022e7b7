"""
Query runner: the single entry point a host calls per query.

compile_query -> apply_limit -> connect -> execute_query -> project.
Parameters are compiled before a connection is opened, so a bad parameter
never costs a round trip to the database.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from oraquery.core.config import settings
from oraquery.core.db import connect
from oraquery.core.param_type import load_parameters
from oraquery.engines.sql import (
    QueryExecutionError,
    apply_limit,
    compile_query,
    execute_query,
    project,
    release_connection,
)
from oraquery.engines.sql.executor import driver_error_code
from oraquery.models import (
    BindValue,
    OracleCredentials,
    OutputItem,
    ParameterDescriptor,
    QueryOptions,
)

_log = logging.getLogger(__name__)


class QueryRunner:
    """
    run(query, params, options, *, credentials=None, connection=None)
    -> list[OutputItem] (one per row, or one wrapping the full result)
    """

    def __init__(self, connect_fn: Callable[[Any], Any] | None = None) -> None:
        self._connect = connect_fn or connect

    def run(
        self,
        query: str,
        params: Iterable[ParameterDescriptor | dict[str, Any]] | None = None,
        options: QueryOptions | Mapping[str, Any] | None = None,
        *,
        credentials: OracleCredentials | Mapping[str, Any] | None = None,
        connection: Any = None,
    ) -> list[OutputItem]:
        """
        Run one parameterized query.

        - params: descriptors or raw host dicts ({name, value, datatype, parseInStatement}).
        - options: QueryOptions or dict ({includeMetadata, rowLimit}).
        - connection: ready connection, closed before returning or raising;
          otherwise one is opened from credentials with connect_fn.

        Raises ParameterBindingError before connecting, QueryExecutionError on
        connect/execute failure.
        """
        try:
            opts, sql, binds = self._prepare(query, params, options)
        except BaseException:
            # A supplied connection is owned by this call from the start
            if connection is not None:
                release_connection(connection)
            raise

        conn = connection if connection is not None else self._open(credentials)
        result = execute_query(conn, sql, binds, include_metadata=opts.include_metadata)
        return project(result, opts.include_metadata)

    def _prepare(
        self,
        query: str,
        params: Iterable[ParameterDescriptor | dict[str, Any]] | None,
        options: QueryOptions | Mapping[str, Any] | None,
    ) -> tuple[QueryOptions, str, Mapping[str, BindValue]]:
        if not query or not query.strip():
            raise ValueError("query is required")
        opts = (
            options
            if isinstance(options, QueryOptions)
            else QueryOptions.model_validate(dict(options or {}))
        )
        descriptors = load_parameters(params)

        compiled = compile_query(
            query, descriptors, trim_list_values=settings.BIND_TRIM_LIST_VALUES
        )
        sql = apply_limit(compiled.sql, opts.row_limit)
        _log.debug("Compiled SQL: %s. Binds: %s", sql, list(compiled.binds))
        return opts, sql, compiled.binds

    def _open(self, credentials: OracleCredentials | Mapping[str, Any] | None) -> Any:
        if credentials is None:
            raise ValueError("credentials or connection is required")
        try:
            return self._connect(credentials)
        except ValueError:
            raise
        except Exception as e:
            _log.error("Connection error: %s", e, exc_info=True)
            raise QueryExecutionError(
                f"Database connection failed: {e}", code=driver_error_code(e)
            ) from e
