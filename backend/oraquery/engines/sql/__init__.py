"""
Parameterized SQL engine.

Exports: compile_query, apply_limit, execute_query, project, parse_parameters.
"""

from oraquery.engines.sql.binder import CompiledQuery, compile_query
from oraquery.engines.sql.executor import (
    ConnectionReleaseError,
    QueryExecutionError,
    execute_query,
    release_connection,
)
from oraquery.engines.sql.limit import apply_limit
from oraquery.engines.sql.parser import parse_parameters
from oraquery.engines.sql.projector import project

__all__ = [
    "CompiledQuery",
    "compile_query",
    "apply_limit",
    "execute_query",
    "project",
    "parse_parameters",
    "QueryExecutionError",
    "ConnectionReleaseError",
    "release_connection",
]
