"""
Engines: parameterized SQL (bind compiler, executor) and QueryRunner.
"""

from oraquery.engines.executor import QueryRunner
from oraquery.engines.sql import compile_query, execute_query, parse_parameters

__all__ = [
    "QueryRunner",
    "compile_query",
    "execute_query",
    "parse_parameters",
]
