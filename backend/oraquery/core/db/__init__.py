"""
Oracle connection helpers for the query engine.

python-oracledb is installed via pip; OracleCredentials is enough to connect.
"""

from .driver import connect, cursor_metadata, cursor_to_dicts, execute

__all__ = [
    "connect",
    "execute",
    "cursor_to_dicts",
    "cursor_metadata",
]
