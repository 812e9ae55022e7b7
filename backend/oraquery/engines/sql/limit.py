"""
Row limit clause (Oracle 12c+ row limiting).

The clause is appended verbatim: a trailing ``;``, an existing
FETCH/OFFSET clause or a FOR UPDATE are not detected. Callers supply SQL that
accepts a trailing ``FETCH FIRST n ROWS ONLY``.
"""


def apply_limit(sql: str, row_limit: int) -> str:
    """Return *sql* with ``FETCH FIRST row_limit ROWS ONLY`` appended; 0 = no limit."""
    if row_limit < 0:
        raise ValueError(f"row_limit must be >= 0, got {row_limit}")
    if row_limit == 0:
        return sql
    return f"{sql} FETCH FIRST {int(row_limit)} ROWS ONLY"
