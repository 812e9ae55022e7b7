"""
Find and replace ``:name`` bind placeholders in SQL text.

A placeholder is ``:`` + name where the colon does not follow an identifier
character (or another colon) and the name is not followed by one, so ``:cat``
never matches inside ``:category`` or ``x:cat``. Names match without regard
to case, as Oracle resolves unquoted bind names. Quoted literals
(``'...'``, ``q'[...]'``), quoted identifiers (``"..."``) and comments
(``--``, ``/* */``) are skipped: Oracle does not bind inside them, so neither
do we.
"""

import re
from functools import lru_cache

_IDENT = "A-Za-z0-9_$#"
_ANY_PLACEHOLDER = re.compile(rf"(?<![{_IDENT}:]):([A-Za-z][{_IDENT}]*)")

# Alternative quoting q'<delim>...<closer>'
_Q_CLOSERS = {"[": "]", "{": "}", "<": ">", "(": ")"}


def _is_ident(ch: str) -> bool:
    return ch.isalnum() or ch in "_$#"


def _starts_q_quote(sql: str, i: int) -> bool:
    """True if ``sql[i]`` is the q of ``q'`` / ``nq'`` alternative quoting."""
    if sql[i] not in "qQ" or sql[i + 1 : i + 2] != "'" or i + 2 >= len(sql):
        return False
    if i == 0 or not _is_ident(sql[i - 1]):
        return True
    # National character variant nq'...'
    return sql[i - 1] in "nN" and (i == 1 or not _is_ident(sql[i - 2]))


def _skip_literal(sql: str, i: int) -> int | None:
    """Return the end index of a literal/comment starting at *i*, or None."""
    length = len(sql)
    ch = sql[i]

    if _starts_q_quote(sql, i):
        delim = sql[i + 2]
        close = sql.find(_Q_CLOSERS.get(delim, delim) + "'", i + 3)
        return length if close == -1 else close + 2

    if ch == "'":
        j = i + 1
        while True:
            k = sql.find("'", j)
            if k == -1:
                return length
            if sql[k + 1 : k + 2] == "'":
                j = k + 2
                continue
            return k + 1

    if ch == '"':
        k = sql.find('"', i + 1)
        return length if k == -1 else k + 1

    if sql.startswith("--", i):
        k = sql.find("\n", i)
        return length if k == -1 else k + 1

    if sql.startswith("/*", i):
        k = sql.find("*/", i + 2)
        return length if k == -1 else k + 2

    return None


def _code_spans(sql: str) -> list[tuple[int, int]]:
    """(start, end) ranges of *sql* outside literals and comments."""
    spans: list[tuple[int, int]] = []
    start = 0
    i = 0
    length = len(sql)
    while i < length:
        end = _skip_literal(sql, i)
        if end is None:
            i += 1
            continue
        if i > start:
            spans.append((start, i))
        start = i = end
    if start < length:
        spans.append((start, length))
    return spans


@lru_cache(maxsize=256)
def _placeholder_pattern(name: str) -> re.Pattern[str]:
    return re.compile(
        rf"(?<![{_IDENT}:]):{re.escape(name)}(?![{_IDENT}])", re.IGNORECASE
    )


def _find_placeholders(sql: str, name: str) -> list[re.Match[str]]:
    pattern = _placeholder_pattern(name)
    return [m for start, end in _code_spans(sql) for m in pattern.finditer(sql, start, end)]


def has_placeholder(sql: str, name: str) -> bool:
    """True if ``:name`` occurs in *sql* as a whole placeholder token."""
    return bool(_find_placeholders(sql, name))


def _enclosing_parens(sql: str, start: int, end: int) -> tuple[int, int] | None:
    """Span of ``( :name )`` around the token at [start, end), if any."""
    i = start - 1
    while i >= 0 and sql[i].isspace():
        i -= 1
    j = end
    while j < len(sql) and sql[j].isspace():
        j += 1
    if i >= 0 and sql[i] == "(" and j < len(sql) and sql[j] == ")":
        return i, j + 1
    return None


def replace_placeholder(
    sql: str,
    name: str,
    replacement: str,
    *,
    absorb_parens: bool = False,
) -> str:
    """
    Replace every ``:name`` token in *sql* with *replacement* (taken literally).

    absorb_parens: a token wrapped alone in parentheses, ``(:name)``, is
    replaced together with them.
    """
    parts: list[str] = []
    last = 0
    for m in _find_placeholders(sql, name):
        start, end = m.span()
        if absorb_parens:
            start, end = _enclosing_parens(sql, start, end) or (start, end)
        parts.append(sql[last:start])
        parts.append(replacement)
        last = end
    parts.append(sql[last:])
    return "".join(parts)


def parse_parameters(sql: str) -> list[str]:
    """
    Extract placeholder names used in *sql*, in order of first appearance.
    Spellings differing only in case count once, as first written.

    Returns a list of names (without the colon) that should be supplied as parameters.
    """
    seen: dict[str, str] = {}
    for start, end in _code_spans(sql):
        for m in _ANY_PLACEHOLDER.finditer(sql, start, end):
            seen.setdefault(m.group(1).upper(), m.group(1))
    return list(seen.values())
