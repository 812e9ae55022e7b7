"""
Compile SQL + parameter descriptors into (rewritten SQL, bind map).

Plain parameters bind under their own name and leave the SQL untouched.
Expand-as-list parameters split their value on ``,`` into one bind per
segment under synthetic names ``<name>_<random hex>``, and every ``:name``
token is replaced with ``(:<syn1>,:<syn2>,...)`` so the driver binds each
element separately. Parentheses already wrapping the token are reused, so
``IN (:ids)`` and ``IN :ids`` give the same SQL:

    SELECT id FROM t WHERE id IN (:ids)
    -> SELECT id FROM t WHERE id IN (:ids_3f9c...,:ids_a01e...,:ids_77d2...)

Segments are taken literally (``"1, 2"`` keeps the space on ``" 2"``) unless
``trim_list_values`` is set. An empty value yields a single empty segment.

Parameter names must be unique per call. With a repeated name the second
entry no longer finds its placeholder once the first one was expanded and
fails with ParameterBindingError.
"""

import secrets
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import NamedTuple

from oraquery.core.param_type import ParameterBindingError, coerce_bind_value
from oraquery.engines.sql.parser import has_placeholder, replace_placeholder
from oraquery.models import BindValue, ParameterDescriptor

_SUFFIX_BYTES = 8


class CompiledQuery(NamedTuple):
    """Rewritten SQL and its read-only bind map."""

    sql: str
    binds: Mapping[str, BindValue]


def _synthetic_name(base: str, taken: Mapping[str, BindValue]) -> str:
    while True:
        candidate = f"{base}_{secrets.token_hex(_SUFFIX_BYTES)}"
        if candidate not in taken:
            return candidate


def _coerce(param: ParameterDescriptor, raw: object) -> BindValue:
    try:
        return coerce_bind_value(raw, param.data_type)
    except ParameterBindingError as e:
        raise ParameterBindingError(f"Parameter '{param.name}' {e}") from e


def compile_query(
    sql: str,
    params: Iterable[ParameterDescriptor],
    *,
    trim_list_values: bool = False,
) -> CompiledQuery:
    """
    Build the bind map for *params* (in order) and rewrite IN-list placeholders.

    Raises ParameterBindingError when a value cannot be coerced to its declared
    type or a parameter has no ``:name`` placeholder in the SQL.
    """
    binds: dict[str, BindValue] = {}

    for param in params:
        if not has_placeholder(sql, param.name):
            raise ParameterBindingError(
                f"Parameter '{param.name}' has no placeholder :{param.name} in the SQL"
            )

        if not param.expand_as_list:
            binds[param.name] = _coerce(param, param.value)
            continue

        segments = str(param.value).split(",")
        if trim_list_values:
            segments = [s.strip() for s in segments]

        names: list[str] = []
        for segment in segments:
            bind_name = _synthetic_name(param.name, binds)
            binds[bind_name] = _coerce(param, segment)
            names.append(bind_name)

        in_clause = "(" + ",".join(f":{n}" for n in names) + ")"
        sql = replace_placeholder(sql, param.name, in_clause, absorb_parens=True)

    return CompiledQuery(sql=sql, binds=MappingProxyType(binds))
