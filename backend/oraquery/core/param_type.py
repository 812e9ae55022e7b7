"""
Parameter type validation and coercion.

Coerces raw parameter values (text from the host, or numbers) into
``BindValue`` according to ``ParameterDescriptor.data_type``. Runs inside the
bind compiler, before any connection work.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from oraquery.models import BindValue, DataTypeEnum, ParameterDescriptor

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


class ParameterBindingError(ValueError):
    """Raised when a parameter cannot be turned into a bind (name, type, placeholder)."""

    pass


def _coerce_string(value: Any) -> str:
    if value is None:
        raise ParameterBindingError("Value is empty")
    return str(value)


def _coerce_number(value: Any) -> int | float:
    if value is None:
        raise ParameterBindingError("Value is empty")
    if isinstance(value, bool):
        raise ParameterBindingError("Boolean not allowed for number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ParameterBindingError(f"Invalid number: {value!r}")
        return value
    s = str(value).strip()
    if not s:
        # Empty text binds as zero
        return 0
    if _INTEGER_RE.match(s):
        try:
            return int(s)
        except ValueError as e:
            # Past the interpreter's int digit limit
            raise ParameterBindingError(f"Invalid number: {s[:32]}... ({len(s)} digits)") from e
    if "_" in s:
        raise ParameterBindingError(f"Invalid number: {s!r}")
    try:
        x = float(s)
    except ValueError as e:
        raise ParameterBindingError(f"Invalid number: {s!r}") from e
    if not math.isfinite(x):
        raise ParameterBindingError(f"Invalid number: {s!r}")
    return x


_COERCERS = {
    DataTypeEnum.STRING: _coerce_string,
    DataTypeEnum.NUMBER: _coerce_number,
}


def coerce_bind_value(value: Any, data_type: DataTypeEnum) -> BindValue:
    """Coerce *value* to the Python type bound for *data_type*."""
    return BindValue(type=data_type, value=_COERCERS[data_type](value))


def load_parameters(
    params: Iterable[ParameterDescriptor | dict[str, Any]] | None,
) -> list[ParameterDescriptor]:
    """
    Build descriptors from host input, keeping the supplied order.

    - params: ParameterDescriptor instances or raw dicts such as
      {name, value, datatype, parseInStatement}.

    Raises ParameterBindingError on the first invalid entry.
    """
    out: list[ParameterDescriptor] = []
    for index, raw in enumerate(params or []):
        if isinstance(raw, ParameterDescriptor):
            out.append(raw)
            continue
        if not isinstance(raw, dict):
            raise ParameterBindingError(
                f"Parameter #{index} must be an object, got {type(raw).__name__}"
            )
        try:
            out.append(ParameterDescriptor.model_validate(raw))
        except ValidationError as e:
            label = raw.get("name") or f"#{index}"
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}"
                for err in e.errors()
            )
            raise ParameterBindingError(f"Parameter '{label}' {problems}") from e
    return out
