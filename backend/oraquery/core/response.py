"""
Response envelope for the HTTP host: { success, message, data }.

Row values come straight from python-oracledb (LOBs are already read to
str/bytes), so only the driver's non-JSON types need converting.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Any

from oraquery.models import OutputItem


def make_json_safe(obj: Any) -> Any:
    """Convert Oracle row values (nested in dicts/lists) to JSON primitives.

    DATE/TIMESTAMP -> ISO string, INTERVAL DAY TO SECOND -> seconds,
    NUMBER as Decimal -> int when integral else float, RAW/BLOB -> text.
    """
    if isinstance(obj, dict):
        return {str(k): make_json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [make_json_safe(v) for v in obj]
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, timedelta):
        return obj.total_seconds()
    if isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).decode("utf-8", errors="replace")
    return obj


def success_envelope(items: list[OutputItem]) -> dict[str, Any]:
    return {
        "success": True,
        "message": None,
        "data": [make_json_safe(item.json) for item in items],
    }


def error_envelope(message: str, **extra: Any) -> dict[str, Any]:
    out: dict[str, Any] = {"success": False, "message": message, "data": []}
    out.update(extra)
    return out
