"""Map an execution result to output items."""

from typing import Any

from oraquery.models import OutputItem


def project(
    result: list[dict[str, Any]] | dict[str, Any],
    include_metadata: bool,
) -> list[OutputItem]:
    """
    include_metadata: one item wrapping the whole envelope (even with zero rows).
    Otherwise one item per row; no rows -> no items.
    """
    if include_metadata:
        if not isinstance(result, dict):
            raise TypeError(
                f"Expected result envelope (dict), got {type(result).__name__}"
            )
        return [OutputItem(json=result)]
    return [OutputItem(json=row) for row in result]
