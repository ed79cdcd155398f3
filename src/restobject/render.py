"""Display rendering of JSON values for the flattened observed field map."""

from __future__ import annotations

import json
from typing import Any, Mapping


def display(value: Any) -> str:
    """Render one JSON value as a display string.

    Strings come back verbatim; everything else is compact JSON, so ``42``
    stays ``"42"``, ``True`` becomes ``"true"``, ``None`` becomes ``"null"``
    and nested objects and lists keep their JSON shape.
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def flatten(data: Mapping[str, Any]) -> dict[str, str]:
    return {key: display(value) for key, value in data.items()}
