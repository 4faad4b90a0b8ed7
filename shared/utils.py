"""Shared utility functions."""
import json
import math
from typing import Any, Dict, List


def to_camel(name: str) -> str:
    """Convert a snake_case name to camelCase."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def build_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Build a backend parameter dict: camelCase keys, None values dropped."""
    return {to_camel(key): value for key, value in params.items() if value is not None}


def parse_json_list(raw: Any) -> List[Any]:
    """Parse a JSON array string, returning an empty list on bad input."""
    if not raw:
        return []
    if isinstance(raw, list):
        return raw
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return []
    return parsed if isinstance(parsed, list) else []


def ceil_div(numerator: int, denominator: int) -> int:
    """Ceiling division for non-negative integers."""
    if denominator <= 0:
        return 0
    return math.ceil(numerator / denominator)
