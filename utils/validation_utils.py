"""
utils/validation_utils.py

Purpose: Input presence checks

- Required-field detection (absent, null or empty string)
- Comma-separated field splitting
"""

from typing import Any, Dict, List


def is_blank(value: Any) -> bool:
    """
    True for None, empty strings and whitespace-only strings.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def missing_fields(values: Dict[str, Any]) -> List[str]:
    """
    Lists the keys whose values are blank, in insertion order.

    Args:
        values: Field name to submitted value

    Returns:
        Names of the missing fields
    """
    return [name for name, value in values.items() if is_blank(value)]


def split_positional(text: str, names: List[str], separator: str = ",") -> Dict[str, str]:
    """
    Splits text on separator and maps the trimmed segments to names by
    position. Names without a segment map to an empty string; segments
    beyond len(names) are ignored.

    Example:
        split_positional("a, b", ["x", "y", "z"]) -> {"x": "a", "y": "b", "z": ""}
    """
    segments = [segment.strip() for segment in text.split(separator)]
    return {
        name: segments[index] if index < len(segments) else ""
        for index, name in enumerate(names)
    }
