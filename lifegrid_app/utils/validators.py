"""Request parameter parsing for the API routes"""

from typing import Optional, Any


def safe_int(value: Any, field: str, min_value: Optional[int] = None, max_value: Optional[int] = None, default: Optional[int] = None) -> int:
    """Parse an integer request parameter, clamped to optional bounds.

    Args:
        value: Raw value from JSON or query string
        field: Field name for error messages
        min_value: Lower clamp
        max_value: Upper clamp
        default: Returned when value is None (raises if not provided)

    Returns:
        Validated integer

    Raises:
        ValueError: If value cannot be parsed and no default provided
    """
    if value is None:
        if default is not None:
            return default
        raise ValueError(f"{field} is required")

    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field} must be an integer") from exc

    if min_value is not None and parsed < min_value:
        parsed = min_value
    if max_value is not None and parsed > max_value:
        parsed = max_value
    return parsed


def parse_bool(value: Any, default: bool = False) -> bool:
    """Parse bool-like values from JSON/query payloads."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
