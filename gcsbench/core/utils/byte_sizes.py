"""Helpers for parsing and printing byte quantities."""

_UNIT_MULTIPLIERS: dict[str, int] = {
    "b": 1,
    "k": 1024,
    "kb": 1024,
    "m": 1024**2,
    "mb": 1024**2,
    "g": 1024**3,
    "gb": 1024**3,
    "t": 1024**4,
    "tb": 1024**4,
}

_HUMAN_UNITS = ("KB", "MB", "GB", "TB", "PB", "EB")


def parse_bytes(value: int | str) -> int:
    """Parse a byte quantity from an integer or unit-suffixed string.

    Supported string units (case-insensitive, binary multiples):
        b, k, kb, m, mb, g, gb, t, tb

    Args:
        value: Raw byte value as an ``int`` or string with an optional unit
            suffix, e.g. ``"4KB"`` or ``"256kb"``.

    Returns:
        The parsed value in bytes.

    Raises:
        ValueError: If the input cannot be parsed or contains an unknown unit.
    """
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Invalid byte value: {value!r}")
        return value

    normalized_value = str(value).strip().lower()

    if normalized_value.isdigit():
        return int(normalized_value)

    numeric_part = ""
    unit_suffix = ""
    for character in normalized_value:
        if character.isdigit() and not unit_suffix:
            numeric_part += character
        else:
            unit_suffix += character

    if not numeric_part or not unit_suffix:
        raise ValueError(f"Invalid byte value: {value!r}")

    multiplier = _UNIT_MULTIPLIERS.get(unit_suffix.strip())
    if multiplier is None:
        raise ValueError(f"Unknown byte unit in value: {value!r}")

    return int(numeric_part) * multiplier


def format_bytes(num_bytes: float) -> str:
    """Render a byte quantity with the largest fitting binary unit.

    Examples: ``512 B``, ``4.0 KB``, ``1.5 MB``.
    """
    if num_bytes < 1024:
        return f"{int(num_bytes)} B"

    value = float(num_bytes)
    unit = _HUMAN_UNITS[0]
    for unit in _HUMAN_UNITS:
        value /= 1024
        if value < 1024:
            break
    return f"{value:.1f} {unit}"


def format_rate(bytes_per_second: float) -> str:
    """Render a throughput value, e.g. ``12.3 MB/s``."""
    return f"{format_bytes(bytes_per_second)}/s"
