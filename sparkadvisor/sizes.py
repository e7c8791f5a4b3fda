"""Parse and format human-readable data sizes (pure functions)."""
import math
import re

UNITS = ["B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]
UNIT_MULTIPLIERS = {unit: 1024 ** i for i, unit in enumerate(UNITS)}
GB = 1024 ** 3

# Sign is captured so negative values get a specific message instead of a format error.
_SIZE_RE = re.compile(r"^(-?[\d.]+(?:[eE][+-]?\d+)?)\s*([a-zA-Z]*)$")


class InvalidSizeError(ValueError):
    """Malformed size: empty, non-numeric, negative, or an unknown unit."""


def parse_size(size: str) -> int:
    """
    Parse "1.5 GB", "1024MB", "2e3kb" or "512" into bytes.
    Units are binary (KB = 1024 B), case-insensitive; no unit means bytes.
    """
    if not size or not size.strip():
        raise InvalidSizeError("Invalid data size: empty string")
    trimmed = size.strip()
    match = _SIZE_RE.match(trimmed)
    if not match:
        raise InvalidSizeError(f"Invalid data size format: {size}")
    value_str, unit = match.group(1), match.group(2).upper()
    try:
        value = float(value_str)
    except ValueError:
        raise InvalidSizeError(f"Invalid numeric value: {value_str}") from None
    if math.isnan(value) or math.isinf(value):
        raise InvalidSizeError(f"Invalid numeric value: {value_str}")
    if value < 0:
        raise InvalidSizeError(f"Data size cannot be negative: {size}")
    if not unit:
        return int(value)
    multiplier = UNIT_MULTIPLIERS.get(unit)
    if multiplier is None:
        raise InvalidSizeError(f"Unknown unit: {unit}")
    size_bytes = value * multiplier
    if math.isinf(size_bytes):
        raise InvalidSizeError(f"Data size too large: {size}")
    return int(size_bytes)


def resolve_size(value: int | float | str) -> int:
    """Byte count from either a number of bytes or a size string."""
    if isinstance(value, str):
        return parse_size(value)
    if isinstance(value, bool) or math.isnan(value) or math.isinf(value):
        raise InvalidSizeError(f"Invalid data size: {value!r}")
    if value < 0:
        raise InvalidSizeError(f"Data size cannot be negative: {value}")
    return int(value)


def to_gb(size_bytes: int | float) -> float:
    return size_bytes / GB


def format_bytes(size_bytes: int | float, decimals: int = 2) -> str:
    """Format bytes as e.g. "1.50 GB". Plain byte counts keep no decimals ("100 B")."""
    if size_bytes <= 0:
        return "0 B"
    dm = max(decimals, 0)
    index = 0
    while index < len(UNITS) - 1 and size_bytes >= 1024 ** (index + 1):
        index += 1
    if index == 0:
        return f"{size_bytes:g} B"
    return f"{size_bytes / 1024 ** index:.{dm}f} {UNITS[index]}"
