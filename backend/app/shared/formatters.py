"""
Formatting utilities for display.
"""

_SIZE_UNITS = ["B", "KB", "MB", "GB"]


def format_size(num_bytes: int) -> str:
    """
    Format bytes as a human-readable size.

    Args:
        num_bytes: Size in bytes

    Returns:
        Formatted string (e.g., '0 B', '1.5 KB', '2.25 MB')
    """
    if num_bytes <= 0:
        return "0 B"

    exponent = 0
    while num_bytes >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    value = round(num_bytes / 1024 ** exponent, 2)
    if value == int(value):
        value = int(value)
    return f"{value} {_SIZE_UNITS[exponent]}"


def format_bucket_size(seconds: int) -> str:
    """
    Format a histogram bucket size.

    Args:
        seconds: Bucket width in seconds

    Returns:
        '1-minute buckets' for 60, '30-second buckets' for 30
    """
    if seconds >= 60:
        minutes = seconds / 60
        minutes_text = f"{minutes:g}"
        return f"{minutes_text}-minute buckets"
    return f"{seconds}-second buckets"
