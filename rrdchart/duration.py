"""Compact labels for durations, used by the resolution picker."""


def format_duration(s: int) -> str:
    """Format a second count as a short, lossy label.

    Examples: 45 -> '45s', 130 -> '2:10 min', 300 -> '5 min', 3600 -> '1 hrs',
    86400 -> '24 hrs', 259200 -> '3 days', 31536000 -> '12 months'.
    """
    if s < 0:
        raise ValueError(f"Duration must be non-negative, got {s}")

    if s < 60:
        return f"{s}s"

    m, s60 = divmod(s, 60)
    if m < 10 and s60 > 9:
        return f"{m}:{s60} min"
    if m < 60:
        return f"{m} min"

    h, m60 = divmod(m, 60)
    if h < 12 and m60 > 9:
        return f"{h}:{m60} hrs"
    if h < 48:
        return f"{h} hrs"

    d, h24 = divmod(h, 24)
    if d < 7 and h24 > 0:
        return f"{d} days {h24}h"
    if d < 60:
        return f"{d} days"

    # Months are 30 days; the leftover days are dropped
    return f"{d // 30} months"
