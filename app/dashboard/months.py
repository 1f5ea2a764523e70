"""Rolling window of recent calendar months."""

from __future__ import annotations

from datetime import datetime, timezone


def recent_months(n: int, now: datetime | None = None) -> list[str]:
    """Return the ``n`` most recent month labels, oldest first.

    The window ends at the month of ``now`` (inclusive). Month boundaries are
    taken on the UTC calendar so the result does not depend on the server's
    local timezone. Naive datetimes are treated as already being UTC.

    Args:
        n: Number of months in the window (must be >= 1).
        now: Reference instant; defaults to the current time.

    Returns:
        List of ``YYYY-MM`` labels in ascending order.

    Example:
        >>> recent_months(3, datetime(2024, 1, 15, tzinfo=timezone.utc))
        ['2023-11', '2023-12', '2024-01']
    """
    if n < 1:
        raise ValueError(f"month window must be at least 1, got {n}")

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)

    # Months counted from year 0 so subtraction rolls over year boundaries.
    current = now.year * 12 + (now.month - 1)
    labels = []
    for offset in range(n - 1, -1, -1):
        year, month_index = divmod(current - offset, 12)
        labels.append(f"{year:04d}-{month_index + 1:02d}")
    return labels
