"""Helpers shared by the store services."""

MAX_PAGE_SIZE = 200


def clamp_limit(limit, default: int, maximum: int = MAX_PAGE_SIZE) -> int:
    """Parse a page size, falling back to ``default`` and clamping to [1, maximum]."""
    if limit is None or isinstance(limit, bool):
        value = default
    else:
        try:
            value = int(limit)
        except (TypeError, ValueError):
            value = default
    return max(1, min(value, maximum))
