def availability_percentage(available: int, unavailable: int) -> float:
    """Share of known users available for a slot, as an unrounded percentage.

    Raises:
        ValueError: If there are no known users at all.
    """
    total = available + unavailable
    if total == 0:
        raise ValueError("availability percentage is undefined without known users")
    return available / total * 100
