import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from negative infinity, the way display figures are rounded.

    Python's built-in ``round`` rounds halves to even, which would turn 22.25
    into 22.2 and 2.5 into 2. Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    factor = 10 ** ndigits
    result = math.floor(value * factor + 0.5) / factor
    return int(result) if ndigits == 0 else result
