from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_int(value: float) -> int:
    return int(round_half_up(value))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def fit_durations(durations: list[int], total: int) -> list[int]:
    # Largest remainder; ties go to the earlier step.
    current_total = sum(durations)
    if current_total <= 0:
        return list(durations)

    shares = [divmod(duration * total, current_total) for duration in durations]
    fitted = [share for share, _ in shares]
    shortfall = total - sum(fitted)
    by_remainder = sorted(range(len(durations)), key=lambda index: (-shares[index][1], index))
    for index in by_remainder[:shortfall]:
        fitted[index] += 1
    return fitted
