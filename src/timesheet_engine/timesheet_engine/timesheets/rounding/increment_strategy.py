from __future__ import annotations

from .base import RoundingStrategy


def floor_to(minute: int, increment: int) -> int:
    return minute - minute % increment


def ceil_to(minute: int, increment: int) -> int:
    return -(-minute // increment) * increment


def nearest_to(minute: int, increment: int, *, ties_up: bool) -> int:
    remainder = minute % increment
    if remainder * 2 > increment or (remainder * 2 == increment and ties_up):
        return ceil_to(minute, increment)
    return floor_to(minute, increment)


class IncrementRounding(RoundingStrategy):
    """Policies ``nearest_15`` / ``nearest_30``.

    Each timestamp rounds toward the scheduled boundary, never in the employee's favour:

    * check-in after shift start rounds up (grace only reduces late minutes);
    * on-time check-in rounds to the nearest boundary, ties up, never past shift start;
    * check-out before shift end rounds down;
    * check-out at/after shift end rounds to the nearest boundary, ties down, never
      before shift end.
    """

    def __init__(self, increment: int):
        if increment <= 0:
            raise ValueError("increment must be positive")
        self.increment = increment

    def round_check_in(self, minute: int, *, shift_start: int) -> int:
        if minute > shift_start:
            return ceil_to(minute, self.increment)
        return min(nearest_to(minute, self.increment, ties_up=True), shift_start)

    def round_check_out(self, minute: int, *, shift_end: int) -> int:
        if minute < shift_end:
            return floor_to(minute, self.increment)
        return max(nearest_to(minute, self.increment, ties_up=False), shift_end)
