from __future__ import annotations

from .base import RoundingStrategy


class ExactRounding(RoundingStrategy):
    """Policy ``none``: timestamps are used to the minute."""

    def round_check_in(self, minute: int, *, shift_start: int) -> int:
        return minute

    def round_check_out(self, minute: int, *, shift_end: int) -> int:
        return minute
