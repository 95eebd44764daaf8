from __future__ import annotations

from abc import ABC, abstractmethod


class RoundingStrategy(ABC):
    """Strategy Pattern: how check-in/check-out minutes are quantized.

    All values are minutes on the work-date timeline.
    """

    @abstractmethod
    def round_check_in(self, minute: int, *, shift_start: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def round_check_out(self, minute: int, *, shift_end: int) -> int:
        raise NotImplementedError
