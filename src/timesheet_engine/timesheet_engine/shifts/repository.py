from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ShiftTemplate


class ShiftRepository(Protocol):
    def get(self, shift_id: str) -> Optional[ShiftTemplate]:
        raise NotImplementedError

    def list_all(self) -> Sequence[ShiftTemplate]:
        raise NotImplementedError

    def upsert(self, shift: ShiftTemplate) -> None:
        raise NotImplementedError

    def delete(self, shift_id: str) -> bool:
        raise NotImplementedError


class ShiftAssignmentRepository(Protocol):
    """Employee -> shift id map."""

    def get_shift_id(self, employee_id: str) -> Optional[str]:
        raise NotImplementedError

    def assign(self, employee_id: str, shift_id: str) -> None:
        raise NotImplementedError

    def unassign(self, employee_id: str) -> bool:
        raise NotImplementedError

    def employees_for_shift(self, shift_id: str) -> Sequence[str]:
        raise NotImplementedError
