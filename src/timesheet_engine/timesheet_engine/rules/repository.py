from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRuleSet


class RuleSetRepository(Protocol):
    """Storage interface for rule sets.

    Services depend on this protocol, never on a concrete store.
    """

    def get(self, rule_set_id: str) -> Optional[AttendanceRuleSet]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRuleSet]:
        raise NotImplementedError

    def upsert(self, rule_set: AttendanceRuleSet) -> None:
        raise NotImplementedError

    def delete(self, rule_set_id: str) -> bool:
        raise NotImplementedError
