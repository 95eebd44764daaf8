from __future__ import annotations

import threading
from typing import Optional, Sequence

from .model import AttendanceRuleSet
from .repository import RuleSetRepository


class InMemoryRuleSetRepository(RuleSetRepository):
    def __init__(self, rule_sets: Sequence[AttendanceRuleSet] = ()):
        self._lock = threading.Lock()
        self._by_id: dict[str, AttendanceRuleSet] = {r.rule_set_id: r for r in rule_sets}

    def get(self, rule_set_id: str) -> Optional[AttendanceRuleSet]:
        return self._by_id.get(rule_set_id)

    def list_all(self) -> Sequence[AttendanceRuleSet]:
        with self._lock:
            return list(self._by_id.values())

    def upsert(self, rule_set: AttendanceRuleSet) -> None:
        with self._lock:
            self._by_id[rule_set.rule_set_id] = rule_set

    def delete(self, rule_set_id: str) -> bool:
        with self._lock:
            return self._by_id.pop(rule_set_id, None) is not None
