# -*- coding: utf-8 -*-
"""
Status transition matrix.

The canonical form is a sparse set of allowed ``(from_status, to_status)``
pairs. With no configured workflow every pair of distinct statuses is allowed.
The dense ``{from: {to: bool}}`` grid only exists for the editor.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from tracker.constants import ALL_STATUSES

Pair = Tuple[str, str]


class TransitionMatrix:

    def __init__(self, pairs: Optional[Iterable[Pair]] = None, statuses: Sequence[str] = ALL_STATUSES):
        self.statuses: List[str] = list(statuses)
        self.configured = pairs is not None
        if pairs is None:
            allowed = {(a, b) for a in self.statuses for b in self.statuses if a != b}
        else:
            allowed = {
                (str(a), str(b)) for a, b in pairs
                if a != b and a in self.statuses and b in self.statuses
            }
        self._allowed = frozenset(allowed)

    @classmethod
    def default(cls, statuses: Sequence[str] = ALL_STATUSES) -> "TransitionMatrix":
        return cls(None, statuses)

    @classmethod
    def from_grid(cls, grid: Dict[str, Dict[str, bool]], statuses: Sequence[str] = ALL_STATUSES) -> "TransitionMatrix":
        pairs = [
            (from_status, to_status)
            for from_status, row in (grid or {}).items()
            for to_status, allowed in (row or {}).items()
            if allowed
        ]
        return cls(pairs, statuses)

    def is_allowed(self, from_status: str, to_status: str) -> bool:
        if from_status == to_status:
            return False
        return (from_status, to_status) in self._allowed

    def targets(self, from_status: str) -> List[str]:
        return [s for s in self.statuses if self.is_allowed(from_status, s)]

    def to_pairs(self) -> List[Pair]:
        return [
            (a, b) for a in self.statuses for b in self.statuses
            if (a, b) in self._allowed
        ]

    def to_grid(self) -> Dict[str, Dict[str, bool]]:
        return {
            a: {b: (a, b) in self._allowed for b in self.statuses}
            for a in self.statuses
        }

    def __contains__(self, pair: Pair) -> bool:
        return self.is_allowed(*pair)

    def __len__(self) -> int:
        return len(self._allowed)
