"""Insertion candidate record and ordering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class Candidate:
    """Cheapest feasible insertion found for one customer."""

    customer: int
    route: int
    predecessor: int
    cost: float  # completion time of the route after the insertion
    score: float


def sort_candidates(candidates: Iterable[Candidate]) -> List[Candidate]:
    """Ascending by insertion cost; ties keep their input order."""

    return sorted(candidates, key=lambda c: c.cost)
