"""Restricted candidate list and the three selection policies."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from ..config.enums import SEL_FUZZY_ALPHA_CUT, SEL_FUZZY_BEST, SEL_RANDOM
from .candidates import Candidate


def build_rcl(candidates: Sequence[Candidate], rcl_size: int) -> List[Candidate]:
    """Keep the ``rcl_size`` cheapest entries of an already sorted list."""

    if rcl_size < 1:
        raise ValueError("rcl_size must be >= 1")
    return list(candidates[: min(int(rcl_size), len(candidates))])


def membership(rcl: Sequence[Candidate], max_score: float) -> np.ndarray:
    """Fuzzy membership ``1 - score / max_score``; lower means more rewarding."""

    scores = np.array([c.score for c in rcl], dtype=np.float64)
    if max_score <= 0.0:
        # all rewards are zero: every entry is equally (un)attractive
        return np.ones(scores.shape[0], dtype=np.float64)
    return 1.0 - scores / float(max_score)


def random_selection(size, rng):
    if size < 1:
        raise ValueError("cannot select from an empty RCL")
    return int(rng.integers(size))


def fuzzy_best_selection(rcl, max_score):
    if not rcl:
        raise ValueError("cannot select from an empty RCL")
    return int(np.argmin(membership(rcl, max_score)))


def fuzzy_alpha_cut_selection(rcl, max_score, alpha, rng):
    """Uniform pick among entries inside the alpha-cut, else over the whole RCL."""

    if not rcl:
        raise ValueError("cannot select from an empty RCL")
    inside = np.flatnonzero(membership(rcl, max_score) <= alpha)
    if inside.size > 0:
        return int(inside[random_selection(inside.size, rng)])
    return random_selection(len(rcl), rng)


def select_candidate(rcl, policy, rng, max_score, alpha=0.8):
    """Index into ``rcl`` chosen by the configured policy."""

    if policy == SEL_RANDOM:
        return random_selection(len(rcl), rng)
    if policy == SEL_FUZZY_BEST:
        return fuzzy_best_selection(rcl, max_score)
    if policy == SEL_FUZZY_ALPHA_CUT:
        return fuzzy_alpha_cut_selection(rcl, max_score, alpha, rng)
    raise ValueError(f"unknown selection policy: {policy!r}")
