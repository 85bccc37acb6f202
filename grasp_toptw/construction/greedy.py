"""Greedy randomized construction of one complete solution."""

from __future__ import annotations

import numpy as np

from ..config.enums import SEL_FUZZY_ALPHA_CUT, parse_selection_policy
from ..engine.problem import max_score, poi_count, vehicle_count
from ..engine.route_state import add_route, check_invariants, init_solution, route_count
from .evaluation import evaluate_and_sort
from .insertion import apply_insertion, init_departure_times, new_departure_row
from .rcl import build_rcl, select_candidate


def construct_solution(
    data,
    rcl_size=3,
    policy=SEL_FUZZY_ALPHA_CUT,
    rng=None,
    alpha=0.8,
    sol=None,
):
    """Run one greedy randomized pass and return the filled solution.

    The pass starts from a single empty route and repeatedly inserts one of
    the ``rcl_size`` cheapest candidates picked by ``policy``.  When no
    customer fits anywhere a new vehicle route is opened, if one is left.
    Customers that never fit end up in ``sol["unrouted"]``.

    ``sol`` is reset and filled in place when given.
    """

    if rcl_size < 1:
        raise ValueError("rcl_size must be >= 1")
    policy = parse_selection_policy(policy)
    if rng is None:
        rng = np.random.default_rng()

    sol = init_solution(data, sol)
    dep_times = init_departure_times(data)
    pending = list(range(1, poi_count(data) + 1))
    top_score = max_score(data)
    m = vehicle_count(data)

    candidates = evaluate_and_sort(pending, dep_times, sol, data)
    while pending:
        if candidates:
            rcl = build_rcl(candidates, rcl_size)
            chosen = rcl[select_candidate(rcl, policy, rng, top_score, alpha)]
            pending.remove(chosen.customer)
            apply_insertion(chosen, sol, dep_times, data)
        elif route_count(sol) < m:
            k = add_route(sol)
            dep_times[k] = new_departure_row(data)
        else:
            break
        candidates = evaluate_and_sort(pending, dep_times, sol, data)

    check_invariants(sol)
    sol["dep_times"] = dep_times
    sol["unrouted"] = np.array(sorted(pending), dtype=np.int64)
    return sol
