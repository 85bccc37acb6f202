"""Departure-time table and the insertion applier."""

from __future__ import annotations

import numpy as np
from numba import njit

from ..engine.route_state import (
    RouteInvariantError,
    depot_index,
    is_routed,
    set_predecessor,
    set_successor,
    successor,
)
from .candidates import Candidate
from .evaluation import node_columns


def new_departure_row(data):
    """Zero-filled row with one slot per node id and depot alias."""

    return np.zeros(int(data["n"]) + int(data["m"]), dtype=np.float64)


def init_departure_times(data):
    """One row per vehicle; row ``k`` is only meaningful once route ``k`` opens."""

    return np.zeros((int(data["m"]), int(data["n"]) + int(data["m"])), dtype=np.float64)


@njit(cache=True)
def _propagate_departures(succ, dep_row, start, anchor, n, dist, ready, service):
    """Rewrite service completion times from ``start`` forward to ``anchor``.

    Returns the completion time at the anchor, or ``-1`` when the chain is
    broken.  Depot and alias slots are left untouched.
    """

    t = dep_row[start]
    pre = start
    limit = succ.shape[0]
    steps = 0
    while True:
        suc = succ[pre]
        if suc < 0 or steps > limit:
            return -1.0
        rp = pre if pre <= n else 0
        rs = suc if suc <= n else 0
        t += dist[rp, rs]
        if t < ready[rs]:
            t = ready[rs]
        t += service[rs]
        if suc != 0 and suc <= n:
            dep_row[suc] = t
        if suc == anchor:
            return t
        pre = suc
        steps += 1


def apply_insertion(candidate: Candidate, sol, dep_times, data):
    """Splice ``candidate.customer`` behind its predecessor and refresh times.

    Feasibility was certified by the evaluator, so no window is re-checked.
    Returns the new completion time of the route.
    """

    customer = int(candidate.customer)
    pre = int(candidate.predecessor)
    route = int(candidate.route)

    if is_routed(sol, customer):
        raise RouteInvariantError(f"customer {customer} is already routed")

    anchor = depot_index(sol, route)
    old_suc = successor(sol, pre)
    if old_suc < 0:
        raise RouteInvariantError(f"predecessor {pre} is not part of route {route}")

    set_predecessor(sol, customer, pre)
    set_successor(sol, customer, old_suc)
    set_successor(sol, pre, customer)
    set_predecessor(sol, old_suc, customer)

    ready, _, service = node_columns(data)
    dist = np.ascontiguousarray(data["dist"], dtype=np.float64)
    end = _propagate_departures(
        sol["succ"], dep_times[route], pre, anchor, int(data["n"]), dist, ready, service
    )
    if end < 0.0:
        raise RouteInvariantError(f"route {route} does not return to its depot {anchor}")
    return float(end)
