"""Feasibility and cost evaluation of every pending insertion.

For one customer and one open route the route is walked from its depot
anchor; each edge ``(pre, suc)`` is a candidate position.  The time windows
are propagated from the customer through ``suc`` and every later visit back
to the anchor.  A position dies at the first violation: arrival at or after a
due time, or a service completion beyond the maximum route duration.  The
completion time reached at the anchor is the cost of the position.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np
from numba import njit

from ..config.enums import NODE_DUE, NODE_READY, NODE_SCORE, NODE_SERVICE
from ..engine.route_state import RouteInvariantError, depot_index, route_count
from .candidates import Candidate, sort_candidates

_BROKEN = -1.0


@njit(cache=True)
def _resolve(v, n):
    if v > n:
        return 0
    return v


@njit(cache=True)
def _position_cost(succ, dep_row, pre, cand, anchor, n, dist, ready, due, service, max_dur):
    """Route completion time after inserting ``cand`` behind ``pre``.

    Returns ``inf`` when the position violates a window or the duration cap
    and ``-1`` when the successor chain never reaches ``anchor``.
    """

    t = dep_row[pre] + dist[_resolve(pre, n), cand]
    if t >= due[cand]:
        return np.inf
    if t < ready[cand]:
        t = ready[cand]
    t += service[cand]
    if t > max_dur:
        return np.inf

    prev = cand
    v = succ[pre]
    limit = succ.shape[0]
    steps = 0
    while True:
        if v < 0 or steps > limit:
            return -1.0
        rv = _resolve(v, n)
        t += dist[_resolve(prev, n), rv]
        if t >= due[rv]:
            return np.inf
        if t < ready[rv]:
            t = ready[rv]
        t += service[rv]
        if t > max_dur:
            return np.inf
        if v == anchor:
            return t
        prev = v
        v = succ[v]
        steps += 1


@njit(cache=True)
def _best_position(succ, dep_row, cand, anchor, n, dist, ready, due, service, max_dur):
    """Cheapest feasible predecessor of ``cand`` in the route of ``anchor``.

    Returns ``(cost, pre)``; ``pre == -1`` means no feasible position and
    ``pre == -2`` a broken chain.
    """

    best_cost = np.inf
    best_pre = -1
    limit = succ.shape[0]
    steps = 0
    pre = anchor
    while True:
        suc = succ[pre]
        cost = _position_cost(succ, dep_row, pre, cand, anchor, n, dist, ready, due, service, max_dur)
        if cost < 0.0:
            return np.inf, -2
        if cost < best_cost:
            best_cost = cost
            best_pre = pre
        if suc == anchor:
            break
        if suc < 0 or steps > limit:
            return np.inf, -2
        pre = suc
        steps += 1
    return best_cost, best_pre


def node_columns(data):
    """Contiguous float64 views of the time-window columns for the kernels."""

    node_f = data["node_f"]
    ready = np.ascontiguousarray(node_f[:, NODE_READY], dtype=np.float64)
    due = np.ascontiguousarray(node_f[:, NODE_DUE], dtype=np.float64)
    service = np.ascontiguousarray(node_f[:, NODE_SERVICE], dtype=np.float64)
    return ready, due, service


def _kernel_inputs(data):
    dist = np.ascontiguousarray(data["dist"], dtype=np.float64)
    ready, due, service = node_columns(data)
    return int(data["n"]), dist, ready, due, service, float(data["max_dur"])


def evaluate_position(customer, route, predecessor, dep_times, sol, data) -> Optional[float]:
    """Cost of one explicit position, or ``None`` when it is infeasible."""

    n, dist, ready, due, service, max_dur = _kernel_inputs(data)
    anchor = depot_index(sol, route)
    cost = _position_cost(
        sol["succ"], dep_times[route], int(predecessor), int(customer), anchor,
        n, dist, ready, due, service, max_dur,
    )
    if cost == _BROKEN:
        raise RouteInvariantError(f"route {route} does not return to its depot {anchor}")
    if not np.isfinite(cost):
        return None
    return float(cost)


def evaluate_all(pending: Iterable[int], dep_times, sol, data) -> List[Candidate]:
    """One candidate per pending customer: its cheapest feasible slot overall.

    Customers without any feasible slot contribute nothing.  Output follows
    the order of ``pending``.
    """

    n, dist, ready, due, service, max_dur = _kernel_inputs(data)
    scores = data["node_f"][:, NODE_SCORE]
    succ = sol["succ"]
    anchors = [depot_index(sol, k) for k in range(route_count(sol))]

    candidates = []
    for customer in pending:
        customer = int(customer)
        best_cost = np.inf
        best_route = -1
        best_pre = -1
        for k, anchor in enumerate(anchors):
            cost, pre = _best_position(
                succ, dep_times[k], customer, anchor, n, dist, ready, due, service, max_dur
            )
            if pre == -2:
                raise RouteInvariantError(f"route {k} does not return to its depot {anchor}")
            if pre >= 0 and cost < best_cost:
                best_cost = float(cost)
                best_route = k
                best_pre = int(pre)
        if best_route >= 0:
            candidates.append(
                Candidate(
                    customer=customer,
                    route=best_route,
                    predecessor=best_pre,
                    cost=best_cost,
                    score=float(scores[customer]),
                )
            )
    return candidates


def evaluate_and_sort(pending, dep_times, sol, data) -> List[Candidate]:
    return sort_candidates(evaluate_all(pending, dep_times, sol, data))
