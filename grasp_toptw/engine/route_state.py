"""Linked route container shared by the constructor and the GRASP loop.

Routes are stored as an arena of successor / predecessor ids indexed by node
id (``succ`` and ``pred`` arrays of size ``n + m``).  Route 0 is anchored at
the depot id 0, route ``k > 0`` at the alias id ``n + k``.  An empty route is
its anchor linked to itself.
"""

from __future__ import annotations

import numpy as np

from ..config.enums import DEPOT


class RouteInvariantError(RuntimeError):
    """Raised when the linked route structure is internally inconsistent."""


def _anchor_for(n, k):
    return DEPOT if k == 0 else n + k


def init_solution(data, sol=None):
    """Return a solution with one open, empty route.

    When ``sol`` is given its arrays are reset in place so callers holding a
    reference keep seeing the same container.
    """

    n = int(data["n"])
    m = int(data["m"])
    if m < 1:
        raise ValueError("at least one vehicle is required")
    size = n + m

    if sol is None or sol["succ"].shape[0] != size:
        fresh = {
            "n": n,
            "m": m,
            "succ": np.full(size, -1, dtype=np.int64),
            "pred": np.full(size, -1, dtype=np.int64),
            "depots": np.full(m, -1, dtype=np.int64),
            "n_routes": 0,
        }
        if sol is None:
            sol = fresh
        else:
            sol.clear()
            sol.update(fresh)
    else:
        sol["n"] = n
        sol["m"] = m
        sol["succ"].fill(-1)
        sol["pred"].fill(-1)
        sol["depots"].fill(-1)
        sol["n_routes"] = 0
        for key in ("dep_times", "unrouted", "fitness"):
            sol.pop(key, None)

    add_route(sol)
    return sol


def add_route(sol):
    """Open the next vehicle route and return its index."""

    k = int(sol["n_routes"])
    if k >= int(sol["m"]):
        raise RouteInvariantError(
            f"cannot open route {k}: only {sol['m']} vehicles available"
        )
    anchor = _anchor_for(int(sol["n"]), k)
    sol["depots"][k] = anchor
    sol["succ"][anchor] = anchor
    sol["pred"][anchor] = anchor
    sol["n_routes"] = k + 1
    return k


def route_count(sol):
    return int(sol["n_routes"])


def depot_index(sol, k):
    if k < 0 or k >= route_count(sol):
        raise IndexError(f"route {k} is not open")
    return int(sol["depots"][k])


def successor(sol, v):
    return int(sol["succ"][v])


def predecessor(sol, v):
    return int(sol["pred"][v])


def set_successor(sol, v, s):
    sol["succ"][v] = s


def set_predecessor(sol, v, p):
    sol["pred"][v] = p


def is_depot_alias(sol, v):
    return v == DEPOT or v > int(sol["n"])


def is_routed(sol, v):
    return int(sol["succ"][v]) >= 0


def extract_route(sol, k):
    """Customers of route ``k`` in visiting order (anchor excluded)."""

    anchor = depot_index(sol, k)
    limit = sol["succ"].shape[0]
    seq = []
    v = int(sol["succ"][anchor])
    steps = 0
    while v != anchor:
        if v < 0 or steps > limit:
            raise RouteInvariantError(f"route {k} does not return to its depot {anchor}")
        seq.append(v)
        v = int(sol["succ"][v])
        steps += 1
    return seq


def extract_routes(sol):
    return [extract_route(sol, k) for k in range(route_count(sol))]


def routed_customers(sol):
    out = []
    for seq in extract_routes(sol):
        out.extend(seq)
    return out


def check_invariants(sol):
    """Validate route count, closed chains and single routing of customers."""

    if route_count(sol) > int(sol["m"]):
        raise RouteInvariantError(
            f"{route_count(sol)} routes open for {sol['m']} vehicles"
        )
    seen = set()
    for k in range(route_count(sol)):
        anchor = depot_index(sol, k)
        for v in extract_route(sol, k):
            if is_depot_alias(sol, v):
                raise RouteInvariantError(f"route {k} visits depot alias {v}")
            if v in seen:
                raise RouteInvariantError(f"customer {v} appears in more than one route")
            seen.add(v)
            if int(sol["pred"][int(sol["succ"][v])]) != v:
                raise RouteInvariantError(f"broken predecessor link after customer {v}")
        if int(sol["pred"][int(sol["succ"][anchor])]) != anchor:
            raise RouteInvariantError(f"broken predecessor link after depot {anchor}")
    return True


def clone_solution(sol):
    clone = {
        "n": sol["n"],
        "m": sol["m"],
        "succ": sol["succ"].copy(),
        "pred": sol["pred"].copy(),
        "depots": sol["depots"].copy(),
        "n_routes": sol["n_routes"],
    }
    if "dep_times" in sol:
        clone["dep_times"] = sol["dep_times"].copy()
    if "unrouted" in sol:
        clone["unrouted"] = sol["unrouted"].copy()
    if "fitness" in sol:
        clone["fitness"] = float(sol["fitness"])
    return clone
