"""Reward evaluation and route timing summaries."""

import numpy as np

from ..config.enums import NODE_DUE, NODE_READY, NODE_SCORE, NODE_SERVICE
from .problem import resolve_node
from .route_state import depot_index, extract_route, extract_routes, route_count


def evaluate_fitness(sol, data):
    """Total reward of the routed customers; also stored as ``sol["fitness"]``."""

    scores = data["node_f"][:, NODE_SCORE]
    total = 0.0
    for seq in extract_routes(sol):
        if seq:
            total += float(scores[np.asarray(seq, dtype=np.int64)].sum())
    sol["fitness"] = total
    return total


def route_schedule(sol, data, k):
    """Recompute arrival/start/finish along route ``k``.

    The last entry is the return to the depot anchor.
    """

    node_f = data["node_f"]
    dist = data["dist"]
    anchor = depot_index(sol, k)
    visits = extract_route(sol, k) + [anchor]

    arrival = np.zeros(len(visits), dtype=np.float64)
    start = np.zeros(len(visits), dtype=np.float64)
    finish = np.zeros(len(visits), dtype=np.float64)

    t = 0.0
    prev = 0
    for i, v in enumerate(visits):
        rv = resolve_node(data, v)
        t += float(dist[prev, rv])
        arrival[i] = t
        if t < node_f[rv, NODE_READY]:
            t = float(node_f[rv, NODE_READY])
        start[i] = t
        t += float(node_f[rv, NODE_SERVICE])
        finish[i] = t
        prev = rv

    due = np.array([node_f[resolve_node(data, v), NODE_DUE] for v in visits], dtype=np.float64)
    return {
        "nodes": np.asarray(visits, dtype=np.int64),
        "arrival": arrival,
        "start": start,
        "finish": finish,
        "due": due,
        "end_time": float(finish[-1]),
    }


def solution_info(sol, data):
    """Readable multi-line description of every open route."""

    scores = data["node_f"][:, NODE_SCORE]
    lines = []
    for k in range(route_count(sol)):
        seq = extract_route(sol, k)
        sched = route_schedule(sol, data, k)
        path = " -> ".join(str(v) for v in [0] + seq + [0])
        route_score = float(sum(scores[v] for v in seq))
        lines.append(f"Route {k}: {path} | score {route_score:g} | end {sched['end_time']:.2f}")
    fitness = sol["fitness"] if "fitness" in sol else evaluate_fitness(sol, data)
    unrouted = sol.get("unrouted")
    n_unrouted = 0 if unrouted is None else len(unrouted)
    lines.append(f"Fitness: {fitness:g} | routes {route_count(sol)}/{sol['m']} | unrouted {n_unrouted}")
    return "\n".join(lines)
