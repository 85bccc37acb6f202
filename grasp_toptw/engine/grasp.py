"""Multi-start GRASP loop around the greedy randomized constructor."""

import numpy as np

from ..config.enums import parse_selection_policy
from ..construction.greedy import construct_solution
from .fitness import evaluate_fitness
from .route_state import clone_solution, extract_routes


def _routes_used(sol):
    return sum(1 for seq in extract_routes(sol) if seq)


def run_grasp(data, params, metrics, rng=None):
    """Build ``params["iters"]`` solutions and keep the most rewarding one."""

    if rng is None:
        rng = np.random.default_rng()

    iters = int(params.get("iters", 100))
    if iters < 1:
        raise ValueError("iters must be >= 1")
    log_period = max(1, int(params.get("log_period", 10)))
    rcl_size = int(params.get("rcl_size", 3))
    policy = parse_selection_policy(params.get("selection", "fuzzy_alpha_cut"))
    alpha = float(params.get("alpha", 0.8))

    sol = None
    best = None
    best_fitness = -np.inf
    total = 0.0

    for it in range(1, iters + 1):
        sol = construct_solution(data, rcl_size, policy, rng, alpha=alpha, sol=sol)
        fitness = evaluate_fitness(sol, data)
        total += fitness
        if fitness > best_fitness:
            best_fitness = fitness
            best = clone_solution(sol)

        # local search slot: construction only

        if (it % log_period) == 0 or it == 1 or it == iters:
            metrics.append(
                it,
                fitness,
                best_fitness,
                total / it,
                routes_used=_routes_used(sol),
                unrouted=len(sol["unrouted"]),
            )

    return {
        "best": best,
        "best_fitness": float(best_fitness),
        "average_fitness": total / iters,
        "iterations": iters,
    }
