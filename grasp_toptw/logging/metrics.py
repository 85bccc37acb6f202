import csv
import json

from ..engine.route_state import extract_routes


class Metrics:
    def __init__(self):
        self.rows = []

    def append(self, it, fitness, best, average, routes_used=0, unrouted=0):
        self.rows.append(
            (
                it,
                float(fitness),
                float(best),
                float(average),
                int(routes_used),
                int(unrouted),
            )
        )

    def save_csv(self, path):
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(
                [
                    "iter",
                    "fitness",
                    "best_fitness",
                    "average_fitness",
                    "routes_used",
                    "unrouted",
                ]
            )
            for row in self.rows:
                w.writerow(list(row))


def save_metrics_json(path, metrics, result, params, *, extra=None):
    data = {
        "best_fitness": float(result["best_fitness"]),
        "average_fitness": float(result["average_fitness"]),
        "iterations": int(result["iterations"]),
        "iters_logged": len(metrics.rows),
        "params": params,
    }
    if extra:
        data.update(extra)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def save_routes_csv(path, sol):
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["route_id", "pos", "customer_id"])
        for r, seq in enumerate(extract_routes(sol)):
            for i, customer in enumerate(seq):
                w.writerow([r, i + 1, int(customer)])
