"""Read-only accessors over the problem data dict.

Every accessor resolves depot aliases first: ids above ``n`` are the extra
route anchors and refer back to node 0.
"""

import numpy as np

from ..config.enums import DEPOT, NODE_DUE, NODE_READY, NODE_SCORE, NODE_SERVICE


def poi_count(data):
    return int(data["n"])


def vehicle_count(data):
    return int(data["m"])


def resolve_node(data, i):
    i = int(i)
    if i > int(data["n"]):
        return DEPOT
    return i


def distance(data, i, j):
    return float(data["dist"][resolve_node(data, i), resolve_node(data, j)])


def ready_time(data, i):
    return float(data["node_f"][resolve_node(data, i), NODE_READY])


def due_time(data, i):
    return float(data["node_f"][resolve_node(data, i), NODE_DUE])


def service_time(data, i):
    return float(data["node_f"][resolve_node(data, i), NODE_SERVICE])


def score(data, i):
    return float(data["node_f"][resolve_node(data, i), NODE_SCORE])


def max_route_duration(data):
    return float(data["max_dur"])


def max_score(data):
    """Highest reward over every node, depot included."""

    scores = data["node_f"][:, NODE_SCORE]
    if scores.size == 0:
        return 0.0
    return float(np.max(scores))
