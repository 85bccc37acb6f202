import numpy as np
from ..config.enums import *
from ..glue.io import build_data


def generate_data(n_customers=40, n_vehicles=3, max_dur=400.0, seed=0):
    rng = np.random.default_rng(seed)
    # Nodes: 0 is depot, 1..n_customers are customers
    n = n_customers + 1

    # coords
    coords = np.zeros((n, 2), dtype=np.float64)
    coords[0] = np.array([50.0, 50.0])  # depot at center
    coords[1:] = rng.uniform(0, 100, size=(n_customers, 2))

    node_f = np.zeros((n, F_NODE_F), dtype=np.float64)

    # rewards 1..30, nothing to collect at the depot
    node_f[1:, NODE_SCORE] = rng.integers(1, 31, size=n_customers).astype(np.float64)

    # service times small (2..10)
    node_f[1:, NODE_SERVICE] = rng.integers(2, 11, size=n_customers).astype(np.float64)

    # windows of 60..180 opening somewhere in the first 60% of the horizon
    width = rng.uniform(60.0, 180.0, size=n_customers)
    opens = rng.uniform(0.0, 0.6 * max_dur, size=n_customers)
    node_f[1:, NODE_READY] = opens
    node_f[1:, NODE_DUE] = np.minimum(opens + width, max_dur)

    # depot window spans the whole horizon
    node_f[0, NODE_READY] = 0.0
    node_f[0, NODE_DUE] = max_dur

    return build_data(coords, node_f, n_vehicles, max_dur)
