import numpy as np
from grasp_toptw.data.generate_data import generate_data
from grasp_toptw.engine.grasp import run_grasp
from grasp_toptw.logging.metrics import Metrics
from grasp_toptw.config.config import DEFAULTS

def test_pipeline_smoke():
    data = generate_data(n_customers=30, n_vehicles=4, seed=0)
    params = DEFAULTS.copy()
    params["iters"] = 20
    metrics = Metrics()
    result = run_grasp(data, params, metrics, rng=np.random.default_rng(0))
    assert result["best_fitness"] > 0.0
    assert result["best"]["n_routes"] <= data["m"]
