"""Command line pipeline orchestrating instance loading and the GRASP loop."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from ..config.config import DEFAULTS
from ..config.enums import DEPOT, NODE_DUE, parse_selection_policy
from ..engine.fitness import solution_info
from ..engine.grasp import run_grasp
from ..logging.metrics import Metrics, save_metrics_json, save_routes_csv
from .io import build_data, load_config, load_nodes, read_toptw_instance, validate_inputs


def _resolve(base: Path, maybe_path: Optional[str]) -> Optional[Path]:
    if maybe_path is None:
        return None
    return (base / maybe_path).resolve()


def assemble_data(cfg: Dict[str, Any], base_dir: Path) -> Dict[str, Any]:
    """Load the instance following the configuration contract."""

    instance = cfg.get("instance", {})
    if isinstance(instance, str):
        instance = {"path": instance}

    path = instance.get("path")
    if path is None:
        raise ValueError("instance.path must be provided")
    fmt = str(instance.get("format", "toptw")).lower()

    if fmt == "toptw":
        data = read_toptw_instance(_resolve(base_dir, path))
    elif fmt == "csv":
        coords, node_f = load_nodes(_resolve(base_dir, path))
        if "vehicles" not in instance:
            raise ValueError("instance.vehicles is required for csv instances")
        max_dur = instance.get("max_dur")
        if max_dur is None:
            max_dur = float(node_f[DEPOT, NODE_DUE])
        data = build_data(coords, node_f, int(instance["vehicles"]), float(max_dur))
    else:
        raise ValueError(f"unknown instance format: {fmt!r}")

    if "vehicles" in instance and fmt == "toptw":
        data["m"] = int(instance["vehicles"])

    validate_inputs(data)
    return data


def build_params(cfg: Dict[str, Any]) -> Dict[str, Any]:
    params = DEFAULTS.copy()
    params.update(cfg.get("params", {}))
    if "iters" in cfg:
        params["iters"] = int(cfg["iters"])
    if "log_period" in cfg:
        params["log_period"] = int(cfg["log_period"])
    if int(params["rcl_size"]) < 1:
        raise ValueError("rcl_size must be >= 1")
    if not 0.0 <= float(params["alpha"]) <= 1.0:
        raise ValueError("alpha must lie in [0, 1]")
    parse_selection_policy(params["selection"])
    return params


def run_pipeline(
    cfg: Dict[str, Any],
    *,
    base_dir: Path,
    outdir: Path,
) -> Dict[str, Any]:
    """Execute the GRASP solver according to ``cfg`` and return the result."""

    data = assemble_data(cfg, base_dir)
    params = build_params(cfg)

    outdir.mkdir(parents=True, exist_ok=True)

    seed = int(cfg.get("seed", 0))
    rng = np.random.default_rng(seed)
    metrics = Metrics()

    result = run_grasp(data, params, metrics, rng=rng)

    meta = {
        "seed": seed,
        "config_version": cfg.get("version", "dev"),
        "n": int(data["n"]),
        "m": int(data["m"]),
    }

    save_metrics_json(outdir / "metrics.json", metrics, result, params, extra=meta)
    save_routes_csv(outdir / "routes.csv", result["best"])
    metrics.save_csv(outdir / "metrics_log.csv")

    return {
        "result": result,
        "data": data,
        "metrics": metrics,
        "params": params,
        "meta": meta,
    }


def load_and_run(
    config_path: Path,
    outdir: Path,
    *,
    seed_override: Optional[int] = None,
) -> Dict[str, Any]:
    """Convenience wrapper combining ``load_config`` and :func:`run_pipeline`."""

    cfg = load_config(config_path)
    if seed_override is not None:
        cfg["seed"] = int(seed_override)

    base_dir = Path(config_path).resolve().parent
    return run_pipeline(cfg, base_dir=base_dir, outdir=outdir)


def build_arg_parser():
    import argparse

    ap = argparse.ArgumentParser(description="GRASP constructor for the TOPTW")
    ap.add_argument("--config", required=True, help="Path to YAML/JSON configuration")
    ap.add_argument("--outdir", required=True, help="Output directory")
    ap.add_argument("--seed", type=int, default=None, help="Optional RNG seed override")
    ap.add_argument(
        "--show-routes",
        action="store_true",
        help="Print the best solution route by route",
    )
    return ap


def main(argv: Optional[list[str]] = None) -> Dict[str, Any]:
    ap = build_arg_parser()
    args = ap.parse_args(argv)

    outdir = Path(args.outdir).resolve()
    cfg_path = Path(args.config).resolve()

    out = load_and_run(cfg_path, outdir, seed_override=args.seed)

    result = out["result"]
    best = result["best"]
    summary = {
        "best_fitness": result["best_fitness"],
        "average_fitness": result["average_fitness"],
        "iterations": result["iterations"],
        "routes_open": int(best["n_routes"]),
        "vehicles_total": int(best["m"]),
        "unrouted": len(best["unrouted"]),
    }

    if args.show_routes:
        print(solution_info(best, out["data"]))
    print("\n[DONE]")
    print(json.dumps(summary, indent=2))
    return out


__all__ = [
    "assemble_data",
    "build_params",
    "build_arg_parser",
    "load_and_run",
    "main",
    "run_pipeline",
]
