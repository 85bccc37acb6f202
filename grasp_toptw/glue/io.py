"""Instance and configuration loading for the command-line glue layer.

Two instance sources are supported: the classic TOPTW text benchmark format
and a CSV/Parquet node table.  Both end up in the same plain data dict of
NumPy arrays consumed by the constructor.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Mapping, Tuple

import numpy as np
import pandas as pd
import yaml

from ..config.enums import (
    DEPOT,
    F_NODE_F,
    NODE_DUE,
    NODE_READY,
    NODE_SCORE,
    NODE_SERVICE,
)

# column offsets of the text format (after collapsing whitespace)
COL_X = 1
COL_Y = 2
COL_SERVICE = 3
COL_SCORE = 4
COL_DEPOT_READY = 7
COL_DEPOT_DUE = 8
COL_READY = 8
COL_DUE = 9


def load_config(path_yaml: Path) -> Dict:
    """Read a YAML (or JSON) configuration file.

    Parameters
    ----------
    path_yaml:
        Path to the configuration file.

    Returns
    -------
    dict
        Parsed configuration dictionary.  Empty files resolve to ``{}``.
    """

    path = Path(path_yaml)
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return {}

    if path.suffix.lower() == ".json":
        return json.loads(text)

    cfg = yaml.safe_load(text)
    return cfg or {}


def compute_euclid(coords: np.ndarray) -> np.ndarray:
    """Symmetric Euclidean distance matrix with an exact zero diagonal."""

    coords = np.asarray(coords, dtype=np.float64)
    diff = coords[:, None, :] - coords[None, :, :]
    dist = np.sqrt(np.sum(diff * diff, axis=-1))
    np.fill_diagonal(dist, 0.0)
    return dist


def build_data(coords: np.ndarray, node_f: np.ndarray, m: int, max_dur: float) -> Dict:
    """Assemble the problem data dict; node 0 is the depot."""

    coords = np.asarray(coords, dtype=np.float64)
    node_f = np.asarray(node_f, dtype=np.float64)
    return {
        "n": coords.shape[0] - 1,
        "m": int(m),
        "coords": coords,
        "node_f": node_f,
        "dist": compute_euclid(coords),
        "max_dur": float(max_dur),
    }


def _fields(line, lineno, path):
    if line is None:
        raise ValueError(f"{path}: unexpected end of file at line {lineno}")
    parts = line.split()
    if not parts:
        raise ValueError(f"{path}: empty line {lineno}")
    return parts


def _number(parts, col, lineno, path):
    try:
        return float(parts[col])
    except IndexError:
        raise ValueError(f"{path}: line {lineno} has no column {col}") from None
    except ValueError:
        raise ValueError(f"{path}: line {lineno} column {col} is not numeric: {parts[col]!r}") from None


def read_toptw_instance(path_txt: Path) -> Dict:
    """Parse a TOPTW benchmark file.

    The header carries the vehicle count in field 1 and the POI count in
    field 2; the second line is skipped.  The depot row stores its time window
    in columns 7/8, customer rows in columns 8/9.  The depot due time is the
    maximum route duration.
    """

    path = Path(path_txt)
    if not path.exists():
        raise FileNotFoundError(path)

    lines = path.read_text(encoding="utf-8").splitlines()

    def line_at(i):
        return lines[i] if i < len(lines) else None

    header = _fields(line_at(0), 1, path)
    try:
        m = int(header[1])
        n = int(header[2])
    except (IndexError, ValueError):
        raise ValueError(f"{path}: malformed header {line_at(0)!r}") from None
    if n < 0 or m < 1:
        raise ValueError(f"{path}: header announces {m} vehicles and {n} POIs")

    coords = np.zeros((n + 1, 2), dtype=np.float64)
    node_f = np.zeros((n + 1, F_NODE_F), dtype=np.float64)

    for i in range(n + 1):
        lineno = i + 3
        parts = _fields(line_at(i + 2), lineno, path)
        coords[i, 0] = _number(parts, COL_X, lineno, path)
        coords[i, 1] = _number(parts, COL_Y, lineno, path)
        node_f[i, NODE_SERVICE] = _number(parts, COL_SERVICE, lineno, path)
        node_f[i, NODE_SCORE] = _number(parts, COL_SCORE, lineno, path)
        if i == DEPOT:
            node_f[i, NODE_READY] = _number(parts, COL_DEPOT_READY, lineno, path)
            node_f[i, NODE_DUE] = _number(parts, COL_DEPOT_DUE, lineno, path)
        else:
            node_f[i, NODE_READY] = _number(parts, COL_READY, lineno, path)
            node_f[i, NODE_DUE] = _number(parts, COL_DUE, lineno, path)

    return build_data(coords, node_f, m, node_f[DEPOT, NODE_DUE])


def _read_frame(path_like: Path):
    """Return a Pandas ``DataFrame`` from CSV or Parquet input."""

    path = Path(path_like)
    if path.suffix.lower() in {".parquet", ".pq"}:
        df = pd.read_parquet(path)
    else:
        df = pd.read_csv(path)
    return df


def load_nodes(path_table: Path) -> Tuple[np.ndarray, np.ndarray]:
    """Load node coordinates and attributes from a CSV/Parquet table.

    The first row is the depot.  Missing ``score``/``ready``/``service``
    columns default to 0 and a missing ``due`` column to +inf.
    """

    path = Path(path_table)
    if not path.exists():
        raise FileNotFoundError(path)
    df = _read_frame(path)
    if not {"x", "y"}.issubset(df.columns):
        raise ValueError("node table must contain 'x' and 'y' columns")
    if len(df.index) == 0:
        raise ValueError(f"empty table: {path}")

    n = len(df.index)
    coords = df[["x", "y"]].to_numpy(dtype=np.float64, copy=True)

    node_f = np.zeros((n, F_NODE_F), dtype=np.float64)
    node_f[:, NODE_SCORE] = df.get("score", pd.Series(0.0, index=df.index)).fillna(0.0).to_numpy(dtype=np.float64)
    node_f[:, NODE_READY] = df.get("ready", pd.Series(0.0, index=df.index)).fillna(0.0).to_numpy(dtype=np.float64)
    node_f[:, NODE_DUE] = df.get("due", pd.Series(np.inf, index=df.index)).fillna(np.inf).to_numpy(dtype=np.float64)
    node_f[:, NODE_SERVICE] = df.get("service", pd.Series(0.0, index=df.index)).fillna(0.0).to_numpy(dtype=np.float64)

    return coords, node_f


def validate_inputs(data: Mapping) -> None:
    """Run lightweight shape and value checks on the assembled dataset."""

    coords = np.asarray(data["coords"])
    dist = np.asarray(data["dist"])
    node_f = np.asarray(data["node_f"])
    n = int(data["n"])
    m = int(data["m"])

    if coords.ndim != 2 or coords.shape[1] != 2:
        raise ValueError("coords must have shape (n+1, 2)")
    if coords.shape[0] != n + 1:
        raise ValueError("coords must hold the depot plus n customers")
    if dist.shape != (n + 1, n + 1):
        raise ValueError("dist must have shape (n+1, n+1)")
    if node_f.shape != (n + 1, F_NODE_F):
        raise ValueError("node_f must have shape (n+1, F_NODE_F)")
    if m < 1:
        raise ValueError("at least one vehicle is required")
    if not float(data["max_dur"]) > 0.0:
        raise ValueError("max_dur must be positive")
    if np.any(node_f[:, NODE_SERVICE] < 0):
        raise ValueError("service times must be >= 0")
    if np.any(node_f[:, NODE_READY] > node_f[:, NODE_DUE]):
        raise ValueError("ready time must not exceed due time")
    if not np.allclose(dist, dist.T):
        raise ValueError("dist must be symmetric")


__all__ = [
    "build_data",
    "compute_euclid",
    "load_config",
    "load_nodes",
    "read_toptw_instance",
    "validate_inputs",
]
