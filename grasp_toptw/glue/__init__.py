"""Glue helpers exposed for CLI and integration harnesses."""

from .io import (
    build_data,
    compute_euclid,
    load_config,
    load_nodes,
    read_toptw_instance,
    validate_inputs,
)
from .pipeline import (
    assemble_data,
    build_arg_parser,
    build_params,
    load_and_run,
    main,
    run_pipeline,
)

__all__ = [
    "assemble_data",
    "build_arg_parser",
    "build_data",
    "build_params",
    "compute_euclid",
    "load_and_run",
    "load_config",
    "load_nodes",
    "main",
    "read_toptw_instance",
    "run_pipeline",
    "validate_inputs",
]
