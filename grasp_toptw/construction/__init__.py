"""Greedy randomized construction components."""

from .candidates import Candidate, sort_candidates
from .evaluation import evaluate_all, evaluate_and_sort, evaluate_position
from .greedy import construct_solution
from .insertion import apply_insertion, init_departure_times, new_departure_row
from .rcl import (
    build_rcl,
    fuzzy_alpha_cut_selection,
    fuzzy_best_selection,
    membership,
    random_selection,
    select_candidate,
)

__all__ = [
    "Candidate",
    "apply_insertion",
    "build_rcl",
    "construct_solution",
    "evaluate_all",
    "evaluate_and_sort",
    "evaluate_position",
    "fuzzy_alpha_cut_selection",
    "fuzzy_best_selection",
    "init_departure_times",
    "membership",
    "new_departure_row",
    "random_selection",
    "select_candidate",
    "sort_candidates",
]
