import numpy as np
import pytest

from grasp_toptw.config.enums import SEL_RANDOM
from grasp_toptw.construction import construct_solution
from grasp_toptw.data.generate_data import generate_data
from grasp_toptw.engine.fitness import evaluate_fitness, route_schedule, solution_info
from grasp_toptw.engine.problem import (
    distance,
    due_time,
    max_route_duration,
    max_score,
    ready_time,
    resolve_node,
    score,
    service_time,
)
from grasp_toptw.engine.route_state import (
    RouteInvariantError,
    add_route,
    check_invariants,
    clone_solution,
    depot_index,
    extract_route,
    init_solution,
    is_depot_alias,
    predecessor,
    route_count,
    routed_customers,
    successor,
)


def test_init_solution_opens_one_empty_route():
    data = generate_data(n_customers=5, n_vehicles=3, seed=0)
    sol = init_solution(data)

    assert route_count(sol) == 1
    assert depot_index(sol, 0) == 0
    assert extract_route(sol, 0) == []
    assert successor(sol, 0) == 0 and predecessor(sol, 0) == 0
    assert sol["succ"].shape == (8,)
    assert np.all(sol["succ"][1:6] == -1)


def test_add_route_uses_alias_anchors_and_respects_fleet_size():
    data = generate_data(n_customers=5, n_vehicles=3, seed=0)
    sol = init_solution(data)

    assert add_route(sol) == 1
    assert add_route(sol) == 2
    assert [depot_index(sol, k) for k in range(3)] == [0, 6, 7]
    assert is_depot_alias(sol, 0) and is_depot_alias(sol, 7)
    assert not is_depot_alias(sol, 5)
    with pytest.raises(RouteInvariantError):
        add_route(sol)
    assert route_count(sol) == 3


def test_alias_ids_resolve_to_the_depot():
    data = generate_data(n_customers=5, n_vehicles=3, seed=0)
    assert resolve_node(data, 7) == 0
    assert resolve_node(data, 5) == 5
    assert distance(data, 6, 3) == distance(data, 0, 3)
    assert due_time(data, 7) == due_time(data, 0)
    assert score(data, 6) == 0.0
    assert ready_time(data, 6) == 0.0
    assert service_time(data, 7) == service_time(data, 0) == 0.0
    assert max_route_duration(data) == due_time(data, 0)
    assert max_score(data) == float(data["node_f"][:, 0].max())


def test_open_chain_is_reported():
    data = generate_data(n_customers=4, n_vehicles=1, seed=0)
    sol = init_solution(data)
    sol["succ"][0] = 2
    sol["succ"][2] = 3
    sol["succ"][3] = 2  # cycle that never returns to the depot
    with pytest.raises(RouteInvariantError):
        extract_route(sol, 0)


def test_check_invariants_detects_double_routing():
    data = generate_data(n_customers=4, n_vehicles=2, seed=0)
    sol = init_solution(data)
    add_route(sol)
    anchor = depot_index(sol, 1)
    # customer 1 linked into both routes
    sol["succ"][0], sol["pred"][0] = 1, 1
    sol["succ"][1], sol["pred"][1] = 0, 0
    sol["succ"][anchor], sol["pred"][anchor] = 1, 1
    with pytest.raises(RouteInvariantError):
        check_invariants(sol)


def test_clone_is_independent():
    data = generate_data(n_customers=10, n_vehicles=2, seed=4)
    sol = construct_solution(data, rcl_size=2, policy=SEL_RANDOM, rng=np.random.default_rng(0))
    evaluate_fitness(sol, data)
    copy = clone_solution(sol)
    before = routed_customers(copy)

    init_solution(data, sol)

    assert routed_customers(copy) == before
    assert routed_customers(sol) == []
    assert "fitness" not in sol


def test_fitness_and_info_report_routes():
    data = generate_data(n_customers=12, n_vehicles=2, seed=5)
    sol = construct_solution(data, rcl_size=1, policy=SEL_RANDOM, rng=np.random.default_rng(0))

    fitness = evaluate_fitness(sol, data)
    expected = sum(data["node_f"][v, 0] for v in routed_customers(sol))
    assert fitness == pytest.approx(expected)
    assert sol["fitness"] == fitness

    info = solution_info(sol, data)
    assert info.startswith("Route 0: 0 -> ")
    assert f"Fitness: {fitness:g}" in info

    sched = route_schedule(sol, data, 0)
    assert sched["nodes"][-1] == depot_index(sol, 0)
    assert sched["end_time"] == sched["finish"][-1]
