import numpy as np
import pytest

from grasp_toptw.config.enums import (
    SEL_FUZZY_ALPHA_CUT,
    SEL_FUZZY_BEST,
    SEL_RANDOM,
    parse_selection_policy,
)
from grasp_toptw.construction import (
    Candidate,
    build_rcl,
    fuzzy_alpha_cut_selection,
    fuzzy_best_selection,
    membership,
    random_selection,
    select_candidate,
    sort_candidates,
)


def _cands(scores, costs=None):
    if costs is None:
        costs = list(range(len(scores)))
    return [
        Candidate(customer=i + 1, route=0, predecessor=0, cost=float(c), score=float(s))
        for i, (s, c) in enumerate(zip(scores, costs))
    ]


def test_sort_candidates_is_stable_on_ties():
    cands = _cands([1, 2, 3, 4], costs=[5.0, 2.0, 5.0, 1.0])
    ordered = sort_candidates(cands)
    assert [c.customer for c in ordered] == [4, 2, 1, 3]


def test_build_rcl_truncates_to_available_candidates():
    cands = _cands([1, 2, 3])
    assert len(build_rcl(cands, 2)) == 2
    assert len(build_rcl(cands, 10)) == 3
    assert build_rcl([], 3) == []
    with pytest.raises(ValueError):
        build_rcl(cands, 0)


def test_membership_normalises_by_max_score():
    rcl = _cands([10, 50, 100])
    np.testing.assert_allclose(membership(rcl, 100.0), [0.9, 0.5, 0.0])


def test_random_selection_stays_in_bounds():
    rng = np.random.default_rng(0)
    picks = {random_selection(4, rng) for _ in range(200)}
    assert picks == {0, 1, 2, 3}
    with pytest.raises(ValueError):
        random_selection(0, rng)


def test_fuzzy_best_prefers_highest_score():
    rcl = _cands([10, 80, 30])
    assert fuzzy_best_selection(rcl, 100.0) == 1
    # ties resolve to the earliest entry
    assert fuzzy_best_selection(_cands([40, 40]), 100.0) == 0


def test_alpha_cut_only_picks_inside_the_cut():
    rcl = _cands([10, 50, 100])
    rng = np.random.default_rng(1)
    picks = {fuzzy_alpha_cut_selection(rcl, 100.0, 0.5, rng) for _ in range(200)}
    assert picks == {1, 2}


def test_alpha_cut_falls_back_to_whole_rcl_when_cut_is_empty():
    rcl = _cands([10, 20])
    rng = np.random.default_rng(2)
    picks = {fuzzy_alpha_cut_selection(rcl, 100.0, 0.0, rng) for _ in range(200)}
    assert picks == {0, 1}


def test_zero_rewards_do_not_break_fuzzy_policies():
    rcl = _cands([0, 0, 0])
    rng = np.random.default_rng(3)
    assert fuzzy_best_selection(rcl, 0.0) == 0
    assert 0 <= fuzzy_alpha_cut_selection(rcl, 0.0, 0.5, rng) < 3


def test_select_candidate_dispatches_by_policy():
    rcl = _cands([10, 80, 30])
    rng = np.random.default_rng(4)
    assert select_candidate(rcl, SEL_FUZZY_BEST, rng, 100.0) == 1
    assert 0 <= select_candidate(rcl, SEL_RANDOM, rng, 100.0) < 3
    assert select_candidate(rcl, SEL_FUZZY_ALPHA_CUT, rng, 100.0, alpha=0.2) == 1
    with pytest.raises(ValueError):
        select_candidate(rcl, 99, rng, 100.0)


def test_parse_selection_policy_accepts_names_and_constants():
    assert parse_selection_policy("random") == SEL_RANDOM
    assert parse_selection_policy("Fuzzy-Best") == SEL_FUZZY_BEST
    assert parse_selection_policy(SEL_FUZZY_ALPHA_CUT) == SEL_FUZZY_ALPHA_CUT
    with pytest.raises(ValueError):
        parse_selection_policy("regret")
    with pytest.raises(ValueError):
        parse_selection_policy(7)
