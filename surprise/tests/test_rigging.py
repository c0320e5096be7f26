"""
Tests for the rigging engine.

Tests:
- Selection-time placement of the protected prize
- Opening-time pacing swaps and candidate eligibility
- Final swap behavior with and without a directive
"""

import random
from collections import Counter

from ..engine_core.rigging import RiggingEngine
from ..engine_core.state import Category, RiggingDirective
from .conftest import build_state

N = Category.NOVICE
E = Category.ELITE
P = Category.PRESTIGE
L = Category.LEGENDARY


def engine(seed: int = 0) -> RiggingEngine:
    return RiggingEngine(rng=random.Random(seed))


class TestSelection:

    def test_target_moves_into_chosen_container(self):
        state = build_state([N, E, P, L])
        state.directive = RiggingDirective(target_prize_id="p4")

        swap = engine().on_select(state, 1)

        assert swap is not None
        assert state.get_container(1).prize.id == "p4"
        assert state.get_container(4).prize.id == "p1"

    def test_target_already_in_chosen_container(self):
        state = build_state([N, E, P, L])
        state.directive = RiggingDirective(target_prize_id="p4")

        assert engine().on_select(state, 4) is None
        assert state.get_container(4).prize.id == "p4"

    def test_target_missing_from_pool(self):
        state = build_state([N, E])
        state.directive = RiggingDirective(target_prize_id="nope")

        assert engine().on_select(state, 1) is None
        assert state.get_container(1).prize.id == "p1"

    def test_target_wins_over_auto_win(self):
        state = build_state([N, E, P, L])
        state.directive = RiggingDirective(target_prize_id="p2", auto_win=True)

        engine().on_select(state, 1)
        assert state.get_container(1).prize.id == "p2"

    def test_auto_win_takes_top_rank(self):
        state = build_state([N, E, P, L, N])
        state.directive = RiggingDirective(auto_win=True)

        engine().on_select(state, 2)
        assert state.get_container(2).prize.category == L

    def test_auto_win_breaks_ties_among_top_rank(self):
        seen = set()
        for seed in range(40):
            state = build_state([N, P, N, P, N])
            state.directive = RiggingDirective(auto_win=True)
            engine(seed).on_select(state, 1)
            held_prize = state.get_container(1).prize
            assert held_prize.category == P
            seen.add(held_prize.id)
        assert seen == {"p2", "p4"}

    def test_no_directive_no_swap(self):
        state = build_state([N, E, P, L])
        assert engine().on_select(state, 1) is None
        assert [c.prize.id for c in state.containers] == ["p1", "p2", "p3", "p4"]


class TestOpeningRoundZero:

    def test_prestige_swapped_for_eligible_candidate(self):
        # 2 Legendary, 3 held, 4 open, 6 Prestige: only 5 qualifies
        state = build_state([P, L, N, N, N, P], held=3, opened={4})

        swap = engine().on_open(state, 1, quota=3)

        assert swap is not None
        assert state.get_container(1).prize.id == "p5"
        assert state.get_container(5).prize.id == "p1"
        assert state.get_container(2).prize.id == "p2"
        assert state.get_container(3).prize.id == "p3"

    def test_protected_prize_is_not_a_candidate(self):
        state = build_state([P, L, N, N, N, P], held=3, opened={4})
        state.directive = RiggingDirective(target_prize_id="p5")

        assert engine().on_open(state, 1, quota=3) is None
        assert state.get_container(1).prize.category == P

    def test_non_prestige_is_left_alone(self):
        state = build_state([E, N, N], held=3)
        assert engine().on_open(state, 1, quota=3) is None

    def test_candidates_exclude_legendary_held_open_and_self(self):
        state = build_state([P, L, N, N, E], held=3, opened={4})
        ids = [c.id for c in engine().swap_candidates(state, 1)]
        assert ids == [5]


class TestOpeningQuotaRounds:

    def test_last_shot_forces_prestige_in(self):
        state = build_state([N, E, P, N], held=4, round_index=1, opened_in_round=2)

        engine().on_open(state, 1, quota=3)

        assert state.get_container(1).prize.category == P
        assert state.get_container(3).prize.id == "p1"

    def test_second_prestige_swapped_out(self):
        state = build_state([P, E, P, N], held=4, round_index=2, opened_in_round=1)
        state.reveals_in_round = Counter({P: 1})

        engine().on_open(state, 1, quota=3)

        assert state.get_container(1).prize.category == E

    def test_legendary_is_never_sacrificed(self):
        state = build_state([L, E, P, N], held=4, round_index=1, opened_in_round=2)

        assert engine().on_open(state, 1, quota=3) is None
        assert state.get_container(1).prize.category == L
        assert state.get_container(3).prize.category == P

    def test_no_prestige_left_means_no_swap(self):
        state = build_state([N, E, N, N], held=4, round_index=1, opened_in_round=2)
        assert engine().on_open(state, 1, quota=3) is None

    def test_later_rounds_are_unconstrained(self):
        state = build_state([P, E, N, N], held=4, round_index=3, opened_in_round=0)
        state.reveals_in_round = Counter({P: 3})
        assert engine().on_open(state, 1, quota=3) is None


class TestFinalSwap:

    def test_directive_keeps_prize_with_holder(self):
        state = build_state([L, N], held=1)
        state.directive = RiggingDirective(auto_win=True)

        swap = engine().on_final_swap(state, 1, 2)

        assert swap is not None
        assert state.get_container(2).prize.category == L

    def test_no_directive_is_genuine(self):
        state = build_state([L, N], held=1)
        assert engine().on_final_swap(state, 1, 2) is None
        assert state.get_container(1).prize.category == L

    def test_target_missing_from_pool_is_genuine(self):
        state = build_state([N, L], held=1)
        state.directive = RiggingDirective(target_prize_id="gone")

        assert engine().on_final_swap(state, 1, 2) is None
        assert state.get_container(1).prize.id == "p1"
        assert state.get_container(2).prize.id == "p2"

    def test_target_not_held_is_genuine(self):
        state = build_state([N, L, E], held=1, opened=(3,))
        state.directive = RiggingDirective(target_prize_id="p2")

        assert engine().on_final_swap(state, 1, 2) is None
        assert state.get_container(2).prize.id == "p2"
