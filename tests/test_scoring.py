from dataclasses import FrozenInstanceError, replace

import pytest

from ecs.components.run_state import RunState
from ecs.components.symbol import Symbol
from ecs.constants import BASE_DROP_INTERVAL_MS, MIN_DROP_INTERVAL_MS
from ecs.systems.match_resolution import ClearRound
from ecs.systems.scoring import apply_resolution, most_cleared_symbol, points_for_round, round_multiplier


def make_round(number, size, symbol=Symbol.HAPPINESS):
    cleared = frozenset((0, col) for col in range(size))
    return ClearRound(round=number, cleared=cleared, symbol_counts={symbol: size})


def test_round_multiplier_doubles():
    assert [round_multiplier(k) for k in (1, 2, 3, 4)] == [1, 2, 4, 8]


@pytest.mark.parametrize("size, expected", [(3, 10), (4, 10), (5, 10), (6, 20), (9, 30)])
def test_points_use_floor_of_runs(size, expected):
    assert points_for_round(make_round(1, size)) == expected


def test_single_run_scores_ten():
    state = apply_resolution(RunState(), [make_round(1, 3)])
    assert state.score == 10
    assert state.combo_multiplier == 1


def test_two_runs_in_first_round_score_twenty():
    state = apply_resolution(RunState(), [make_round(1, 6)])
    assert state.score == 20


def test_second_round_doubles():
    state = apply_resolution(RunState(), [make_round(1, 3), make_round(2, 3)])
    assert state.score == 10 + 20
    assert state.combo_multiplier == 2


def test_combo_resets_without_rounds():
    state = RunState(score=50, combo_multiplier=4, drop_interval_ms=300.0)
    after = apply_resolution(state, [])
    assert after.combo_multiplier == 1
    assert after.score == 50
    assert after.drop_interval_ms == 300.0


def test_speed_up_applied_once_per_landing():
    state = apply_resolution(RunState(), [make_round(1, 3), make_round(2, 3), make_round(3, 3)])
    assert state.drop_interval_ms == pytest.approx(BASE_DROP_INTERVAL_MS / 1.05)
    assert state.combo_multiplier == 4


def test_drop_interval_has_floor():
    state = RunState(drop_interval_ms=MIN_DROP_INTERVAL_MS + 1)
    for _ in range(5):
        state = apply_resolution(state, [make_round(1, 3)])
    assert state.drop_interval_ms == MIN_DROP_INTERVAL_MS


def test_clear_counts_accumulate():
    state = RunState(symbol_clear_counts={Symbol.ANGER: 2})
    state = apply_resolution(state, [make_round(1, 3, Symbol.ANGER), make_round(2, 4, Symbol.FEAR)])
    assert state.symbol_clear_counts == {Symbol.ANGER: 5, Symbol.FEAR: 4}


def test_apply_resolution_returns_new_record():
    original = RunState()
    updated = apply_resolution(original, [make_round(1, 3)])
    assert original.score == 0
    assert updated is not original
    with pytest.raises(FrozenInstanceError):
        updated.score = 99


def test_run_state_counts_are_read_only():
    state = replace(RunState(), symbol_clear_counts={Symbol.SADNESS: 1})
    with pytest.raises(TypeError):
        state.symbol_clear_counts[Symbol.SADNESS] = 5


def test_most_cleared_symbol():
    assert most_cleared_symbol({}) is None
    assert most_cleared_symbol({Symbol.FEAR: 3, Symbol.ANGER: 5}) is Symbol.ANGER


def test_most_cleared_tie_uses_alphabet_order():
    counts = {Symbol.CONTEMPT: 6, Symbol.SADNESS: 6, Symbol.SURPRISE: 2}
    assert most_cleared_symbol(counts) is Symbol.SADNESS
