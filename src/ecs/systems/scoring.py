from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping

from ecs.components.run_state import RunState
from ecs.components.symbol import SYMBOLS, Symbol
from ecs.constants import MIN_DROP_INTERVAL_MS, MIN_RUN_LENGTH, POINTS_PER_RUN, SPEEDUP_FACTOR
from ecs.systems.match_resolution import ClearRound


def round_multiplier(round_number: int) -> int:
    """Multiplier for the k-th round of a cascade: 1, 2, 4, ..."""
    return 2 ** (round_number - 1)


def points_for_round(clear_round: ClearRound) -> int:
    runs = clear_round.size // MIN_RUN_LENGTH
    return runs * POINTS_PER_RUN * round_multiplier(clear_round.round)


def apply_resolution(state: RunState, rounds: Iterable[ClearRound]) -> RunState:
    """Fold one landing's round log into a fresh RunState.

    Score accumulates per round, the combo multiplier sticks at the last
    round's multiplier (back to 1 when nothing cleared) and the drop interval
    shrinks once per clearing landing, never below MIN_DROP_INTERVAL_MS.
    """
    rounds = tuple(rounds)
    if not rounds:
        return replace(state, combo_multiplier=1)
    score = state.score
    counts = dict(state.symbol_clear_counts)
    for clear_round in rounds:
        score += points_for_round(clear_round)
        for symbol, amount in clear_round.symbol_counts.items():
            counts[symbol] = counts.get(symbol, 0) + amount
    interval = max(MIN_DROP_INTERVAL_MS, state.drop_interval_ms / SPEEDUP_FACTOR)
    return replace(
        state,
        score=score,
        combo_multiplier=round_multiplier(rounds[-1].round),
        drop_interval_ms=interval,
        symbol_clear_counts=counts,
    )


def most_cleared_symbol(counts: Mapping[Symbol, int]) -> Symbol | None:
    """Symbol with the strictly highest count; earlier alphabet entries win ties."""
    best: Symbol | None = None
    best_count = 0
    for symbol in SYMBOLS:
        count = counts.get(symbol, 0)
        if count > best_count:
            best = symbol
            best_count = count
    return best
