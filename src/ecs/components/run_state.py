from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from ecs.components.symbol import Symbol
from ecs.constants import BASE_DROP_INTERVAL_MS


@dataclass(frozen=True, slots=True)
class RunState:
    """Score and pacing for the current run.

    Frozen: systems build a new record with ``dataclasses.replace`` and swap
    it onto the entity in one step, so observers never see a half-applied
    landing.
    """
    score: int = 0
    combo_multiplier: int = 1
    drop_interval_ms: float = BASE_DROP_INTERVAL_MS
    symbol_clear_counts: Mapping[Symbol, int] = field(default_factory=lambda: MappingProxyType({}))
    is_over: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.symbol_clear_counts, MappingProxyType):
            object.__setattr__(self, "symbol_clear_counts", MappingProxyType(dict(self.symbol_clear_counts)))
