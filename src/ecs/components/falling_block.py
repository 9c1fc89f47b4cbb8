from dataclasses import dataclass

from ecs.components.symbol import Symbol


@dataclass(slots=True)
class FallingBlock:
    """The single block under player control until it lands."""
    symbol: Symbol
    row: int
    col: int
