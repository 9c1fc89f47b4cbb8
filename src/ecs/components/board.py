from dataclasses import dataclass, field
from typing import List, Optional

from ecs.components.symbol import Symbol

Cells = List[List[Optional[Symbol]]]


@dataclass(slots=True)
class Board:
    """The well: ``rows`` x ``cols`` cells, row 0 at the top.

    Each cell holds a Symbol or None when empty. Dimensions are fixed once the
    component is created; only ``cells`` is ever reassigned.
    """
    rows: int
    cols: int
    cells: Cells = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[None] * self.cols for _ in range(self.rows)]
