from __future__ import annotations

import logging
from typing import Dict, List, Protocol

from ..geometry import Vec2
from ..library.models import ModuleTemplate
from .model import Cell, ModuleInstance

logger = logging.getLogger(__name__)


class Placed(Protocol):
    template: ModuleTemplate
    position: Vec2

    @property
    def right(self) -> Vec2: ...

    @property
    def forward(self) -> Vec2: ...


class OccupancyGrid:
    """Set of claimed integer floor cells.

    Cell centres are laid out along the module's rotated right/forward axes and
    snapped with round-half-to-even. For even-sized footprints two centres can
    snap onto the same cell; that rounding is part of the layout's shape and is
    kept as-is.
    """

    def __init__(self, cell_size: float = 1.0) -> None:
        if cell_size <= 0:
            raise ValueError("cell_size must be positive")
        self.cell_size = cell_size
        self._owners: Dict[Cell, int] = {}

    def cells_for(self, module: Placed) -> List[Cell]:
        template = module.template
        right = module.right
        forward = module.forward
        half_w = (template.width - 1) * 0.5
        half_d = (template.depth - 1) * 0.5
        cells: List[Cell] = []
        for x in range(template.width):
            for z in range(template.depth):
                centre = (
                    module.position
                    + right.scaled((x - half_w) * self.cell_size)
                    + forward.scaled((z - half_d) * self.cell_size)
                )
                cells.append((int(round(centre.x / self.cell_size)), int(round(centre.z / self.cell_size))))
        return cells

    def can_place(self, module: Placed) -> bool:
        return not any(cell in self._owners for cell in self.cells_for(module))

    def claim(self, module: ModuleInstance) -> None:
        cells = self.cells_for(module)
        taken = [c for c in cells if c in self._owners]
        if taken:
            raise ValueError(f"Module #{module.id} overlaps claimed cells {sorted(set(taken))}")
        for cell in cells:
            self._owners[cell] = module.id
        logger.debug("Module #%d claimed %d cells", module.id, len(set(cells)))

    def owner(self, cell: Cell) -> int:
        return self._owners[cell]

    @property
    def owners(self) -> Dict[Cell, int]:
        return dict(self._owners)

    def __len__(self) -> int:
        return len(self._owners)
