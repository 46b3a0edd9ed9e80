from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from ..library.models import ModuleTemplate
from ..rng import SeedManager
from .connectors import ConnectorGraph
from .placement import PlacementEngine, PlacementResult

logger = logging.getLogger(__name__)


def distribute_rooms(total: int, connectors: int) -> List[int]:
    """Split ``total`` rooms across ``connectors`` branches.

    Every branch gets the integer quotient; the remainder goes one each to the
    first branches.
    """
    if connectors <= 0:
        return []
    base, extra = divmod(max(0, total), connectors)
    return [base + (1 if i < extra else 0) for i in range(connectors)]


class BranchState(Enum):
    ACTIVE = "active"
    DONE = "done"
    EXHAUSTED = "exhausted"


@dataclass
class Branch:
    start_socket: int
    target: int
    worklist: List[int] = field(default_factory=list)
    placed: int = 0
    state: BranchState = BranchState.ACTIVE


class BranchGrower:
    """Grows one lineage of rooms out from a spawn connector.

    Connectors are popped from the branch worklist at random. A connector that
    cannot take a room is handed to the leftover list for the capping pass and
    never retried by the branch.
    """

    def __init__(
        self,
        engine: PlacementEngine,
        graph: ConnectorGraph,
        rng: SeedManager,
        normal_templates: Sequence[ModuleTemplate],
        ending_templates: Sequence[ModuleTemplate],
        force_endings: bool = True,
    ) -> None:
        self.engine = engine
        self.graph = graph
        self.rng = rng
        self.normal_templates = list(normal_templates)
        self.ending_templates = list(ending_templates)
        self.force_endings = force_endings

    def grow(self, start_socket: int, target: int, leftovers: List[int]) -> Branch:
        branch = Branch(start_socket=start_socket, target=target, worklist=[start_socket])

        while branch.worklist and branch.placed < branch.target:
            connector = branch.worklist.pop(self.rng.randrange(len(branch.worklist)))
            if self.graph.is_paired(connector):
                continue

            result = self._place(connector, final=branch.placed >= branch.target - 1)
            if result is None:
                logger.debug("Branch %d: connector %d stays open", start_socket, connector)
                leftovers.append(connector)
                continue

            branch.placed += 1
            self.graph.record_use(start_socket)
            fresh = [
                sid for sid in result.module.socket_ids
                if sid != result.socket_id and not self.graph.is_paired(sid)
            ]
            branch.worklist.extend(fresh)
            leftovers.extend(fresh)

        leftovers.extend(sid for sid in branch.worklist if not self.graph.is_paired(sid))
        branch.state = BranchState.DONE if branch.placed >= branch.target else BranchState.EXHAUSTED
        logger.debug(
            "Branch %d %s: %d/%d rooms, %d connectors unexplored",
            start_socket, branch.state.value, branch.placed, branch.target, len(branch.worklist),
        )
        return branch

    def _place(self, connector: int, final: bool) -> Optional[PlacementResult]:
        result: Optional[PlacementResult] = None
        if final and self.force_endings and self.ending_templates:
            result = self.engine.try_place_from(self.ending_templates, connector)
            if result is None:
                logger.debug("No ending room fits connector %d; trying normal rooms", connector)
        if result is None and self.normal_templates:
            result = self.engine.try_place_from(self.normal_templates, connector)
        return result
