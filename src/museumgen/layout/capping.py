from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..library.models import ModuleTemplate
from .connectors import ConnectorGraph
from .placement import PlacementEngine
from .registry import ModuleRegistry

logger = logging.getLogger(__name__)


@dataclass
class CappingReport:
    attempted: int = 0
    capped: int = 0
    skipped_over_budget: int = 0


class CappingPass:
    """Closes connectors left open after growth with ending rooms.

    Connectors are handled in list order, skipping any that were paired in the
    meantime. A connector nothing fits stays open for good.
    """

    def __init__(
        self,
        engine: PlacementEngine,
        graph: ConnectorGraph,
        registry: ModuleRegistry,
        ending_templates: Sequence[ModuleTemplate],
        room_budget: Optional[int] = None,
    ) -> None:
        self.engine = engine
        self.graph = graph
        self.registry = registry
        self.ending_templates = list(ending_templates)
        self.room_budget = room_budget

    def run(self, leftovers: Iterable[int]) -> CappingReport:
        report = CappingReport()
        if not self.ending_templates:
            logger.debug("No ending templates; capping skipped")
            return report

        for connector in leftovers:
            if self.graph.is_paired(connector):
                continue
            if self.room_budget is not None and len(self.registry) >= self.room_budget:
                report.skipped_over_budget += 1
                continue
            report.attempted += 1
            if self.engine.try_place_from(self.ending_templates, connector) is not None:
                report.capped += 1

        logger.debug(
            "Capping: %d attempted, %d capped, %d skipped over budget",
            report.attempted, report.capped, report.skipped_over_budget,
        )
        return report
