from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..broadcast import MODULE, PlacementRecord, SpawnBroadcaster
from ..geometry import CARDINAL_ROTATIONS, ORIGIN
from ..library.library import pick_weighted
from ..library.models import ModuleTemplate
from ..rng import SeedManager
from .connectors import ConnectorGraph
from .model import ModuleInstance, TentativeModule
from .occupancy import OccupancyGrid
from .registry import ModuleRegistry

logger = logging.getLogger(__name__)

# Minimum dot(new facing, -existing facing) for two sockets to be joined.
ALIGNMENT_THRESHOLD = 0.95


@dataclass(frozen=True)
class PlacementResult:
    module: ModuleInstance
    socket_id: int  # socket of the new module joined to the existing one


def module_record(module: ModuleInstance) -> PlacementRecord:
    return PlacementRecord(
        kind=MODULE,
        instance_id=module.id,
        template_id=module.template.id,
        position=(module.position.x, 0.0, module.position.z),
        rotation=module.rotation,
    )


class PlacementEngine:
    """Fits one template against one open socket.

    The search is first-success: sockets of the new template are tried in a
    shuffled order, each against the four cardinal rotations, and the first
    combination that faces the existing socket and fits the occupancy grid is
    confirmed. Nothing already confirmed is ever moved or undone.
    """

    def __init__(
        self,
        registry: ModuleRegistry,
        grid: OccupancyGrid,
        graph: ConnectorGraph,
        broadcaster: SpawnBroadcaster,
        rng: SeedManager,
        max_attempts: int = 20,
    ) -> None:
        self.registry = registry
        self.grid = grid
        self.graph = graph
        self.broadcaster = broadcaster
        self.rng = rng
        self.max_attempts = max_attempts

    def place_spawn(self, template: ModuleTemplate) -> ModuleInstance:
        tentative = TentativeModule(template, position=ORIGIN, rotation=0)
        module = self._confirm(tentative)
        logger.info("Placed spawn module '%s' with %d connectors", template.id, len(module.socket_ids))
        return module

    def try_place(self, template: ModuleTemplate, existing_socket_id: int) -> Optional[PlacementResult]:
        if self.graph.is_paired(existing_socket_id):
            logger.debug("Socket %d already paired; nothing to place", existing_socket_id)
            return None
        if not template.sockets:
            logger.debug("Template '%s' has no sockets; cannot attach", template.id)
            return None

        existing = self.registry.socket(existing_socket_id)
        wanted = -existing.facing
        for attempt in range(self.max_attempts):
            tentative = TentativeModule(template)
            for index in self.rng.shuffled(range(len(template.sockets))):
                for rotation in CARDINAL_ROTATIONS:
                    tentative.rotation = rotation
                    tentative.align_socket(index, existing.position)
                    _, facing = tentative.socket_world(index)
                    if facing.dot(wanted) < ALIGNMENT_THRESHOLD:
                        continue
                    if not self.grid.can_place(tentative):
                        logger.debug(
                            "'%s' socket %d rot=%d collides at %s",
                            template.id, index, rotation, tentative.position.as_tuple(),
                        )
                        continue
                    module = self._confirm(tentative, index, existing_socket_id)
                    return PlacementResult(module=module, socket_id=module.socket_ids[index])
            logger.debug(
                "Attempt %d/%d: '%s' does not fit socket %d",
                attempt + 1, self.max_attempts, template.id, existing_socket_id,
            )
        return None

    def try_place_from(self, templates: Sequence[ModuleTemplate], existing_socket_id: int) -> Optional[PlacementResult]:
        """Walk templates in weighted random order until one fits."""
        for template in pick_weighted(templates, self.rng):
            result = self.try_place(template, existing_socket_id)
            if result is not None:
                return result
        if templates:
            logger.debug("No template from %d candidates fits socket %d", len(templates), existing_socket_id)
        return None

    def _confirm(
        self,
        tentative: TentativeModule,
        socket_index: Optional[int] = None,
        existing_socket_id: Optional[int] = None,
    ) -> ModuleInstance:
        module = self.registry.confirm(tentative, self.grid.cells_for(tentative))
        self.grid.claim(module)
        if socket_index is not None and existing_socket_id is not None:
            self.graph.pair(existing_socket_id, module.socket_ids[socket_index])
        self.broadcaster.spawn(module_record(module))
        logger.debug(
            "Confirmed '%s' as module #%d at %s rot=%d",
            module.template.id, module.id, module.position.as_tuple(), module.rotation,
        )
        return module
