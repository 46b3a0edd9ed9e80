from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .broadcast import FanOutBroadcaster, PlacementRecord, RecordingBroadcaster, SpawnBroadcaster
from .config import GenerationParams
from .gallery import GalleryPopulator, GalleryReport
from .layout.branches import Branch, BranchGrower, distribute_rooms
from .layout.capping import CappingPass, CappingReport
from .layout.connectors import ConnectorGraph
from .layout.model import Cell, ContentInstance, ModuleInstance, Socket
from .layout.occupancy import OccupancyGrid
from .layout.placement import PlacementEngine
from .layout.registry import ModuleRegistry
from .library.library import ContentLibrary, TemplateLibrary
from .library.models import ContentTemplate
from .rng import SeedManager

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Everything a run produced, in confirmation order."""

    seed: int
    records: Tuple[PlacementRecord, ...]
    modules: List[ModuleInstance]
    sockets: List[Socket]
    contents: List[ContentInstance]
    pairs: List[Tuple[int, int]]
    occupied: Dict[Cell, int]
    branches: List[Branch] = field(default_factory=list)
    capping: CappingReport = field(default_factory=CappingReport)
    gallery: GalleryReport = field(default_factory=GalleryReport)
    spawn_usage: Dict[int, int] = field(default_factory=dict)

    @property
    def rooms_placed(self) -> int:
        return len(self.modules)

    @property
    def open_connectors(self) -> int:
        paired = {sid for pair in self.pairs for sid in pair}
        return sum(1 for s in self.sockets if s.id not in paired)

    def signature(self) -> str:
        """Deterministic digest of the ordered placement records."""
        raw = json.dumps([r.to_dict() for r in self.records], sort_keys=True).encode("utf-8")
        return hashlib.blake2b(raw, digest_size=16).hexdigest()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "signature": self.signature(),
            "rooms_placed": self.rooms_placed,
            "connectors_left_open": self.open_connectors,
            "spawn_connector_usage": {str(k): v for k, v in self.spawn_usage.items()},
            "branches": [
                {"start_socket": b.start_socket, "target": b.target, "placed": b.placed, "state": b.state.value}
                for b in self.branches
            ],
            "capping": {
                "attempted": self.capping.attempted,
                "capped": self.capping.capped,
                "skipped_over_budget": self.capping.skipped_over_budget,
            },
            "gallery": {
                "groups": self.gallery.groups_found,
                "filled": self.gallery.filled,
                "empty": self.gallery.emptied,
            },
            "records": [r.to_dict() for r in self.records],
        }


class MuseumGenerator:
    """Builds one museum layout from a template library.

    Order of a run: spawn module at the origin, one branch per spawn connector,
    capping of leftover connectors, then gallery population. Every stage draws
    from a single seeded RNG so the same inputs always give the same records.
    """

    def __init__(
        self,
        library: TemplateLibrary,
        params: Optional[GenerationParams] = None,
        content: Optional[Mapping[str, ContentTemplate]] = None,
        broadcaster: Optional[SpawnBroadcaster] = None,
    ) -> None:
        self.library = library
        self.params = params or GenerationParams()
        self.content = content if content is not None else ContentLibrary()
        self.broadcaster = broadcaster

    def generate(self, seed: Optional[Any] = None) -> GenerationResult:
        params = self.params
        # Configuration errors abort before anything is confirmed.
        spawn = self.library.resolve_spawn(params.spawn_template)
        normal = self.library.normal_templates
        endings = self.library.ending_templates

        rng = SeedManager(seed)
        registry = ModuleRegistry()
        grid = OccupancyGrid(params.cell_size)
        graph = ConnectorGraph()
        recorder = RecordingBroadcaster()
        broadcaster: SpawnBroadcaster = recorder
        if self.broadcaster is not None:
            broadcaster = FanOutBroadcaster([recorder, self.broadcaster])

        engine = PlacementEngine(registry, grid, graph, broadcaster, rng, params.max_placement_attempts)
        spawn_module = engine.place_spawn(spawn)
        graph.track_usage(spawn_module.socket_ids)

        targets = distribute_rooms(params.room_count - 1, len(spawn_module.socket_ids))
        grower = BranchGrower(engine, graph, rng, normal, endings, params.force_ending_rooms)
        leftovers: List[int] = []
        branches: List[Branch] = []
        for socket_id, target in zip(spawn_module.socket_ids, targets):
            if target > 0:
                branches.append(grower.grow(socket_id, target, leftovers))

        budget = params.room_count if params.cap_within_room_budget else None
        capping = CappingPass(engine, graph, registry, endings, room_budget=budget).run(leftovers)

        gallery = GalleryPopulator(
            self.content,
            params.gallery.group_names,
            params.gallery.spawn_chance,
            params.gallery.one_item_type_per_gallery,
            rng,
            registry,
            broadcaster,
        ).populate(registry.modules)

        result = GenerationResult(
            seed=rng.seed,
            records=tuple(recorder.records),
            modules=registry.modules,
            sockets=registry.sockets,
            contents=registry.contents,
            pairs=graph.pairs(),
            occupied=grid.owners,
            branches=branches,
            capping=capping,
            gallery=gallery,
            spawn_usage=graph.usage,
        )
        logger.info(
            "Museum generated with %d rooms total (%d connectors left open, %d gallery items)",
            result.rooms_placed, result.open_connectors, len(result.contents),
        )
        return result


def generate(
    library: TemplateLibrary,
    params: Optional[GenerationParams] = None,
    seed: Optional[Any] = None,
    content: Optional[Mapping[str, ContentTemplate]] = None,
    broadcaster: Optional[SpawnBroadcaster] = None,
) -> GenerationResult:
    """Generate one layout; see MuseumGenerator."""
    return MuseumGenerator(library, params, content=content, broadcaster=broadcaster).generate(seed)
