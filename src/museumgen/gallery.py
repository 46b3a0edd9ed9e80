"""Post-layout pass that fills gallery slots with decorative content.

A gallery group is a named node somewhere in a module's decor tree; its direct
children named after a content template are the slots. The pass runs once,
after the topology is final, and only reads the layout: each module is handled
on its own, with the content lookup and the shared RNG as the only inputs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence

from .broadcast import CONTENT, PlacementRecord, SpawnBroadcaster
from .layout.model import GallerySlot, ModuleInstance, SlotState
from .layout.registry import ModuleRegistry
from .library.models import ContentTemplate
from .rng import SeedManager

logger = logging.getLogger(__name__)


@dataclass
class GalleryReport:
    groups_found: int = 0
    filled: int = 0
    emptied: int = 0


class GalleryPopulator:
    def __init__(
        self,
        content: Mapping[str, ContentTemplate],
        group_names: Sequence[str],
        spawn_chance: float,
        one_type_per_group: bool,
        rng: SeedManager,
        registry: ModuleRegistry,
        broadcaster: SpawnBroadcaster,
    ) -> None:
        self.content = content
        self.group_names = list(group_names)
        self.spawn_chance = spawn_chance
        self.one_type_per_group = one_type_per_group
        self.rng = rng
        self.registry = registry
        self.broadcaster = broadcaster

    def populate(self, modules: Iterable[ModuleInstance]) -> GalleryReport:
        report = GalleryReport()
        if not self.content:
            logger.info("No gallery content available; skipping gallery population")
            return report

        for module in modules:
            filled = self._populate_module(module, report)
            if filled:
                logger.debug("Module #%d (%s): %d gallery items", module.id, module.template.id, filled)

        logger.info(
            "Gallery population: %d groups, %d slots filled, %d left empty",
            report.groups_found, report.filled, report.emptied,
        )
        return report

    def _populate_module(self, module: ModuleInstance, report: GalleryReport) -> int:
        filled = 0
        for group in self.group_names:
            found = module.template.decor.find_deep(group)
            if found is None:
                continue
            node, group_pose = found
            report.groups_found += 1

            slots: List[GallerySlot] = [
                GallerySlot(group=group, name=child.name, pose=module.pose.compose(group_pose.compose(child.pose)))
                for child in node.children
                if child.name in self.content
            ]
            module.slots.extend(slots)

            chosen = self._choose_type(slots)
            for slot in slots:
                if chosen is not None and slot.name != chosen:
                    self._leave_empty(slot, report)
                    continue
                if self.rng.random() < self.spawn_chance:
                    self._fill(module, slot, report)
                    filled += 1
                else:
                    self._leave_empty(slot, report)
        return filled

    def _choose_type(self, slots: Sequence[GallerySlot]) -> Optional[str]:
        if not self.one_type_per_group or not slots:
            return None
        types = list(dict.fromkeys(s.name for s in slots))
        chosen = self.rng.choice(types)
        logger.debug("Group '%s' restricted to '%s' out of %s", slots[0].group, chosen, types)
        return chosen

    def _fill(self, module: ModuleInstance, slot: GallerySlot, report: GalleryReport) -> None:
        content = self.registry.add_content(slot.name, module.id, slot.group, slot.pose)
        slot.state = SlotState.FILLED
        slot.content_id = content.id
        report.filled += 1
        self.broadcaster.spawn(
            PlacementRecord(
                kind=CONTENT,
                instance_id=content.id,
                template_id=content.template_id,
                position=(slot.pose.position.x, slot.pose.height, slot.pose.position.z),
                rotation=slot.pose.rotation,
            )
        )

    @staticmethod
    def _leave_empty(slot: GallerySlot, report: GalleryReport) -> None:
        slot.state = SlotState.EMPTY
        report.emptied += 1
