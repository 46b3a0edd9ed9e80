from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Protocol, Tuple

logger = logging.getLogger(__name__)

MODULE = "module"
CONTENT = "content"


@dataclass(frozen=True)
class PlacementRecord:
    """One confirmed module or content instance, as handed to observers."""

    kind: str
    instance_id: int
    template_id: str
    position: Tuple[float, float, float]
    rotation: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "instance_id": self.instance_id,
            "template_id": self.template_id,
            "position": list(self.position),
            "rotation": self.rotation,
        }


class SpawnBroadcaster(Protocol):
    """Makes a confirmed placement visible to observers.

    Only ever receives confirmed instances, in confirmation order.
    """

    def spawn(self, record: PlacementRecord) -> None:
        ...


class RecordingBroadcaster:
    """Keeps every record in memory; the generator's own result log."""

    def __init__(self) -> None:
        self.records: List[PlacementRecord] = []

    def spawn(self, record: PlacementRecord) -> None:
        logger.debug("Spawned %s %s #%d at %s rot=%d", record.kind, record.template_id,
                     record.instance_id, record.position, record.rotation)
        self.records.append(record)


class FanOutBroadcaster:
    """Forwards each record to several broadcasters in order."""

    def __init__(self, targets: Iterable[SpawnBroadcaster]) -> None:
        self.targets = list(targets)

    def spawn(self, record: PlacementRecord) -> None:
        for target in self.targets:
            target.spawn(record)
