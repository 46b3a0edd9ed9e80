"""Module, socket and slot records for one layout.

A TentativeModule is a free-standing trial placement with no ids: dropping it
is all it takes to discard it. Confirmed modules and sockets are stored in the
ModuleRegistry arena and referenced by integer id everywhere else.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from ..geometry import FORWARD, ORIGIN, RIGHT, Pose, Vec2
from ..library.models import ModuleTemplate

Cell = Tuple[int, int]


@dataclass
class TentativeModule:
    template: ModuleTemplate
    position: Vec2 = ORIGIN
    rotation: int = 0

    @property
    def right(self) -> Vec2:
        return RIGHT.rotated(self.rotation)

    @property
    def forward(self) -> Vec2:
        return FORWARD.rotated(self.rotation)

    def socket_world(self, index: int) -> Tuple[Vec2, Vec2]:
        """World position and facing of the template socket at ``index``."""
        sock = self.template.sockets[index]
        return (
            self.position + sock.offset.rotated(self.rotation),
            sock.facing.vector.rotated(self.rotation),
        )

    def align_socket(self, index: int, target: Vec2) -> None:
        """Translate the module so the socket at ``index`` sits on ``target``."""
        current, _ = self.socket_world(index)
        self.position = self.position + (target - current)


@dataclass(frozen=True)
class Socket:
    id: int
    module_id: int
    index: int
    position: Vec2
    facing: Vec2


class SlotState(Enum):
    PENDING = "pending"
    FILLED = "filled"
    EMPTY = "empty"


@dataclass
class GallerySlot:
    """Placeholder anchor inside a confirmed module."""

    group: str
    name: str
    pose: Pose
    state: SlotState = SlotState.PENDING
    content_id: Optional[int] = None


@dataclass(frozen=True)
class ContentInstance:
    id: int
    template_id: str
    module_id: int
    group: str
    pose: Pose


@dataclass
class ModuleInstance:
    id: int
    template: ModuleTemplate
    position: Vec2
    rotation: int
    socket_ids: Tuple[int, ...]
    cells: FrozenSet[Cell] = frozenset()
    slots: List[GallerySlot] = field(default_factory=list)

    @property
    def right(self) -> Vec2:
        return RIGHT.rotated(self.rotation)

    @property
    def forward(self) -> Vec2:
        return FORWARD.rotated(self.rotation)

    @property
    def pose(self) -> Pose:
        return Pose(position=self.position, rotation=self.rotation)
