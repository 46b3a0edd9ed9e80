from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from ..geometry import Facing, Pose, Vec2


class Category(Enum):
    SPAWN = "spawn"
    NORMAL = "normal"
    ENDING = "ending"


class Shape(Enum):
    """Coarse room shape, informational only."""

    STRAIGHT = "straight"
    TURN = "turn"
    T = "t"
    OTHER = "other"


@dataclass(frozen=True)
class SocketDef:
    """Connector socket in template-local space.

    offset is in world units relative to the template centre; facing points out
    of the room through the doorway.
    """

    offset: Vec2
    facing: Facing


@dataclass(frozen=True)
class DecorNode:
    """Named node in a template's decor hierarchy.

    Gallery groups and their slot placeholders are ordinary nodes; which names
    count as groups or slots is decided by the populator, not the template.
    """

    name: str
    pose: Pose = field(default_factory=Pose)
    children: Tuple["DecorNode", ...] = ()

    def find_deep(self, name: str, parent: Optional[Pose] = None) -> Optional[Tuple["DecorNode", Pose]]:
        """Depth-first search below this node for the first child named ``name``.

        Returns the node with its pose composed into the frame ``parent`` is
        expressed in (the module frame when called on a root node).
        """
        base = parent if parent is not None else Pose()
        for child in self.children:
            child_pose = base.compose(child.pose)
            if child.name == name:
                return child, child_pose
            found = child.find_deep(name, child_pose)
            if found is not None:
                return found
        return None


@dataclass(frozen=True)
class ModuleTemplate:
    id: str
    width: int
    depth: int
    category: Category
    weight: int = 1
    sockets: Tuple[SocketDef, ...] = ()
    shape: Shape = Shape.OTHER
    decor: DecorNode = field(default_factory=lambda: DecorNode(name="<root>"))

    def __post_init__(self) -> None:
        if self.width <= 0 or self.depth <= 0:
            raise ValueError(f"Template '{self.id}' footprint must be positive, got {self.width}x{self.depth}")
        if self.weight <= 0:
            raise ValueError(f"Template '{self.id}' weight must be a positive integer, got {self.weight}")


@dataclass(frozen=True)
class ContentTemplate:
    """Decorative item that can replace a gallery slot of the same name."""

    id: str
    name: str = ""
    tags: Tuple[str, ...] = ()
