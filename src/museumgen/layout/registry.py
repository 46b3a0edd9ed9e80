from __future__ import annotations

import logging
from typing import Iterable, List

from ..geometry import Pose
from .model import Cell, ContentInstance, ModuleInstance, Socket, TentativeModule

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Arena of confirmed modules, their sockets and content instances.

    Ids are list indices, handed out in confirmation order, so they are stable
    across runs with the same seed.
    """

    def __init__(self) -> None:
        self._modules: List[ModuleInstance] = []
        self._sockets: List[Socket] = []
        self._contents: List[ContentInstance] = []

    def confirm(self, tentative: TentativeModule, cells: Iterable[Cell]) -> ModuleInstance:
        module_id = len(self._modules)
        socket_ids = []
        for index in range(len(tentative.template.sockets)):
            position, facing = tentative.socket_world(index)
            socket = Socket(id=len(self._sockets), module_id=module_id, index=index,
                            position=position, facing=facing)
            self._sockets.append(socket)
            socket_ids.append(socket.id)
        module = ModuleInstance(
            id=module_id,
            template=tentative.template,
            position=tentative.position,
            rotation=tentative.rotation,
            socket_ids=tuple(socket_ids),
            cells=frozenset(cells),
        )
        self._modules.append(module)
        logger.debug("Registered module #%d (%s) with sockets %s", module_id, module.template.id, socket_ids)
        return module

    def add_content(self, template_id: str, module_id: int, group: str, pose: Pose) -> ContentInstance:
        content = ContentInstance(id=len(self._contents), template_id=template_id,
                                  module_id=module_id, group=group, pose=pose)
        self._contents.append(content)
        return content

    def module(self, module_id: int) -> ModuleInstance:
        return self._modules[module_id]

    def socket(self, socket_id: int) -> Socket:
        return self._sockets[socket_id]

    @property
    def modules(self) -> List[ModuleInstance]:
        return list(self._modules)

    @property
    def sockets(self) -> List[Socket]:
        return list(self._sockets)

    @property
    def contents(self) -> List[ContentInstance]:
        return list(self._contents)

    def __len__(self) -> int:
        return len(self._modules)
