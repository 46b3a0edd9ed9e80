from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class ConnectorGraph:
    """Pairings between confirmed sockets, keyed by socket id."""

    def __init__(self) -> None:
        self._pairs: Dict[int, int] = {}
        self._usage: Dict[int, int] = {}

    def is_paired(self, socket_id: int) -> bool:
        return socket_id in self._pairs

    def partner(self, socket_id: int) -> Optional[int]:
        return self._pairs.get(socket_id)

    def pair(self, a: int, b: int) -> bool:
        """Link two sockets both ways. Returns False (and changes nothing) if either is taken."""
        if a == b or a in self._pairs or b in self._pairs:
            logger.debug("Refusing to pair sockets %d and %d", a, b)
            return False
        self._pairs[a] = b
        self._pairs[b] = a
        return True

    def pairs(self) -> List[Tuple[int, int]]:
        return sorted((a, b) for a, b in self._pairs.items() if a < b)

    def track_usage(self, socket_ids: Iterable[int]) -> None:
        for sid in socket_ids:
            self._usage.setdefault(sid, 0)

    def record_use(self, socket_id: int) -> None:
        if socket_id in self._usage:
            self._usage[socket_id] += 1

    @property
    def usage(self) -> Dict[int, int]:
        return dict(self._usage)
