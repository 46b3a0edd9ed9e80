from .branches import Branch, BranchGrower, BranchState, distribute_rooms
from .capping import CappingPass, CappingReport
from .connectors import ConnectorGraph
from .model import ContentInstance, GallerySlot, ModuleInstance, Socket, SlotState, TentativeModule
from .occupancy import OccupancyGrid
from .placement import ALIGNMENT_THRESHOLD, PlacementEngine, PlacementResult
from .registry import ModuleRegistry

__all__ = [
    "ALIGNMENT_THRESHOLD",
    "Branch",
    "BranchGrower",
    "BranchState",
    "CappingPass",
    "CappingReport",
    "ConnectorGraph",
    "ContentInstance",
    "GallerySlot",
    "ModuleInstance",
    "ModuleRegistry",
    "OccupancyGrid",
    "PlacementEngine",
    "PlacementResult",
    "SlotState",
    "Socket",
    "TentativeModule",
    "distribute_rooms",
]
