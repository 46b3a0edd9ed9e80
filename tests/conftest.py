import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from museumgen.broadcast import RecordingBroadcaster  # noqa: E402
from museumgen.geometry import Facing, Vec2  # noqa: E402
from museumgen.layout import ConnectorGraph, ModuleRegistry, OccupancyGrid, PlacementEngine  # noqa: E402
from museumgen.library import Category, ModuleTemplate, SocketDef, TemplateLibrary  # noqa: E402
from museumgen.rng import SeedManager  # noqa: E402


def socket(x, z, facing):
    return SocketDef(offset=Vec2(float(x), float(z)), facing=Facing(facing))


@pytest.fixture
def cross_spawn():
    """3x3 spawn room with a doorway on every side."""
    return ModuleTemplate(
        id="cross",
        width=3,
        depth=3,
        category=Category.SPAWN,
        sockets=(
            socket(0, 1.5, "north"),
            socket(1.5, 0, "east"),
            socket(0, -1.5, "south"),
            socket(-1.5, 0, "west"),
        ),
    )


@pytest.fixture
def corridor():
    return ModuleTemplate(
        id="corridor",
        width=3,
        depth=3,
        category=Category.NORMAL,
        weight=2,
        sockets=(socket(0, -1.5, "south"), socket(0, 1.5, "north")),
    )


@pytest.fixture
def end_cap():
    return ModuleTemplate(
        id="end_cap",
        width=3,
        depth=3,
        category=Category.ENDING,
        sockets=(socket(0, -1.5, "south"),),
    )


@pytest.fixture
def small_library(cross_spawn, corridor, end_cap):
    return TemplateLibrary([cross_spawn, corridor, end_cap])


class EngineKit:
    """A placement engine wired to fresh bookkeeping, for direct engine tests."""

    def __init__(self, seed=1234, max_attempts=3):
        self.rng = SeedManager(seed)
        self.registry = ModuleRegistry()
        self.grid = OccupancyGrid(1.0)
        self.graph = ConnectorGraph()
        self.recorder = RecordingBroadcaster()
        self.engine = PlacementEngine(
            self.registry, self.grid, self.graph, self.recorder, self.rng, max_attempts=max_attempts
        )


@pytest.fixture
def kit():
    return EngineKit()
