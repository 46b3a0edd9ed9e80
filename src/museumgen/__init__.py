"""Procedural museum layouts built from connectable room templates."""

from .broadcast import PlacementRecord, RecordingBroadcaster, SpawnBroadcaster
from .config import GalleryParams, GenerationParams, load_params
from .errors import GenerationConfigError, LibraryLoadError, MuseumGenError
from .generator import GenerationResult, MuseumGenerator, generate
from .library import ContentLibrary, TemplateLibrary, default_content, default_library

__all__ = [
    "ContentLibrary",
    "GalleryParams",
    "GenerationConfigError",
    "GenerationParams",
    "GenerationResult",
    "LibraryLoadError",
    "MuseumGenError",
    "MuseumGenerator",
    "PlacementRecord",
    "RecordingBroadcaster",
    "SpawnBroadcaster",
    "TemplateLibrary",
    "default_content",
    "default_library",
    "generate",
    "load_params",
]

__version__ = "0.1.0"
