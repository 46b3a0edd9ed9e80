from __future__ import annotations

from typing import List, Optional

from jsonschema import ValidationError


class MuseumGenError(Exception):
    """Base error for museum layout generation."""


class GenerationConfigError(MuseumGenError):
    """Raised when the library or parameters cannot produce any layout.

    Always raised before the first module is confirmed, so a failed run never
    leaves a partial layout behind.
    """


class LibraryLoadError(MuseumGenError):
    """Raised when a template or content document cannot be loaded."""

    def __init__(self, message: str, errors: Optional[List[ValidationError]] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_human(self) -> str:
        parts = [str(self)]
        for e in self.errors:
            path = "/".join(str(p) for p in e.path) or "<root>"
            parts.append(f" - at {path}: {e.message}")
        return "\n".join(parts)
