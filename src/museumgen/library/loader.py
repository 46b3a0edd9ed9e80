"""Load template and content libraries from JSON or YAML documents.

Documents are validated against the JSON Schemas bundled in
``museumgen.data.schemas`` before being turned into frozen dataclasses, so
anything past validation can assume well-formed fields.
"""
from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict

import yaml
from jsonschema import Draft202012Validator

from ..errors import LibraryLoadError
from ..geometry import Facing, Pose, Vec2, normalize_rotation
from .library import ContentLibrary, TemplateLibrary
from .models import Category, ContentTemplate, DecorNode, ModuleTemplate, Shape, SocketDef

logger = logging.getLogger(__name__)

_DATA_PKG = "museumgen.data"
MODULE_SCHEMA = "module_library"
CONTENT_SCHEMA = "content_library"


@lru_cache(maxsize=None)
def _load_schema(name: str) -> Dict[str, Any]:
    resource = resources.files(_DATA_PKG).joinpath("schemas", f"{name}.schema.json")
    with resource.open("r", encoding="utf-8") as fh:
        logger.debug("Loading schema %s", name)
        return json.load(fh)


def validate_document(data: Any, schema_name: str, source: str = "<memory>") -> None:
    validator = Draft202012Validator(_load_schema(schema_name))
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        for err in errors:
            logger.error("%s: schema error at %s: %s", source, list(err.path), err.message)
        raise LibraryLoadError(f"Validation failed for {source} against schema '{schema_name}'", errors)


def _read_document(path: os.PathLike | str) -> Any:
    p = Path(path)
    if not p.exists():
        raise LibraryLoadError(f"Library file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as fh:
            if p.suffix.lower() in (".yaml", ".yml"):
                return yaml.safe_load(fh) or {}
            return json.load(fh)
    except json.JSONDecodeError as e:
        raise LibraryLoadError(f"Failed to parse JSON at {p} (line {e.lineno}, column {e.colno}): {e.msg}") from e
    except yaml.YAMLError as e:
        raise LibraryLoadError(f"Failed to parse YAML at {p}: {e}") from e


def _vec(raw) -> Vec2:
    return Vec2(float(raw[0]), float(raw[1]))


def _decor_from_dict(raw: Dict[str, Any]) -> DecorNode:
    pose = Pose(
        position=_vec(raw.get("offset", [0, 0])),
        rotation=normalize_rotation(raw.get("rotation", 0)),
        height=float(raw.get("height", 0.0)),
    )
    children = tuple(_decor_from_dict(c) for c in raw.get("children", []))
    return DecorNode(name=str(raw["name"]), pose=pose, children=children)


def template_from_dict(raw: Dict[str, Any]) -> ModuleTemplate:
    sockets = tuple(
        SocketDef(offset=_vec(s["offset"]), facing=Facing(s["facing"])) for s in raw.get("sockets", [])
    )
    decor = DecorNode(
        name="<root>",
        children=tuple(_decor_from_dict(d) for d in raw.get("decor", [])),
    )
    return ModuleTemplate(
        id=str(raw["id"]),
        width=int(raw["width"]),
        depth=int(raw["depth"]),
        category=Category(raw["category"]),
        weight=int(raw.get("weight", 1)),
        sockets=sockets,
        shape=Shape(raw.get("shape", "other")),
        decor=decor,
    )


def library_from_dict(data: Any, source: str = "<memory>") -> TemplateLibrary:
    validate_document(data, MODULE_SCHEMA, source)
    try:
        library = TemplateLibrary(template_from_dict(t) for t in data["templates"])
    except ValueError as e:
        raise LibraryLoadError(f"{source}: {e}") from e
    logger.info("Loaded %d module templates from %s", len(library), source)
    return library


def content_from_dict(data: Any, source: str = "<memory>") -> ContentLibrary:
    validate_document(data, CONTENT_SCHEMA, source)
    try:
        content = ContentLibrary(
            ContentTemplate(id=str(i["id"]), name=str(i.get("name", i["id"])), tags=tuple(i.get("tags", [])))
            for i in data["items"]
        )
    except ValueError as e:
        raise LibraryLoadError(f"{source}: {e}") from e
    logger.info("Loaded %d content templates from %s", len(content), source)
    return content


def load_library(path: os.PathLike | str) -> TemplateLibrary:
    return library_from_dict(_read_document(path), source=str(path))


def load_content(path: os.PathLike | str) -> ContentLibrary:
    return content_from_dict(_read_document(path), source=str(path))


def _bundled(name: str) -> Any:
    with resources.files(_DATA_PKG).joinpath(name).open("r", encoding="utf-8") as fh:
        return json.load(fh)


def default_library() -> TemplateLibrary:
    """The bundled museum wing: spawn hall, corridors, turns, galleries and end rooms."""
    return library_from_dict(_bundled("default_library.json"), source="default_library.json")


def default_content() -> ContentLibrary:
    """The bundled gallery pieces: paintings, statues, relics and jewels."""
    return content_from_dict(_bundled("default_content.json"), source="default_content.json")
