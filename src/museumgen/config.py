from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .errors import GenerationConfigError

logger = logging.getLogger(__name__)


class GalleryParams(BaseModel):
    """Settings for the decorative population pass."""

    group_names: List[str] = Field(
        default_factory=lambda: ["gallery_1", "gallery_2", "gallery_3"],
        description="Names of decor nodes whose children are gallery slots",
    )
    spawn_chance: float = Field(0.8, ge=0.0, le=1.0, description="Chance that each eligible slot is filled")
    one_item_type_per_gallery: bool = Field(
        True, description="Fill a group with a single content type picked among its slots"
    )

    @field_validator("group_names")
    @classmethod
    def unique_group_names(cls, v: List[str]) -> List[str]:
        names = [str(n) for n in v or []]
        if any(not n for n in names):
            raise ValueError("Gallery group names must be non-empty")
        if len(set(names)) != len(names):
            raise ValueError("Gallery group names must be unique")
        return names


class GenerationParams(BaseModel):
    """Parameters for one layout generation run."""

    room_count: int = Field(10, ge=1, description="Total rooms including the spawn module")
    max_placement_attempts: int = Field(20, ge=1, description="Attempts per template against one connector")
    cell_size: float = Field(1.0, gt=0.0, description="World units per occupancy cell")
    force_ending_rooms: bool = Field(True, description="Prefer ending templates for a branch's last room")
    cap_within_room_budget: bool = Field(
        True, description="Stop the capping pass once room_count modules are confirmed"
    )
    spawn_template: Optional[str] = Field(None, description="Spawn template id; first spawn template if unset")
    gallery: GalleryParams = Field(default_factory=GalleryParams)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationParams":
        return cls.model_validate(data or {})

    @classmethod
    def from_yaml(cls, path: Path) -> "GenerationParams":
        return cls.from_dict(_load_yaml(path))

    def to_yaml(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(self.model_dump(), f, sort_keys=False)
        logger.info("Saved generation parameters to %s", path)


def _load_yaml(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise GenerationConfigError(f"Failed to parse YAML parameters at {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise GenerationConfigError(
            f"Parameter file {path} must contain a mapping at the top level, got {type(data).__name__}"
        )
    return data


def _deep_merge(base: dict, overlay: dict) -> dict:
    merged = dict(base)
    for k, v in (overlay or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            merged[k] = _deep_merge(base[k], v)
        else:
            merged[k] = v
    return merged


def load_params(user_path: Optional[Path] = None, **overrides: Any) -> GenerationParams:
    """Load parameters from bundled defaults, an optional YAML override and keyword overrides.

    Keyword overrides whose value is None are ignored so CLI flags can be passed through as-is.
    """
    try:
        with resources.files("museumgen.data").joinpath("default_params.yaml").open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Default parameters not found; falling back to model defaults.")
        data = GenerationParams().model_dump()

    if user_path is not None:
        if user_path.exists():
            data = _deep_merge(data, _load_yaml(user_path))
            logger.info("Loaded generation parameters from %s", user_path)
        else:
            logger.warning("Parameter file not found: %s", user_path)

    data = _deep_merge(data, {k: v for k, v in overrides.items() if v is not None})
    params = GenerationParams.from_dict(data)
    logger.debug("Generation parameters: %s", params)
    return params
