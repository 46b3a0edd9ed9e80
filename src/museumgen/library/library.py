from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..errors import GenerationConfigError
from ..rng import SeedManager
from .models import Category, ContentTemplate, ModuleTemplate

logger = logging.getLogger(__name__)


def pick_weighted(candidates: Sequence[ModuleTemplate], rng: SeedManager) -> List[ModuleTemplate]:
    """Return candidates in weighted random order.

    Each template appears ``weight`` times; the caller walks the list and keeps
    the first template that fits, so heavier templates are both more likely to
    be tried first and retried more often.
    """
    expanded: List[ModuleTemplate] = []
    for template in candidates:
        expanded.extend([template] * template.weight)
    rng.shuffle(expanded)
    return expanded


class TemplateLibrary:
    """Catalog of module templates, in load order."""

    def __init__(self, templates: Optional[Iterable[ModuleTemplate]] = None) -> None:
        self._templates: Dict[str, ModuleTemplate] = {}
        for t in templates or ():
            self.add(t)

    def add(self, template: ModuleTemplate) -> None:
        if template.id in self._templates:
            raise ValueError(f"Duplicate template id: {template.id}")
        self._templates[template.id] = template

    def get(self, template_id: str) -> ModuleTemplate:
        try:
            return self._templates[template_id]
        except KeyError as e:
            raise KeyError(f"Unknown template id: {template_id}") from e

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self):
        return iter(self._templates.values())

    def by_category(self, category: Category) -> List[ModuleTemplate]:
        return [t for t in self._templates.values() if t.category is category]

    @property
    def normal_templates(self) -> List[ModuleTemplate]:
        return self.by_category(Category.NORMAL)

    @property
    def ending_templates(self) -> List[ModuleTemplate]:
        return self.by_category(Category.ENDING)

    def resolve_spawn(self, spawn_id: Optional[str] = None) -> ModuleTemplate:
        """Return the template the layout starts from.

        Raises:
            GenerationConfigError: empty library, unknown or non-spawn id, no
                spawn template, or a spawn template without sockets.
        """
        if not self._templates:
            raise GenerationConfigError("Template library is empty")

        if spawn_id is not None:
            if spawn_id not in self._templates:
                raise GenerationConfigError(f"Spawn template '{spawn_id}' not found in library")
            spawn = self._templates[spawn_id]
            if spawn.category is not Category.SPAWN:
                raise GenerationConfigError(
                    f"Template '{spawn_id}' is {spawn.category.value}, not a spawn template"
                )
        else:
            spawns = self.by_category(Category.SPAWN)
            if not spawns:
                raise GenerationConfigError("Template library has no spawn template")
            if len(spawns) > 1:
                logger.warning(
                    "Library has %d spawn templates; using '%s' (set spawn_template to choose)",
                    len(spawns),
                    spawns[0].id,
                )
            spawn = spawns[0]

        if not spawn.sockets:
            raise GenerationConfigError(f"Spawn template '{spawn.id}' has no connectors")
        return spawn


class ContentLibrary(Mapping[str, ContentTemplate]):
    """Read-only name -> decorative template lookup used by the gallery pass."""

    def __init__(self, items: Optional[Iterable[ContentTemplate]] = None) -> None:
        self._items: Dict[str, ContentTemplate] = {}
        for item in items or ():
            if item.id in self._items:
                raise ValueError(f"Duplicate content id: {item.id}")
            self._items[item.id] = item

    def __getitem__(self, key: str) -> ContentTemplate:
        return self._items[key]

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
