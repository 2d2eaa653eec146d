"""Static unit catalog.

Category modules are imported on first use only. :data:`CATEGORY_INFO` lets
selectors list every category without loading any unit data.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Dict, List

from ..errors import CatalogIntegrityError, CategoryNotFound
from ..units import Category, CategoryId


@dataclass(frozen=True)
class CategoryInfo:
    id: str
    name: str
    icon: str
    description: str


CATEGORY_INFO: Dict[str, CategoryInfo] = {
    info.id: info
    for info in (
        CategoryInfo(CategoryId.LENGTH.value, "Length", "ruler", "Units for measuring distance or length"),
        CategoryInfo(CategoryId.MASS.value, "Mass", "weight", "Units for measuring mass or weight"),
        CategoryInfo(CategoryId.TEMPERATURE.value, "Temperature", "thermometer", "Units for measuring temperature"),
        CategoryInfo(CategoryId.VOLUME.value, "Volume", "beaker", "Units for measuring three-dimensional space"),
        CategoryInfo(CategoryId.AREA.value, "Area", "square", "Units for measuring two-dimensional space"),
        CategoryInfo(CategoryId.TIME.value, "Time", "clock", "Units for measuring time intervals"),
        CategoryInfo(CategoryId.SPEED.value, "Speed", "gauge", "Units for measuring velocity"),
        CategoryInfo(CategoryId.DIGITAL.value, "Digital", "database", "Units for measuring digital information"),
    )
}

CATEGORY_MODULES: Dict[str, str] = {
    category_id: f"{__name__}.{category_id}" for category_id in CATEGORY_INFO
}


def known_category_ids() -> List[str]:
    return list(CATEGORY_MODULES)


def category_display_name(category_id: str) -> str:
    """Return the display name of *category_id*, echoing the id when unknown."""

    info = CATEGORY_INFO.get(str(category_id))
    return info.name if info is not None else str(category_id)


def import_category(category_id: str) -> Category:
    """Import the data module for *category_id* and return its category."""

    module_name = CATEGORY_MODULES.get(str(category_id))
    if module_name is None:
        raise CategoryNotFound(str(category_id))
    module = importlib.import_module(module_name)
    category = getattr(module, "CATEGORY", None)
    if not isinstance(category, Category):
        raise CatalogIntegrityError(str(category_id), f"module {module_name} does not define CATEGORY")
    return category


__all__ = [
    "CategoryInfo",
    "CATEGORY_INFO",
    "CATEGORY_MODULES",
    "known_category_ids",
    "category_display_name",
    "import_category",
]
