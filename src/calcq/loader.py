"""Lazy, memoising category loader.

Category data is imported on first use. Concurrent requests for the same
category share one in-flight load, so every caller sees the same
:class:`~calcq.units.Category` instance and the same :class:`Unit` objects.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections import Counter
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Set

import numpy as np

from .catalog import CATEGORY_MODULES, import_category
from .errors import CatalogIntegrityError, CategoryNotFound, UnitConversionError
from .units import Category, CategoryId


logger = logging.getLogger(__name__)

CategorySource = Callable[[], Category]
CategoryListener = Callable[[Category], None]

_ROUND_TRIP_SAMPLES = np.array([0.0, 1.0, -1.0, 0.5, 123.456, 1e-6, 1e6])


class CategoryStatus(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


def default_sources() -> Dict[str, CategorySource]:
    return {category_id: functools.partial(import_category, category_id) for category_id in CATEGORY_MODULES}


def validate_category(category_id: str, category: Category) -> None:
    """Raise :class:`CatalogIntegrityError` if *category* cannot be converted through safely."""

    if not isinstance(category, Category):
        raise CatalogIntegrityError(category_id, f"expected a Category, got {type(category).__name__}")
    if category.id != category_id:
        raise CatalogIntegrityError(category_id, f"definition is registered under id {category.id!r}")

    units = category.all_units()
    if not units:
        raise CatalogIntegrityError(category_id, "category defines no units")

    duplicates = sorted(unit_id for unit_id, count in Counter(u.id for u in units).items() if count > 1)
    if duplicates:
        raise CatalogIntegrityError(category_id, f"duplicate unit ids {duplicates}")

    flagged = [unit for unit in units if unit.base_unit]
    if not flagged:
        raise CatalogIntegrityError(category_id, "no unit is flagged as the base unit")
    if len(flagged) > 1:
        raise CatalogIntegrityError(category_id, f"several base units: {[u.id for u in flagged]}")
    if flagged[0].id != category.base_unit_id:
        raise CatalogIntegrityError(
            category_id,
            f"base_unit_id {category.base_unit_id!r} does not match flagged base unit {flagged[0].id!r}",
        )

    known = {unit.id for unit in units}
    popular = list(category.popular_units)
    for subcategory in category.subcategories:
        popular.extend(subcategory.popular_units)
    missing = sorted(set(popular) - known)
    if missing:
        raise CatalogIntegrityError(category_id, f"popular units {missing} are not defined")

    base = flagged[0]
    for unit in units:
        try:
            forward = np.array([unit.to_base(x) for x in _ROUND_TRIP_SAMPLES], dtype=float)
            back = np.array([unit.from_base(x) for x in forward], dtype=float)
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise CatalogIntegrityError(category_id, f"unit {unit.id!r} transform raised {exc!r}") from exc
        if unit is base and not np.array_equal(forward, _ROUND_TRIP_SAMPLES):
            raise CatalogIntegrityError(category_id, f"base unit {unit.id!r} does not use identity transforms")
        if not np.allclose(back, _ROUND_TRIP_SAMPLES, rtol=1e-9, atol=1e-9):
            raise CatalogIntegrityError(category_id, f"unit {unit.id!r} does not round-trip through the base unit")


class CategoryLoader:
    """Resolve category ids to catalog data, loading each at most once."""

    def __init__(
        self,
        sources: Optional[Mapping[str, CategorySource]] = None,
        *,
        essential_categories: Iterable[str] = (
            CategoryId.LENGTH.value,
            CategoryId.MASS.value,
            CategoryId.TEMPERATURE.value,
        ),
    ) -> None:
        self._sources: Dict[str, CategorySource] = dict(default_sources() if sources is None else sources)
        self.essential_categories = tuple(str(category_id) for category_id in essential_categories)
        self._cache: Dict[str, Category] = {}
        self._inflight: Dict[str, asyncio.Task] = {}
        self._failures: Dict[str, BaseException] = {}
        self._background: Set[asyncio.Task] = set()
        self._load_listeners: List[CategoryListener] = []
        self._invalidate_listeners: List[Callable[[str], None]] = []

    # ------------------------------------------------------------------ public API
    async def load_unit_category(self, category_id: "str | CategoryId") -> Category:
        """Return the full definition of *category_id*, loading it on first use."""

        key = str(category_id)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        task = self._inflight.get(key)
        if task is None:
            if key not in self._sources:
                raise CategoryNotFound(key)
            task = asyncio.ensure_future(self._load(key))
            self._inflight[key] = task
            task.add_done_callback(functools.partial(self._on_load_done, key))
        else:
            logger.debug("Joining in-flight load of category %s", key)
        return await asyncio.shield(task)

    def is_category_loaded(self, category_id: "str | CategoryId") -> bool:
        return str(category_id) in self._cache

    def get_loaded(self, category_id: "str | CategoryId") -> Optional[Category]:
        """Return the cached category without loading it."""

        return self._cache.get(str(category_id))

    def loaded_categories(self) -> List[str]:
        return list(self._cache)

    def known_categories(self) -> List[str]:
        return list(self._sources)

    def category_status(self, category_id: "str | CategoryId") -> CategoryStatus:
        key = str(category_id)
        if key in self._cache:
            return CategoryStatus.LOADED
        if key in self._inflight:
            return CategoryStatus.LOADING
        if key in self._failures:
            return CategoryStatus.FAILED
        return CategoryStatus.UNLOADED

    def last_error(self, category_id: "str | CategoryId") -> Optional[BaseException]:
        return self._failures.get(str(category_id))

    async def initialize_essential_categories(self, category_ids: Optional[Iterable[str]] = None) -> None:
        """Load the categories needed before the first conversion, in parallel."""

        ids = tuple(str(c) for c in category_ids) if category_ids is not None else self.essential_categories
        results = await asyncio.gather(*(self.load_unit_category(c) for c in ids), return_exceptions=True)
        for category_id, result in zip(ids, results):
            if isinstance(result, BaseException):
                logger.error("Failed to load essential category %s: %s", category_id, result)

    def preload_categories(self, category_ids: Iterable["str | CategoryId"]) -> List[asyncio.Task]:
        """Schedule background loads on the running loop and return immediately."""

        loop = asyncio.get_running_loop()
        scheduled: List[asyncio.Task] = []
        for category_id in category_ids:
            key = str(category_id)
            if key in self._cache or key in self._inflight:
                continue
            task = loop.create_task(self._preload_one(key))
            self._background.add(task)
            task.add_done_callback(self._background.discard)
            scheduled.append(task)
        return scheduled

    def preload_common_categories(self, history: Iterable[Mapping[str, str]], limit: int = 3) -> List[asyncio.Task]:
        """Preload the *limit* categories that occur most often in *history*."""

        counts = Counter(str(entry["category"]) for entry in history if entry.get("category"))
        return self.preload_categories(category for category, _ in counts.most_common(limit))

    async def drain(self) -> None:
        """Wait for every scheduled background preload to finish."""

        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    def invalidate(self, category_id: "str | CategoryId") -> bool:
        """Drop a cached category so the next request reloads it."""

        key = str(category_id)
        removed = self._cache.pop(key, None) is not None
        if removed:
            logger.info("Invalidated category %s", key)
            for listener in self._invalidate_listeners:
                listener(key)
        return removed

    def add_listener(
        self,
        on_loaded: CategoryListener,
        on_invalidated: Optional[Callable[[str], None]] = None,
    ) -> None:
        """Register callbacks for loaded and invalidated categories.

        *on_loaded* is replayed for categories already in the cache.
        """

        self._load_listeners.append(on_loaded)
        if on_invalidated is not None:
            self._invalidate_listeners.append(on_invalidated)
        for category in list(self._cache.values()):
            on_loaded(category)

    # ------------------------------------------------------------------ helpers
    async def _load(self, key: str) -> Category:
        loop = asyncio.get_running_loop()
        try:
            category = await loop.run_in_executor(None, self._sources[key])
        except UnitConversionError as exc:
            self._failures[key] = exc
            raise
        except Exception as exc:
            error = CatalogIntegrityError(key, f"could not load definition: {exc}")
            self._failures[key] = error
            raise error from exc
        try:
            validate_category(key, category)
        except CatalogIntegrityError as exc:
            self._failures[key] = exc
            raise
        self._cache[key] = category
        self._failures.pop(key, None)
        logger.info("Loaded category %s (%d units)", key, len(category.all_units()))
        for listener in self._load_listeners:
            listener(category)
        return category

    def _on_load_done(self, key: str, task: asyncio.Task) -> None:
        self._inflight.pop(key, None)
        if not task.cancelled():
            # mark the exception retrieved; callers already received it
            task.exception()

    async def _preload_one(self, key: str) -> None:
        try:
            await self.load_unit_category(key)
        except UnitConversionError as exc:
            logger.warning("Preloading category %s failed: %s", key, exc)


__all__ = [
    "CategoryLoader",
    "CategoryStatus",
    "CategorySource",
    "default_sources",
    "validate_category",
]
