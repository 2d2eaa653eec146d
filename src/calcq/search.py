"""Free-text unit search over loaded categories."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .catalog import category_display_name
from .errors import InvalidArgument, UnitConversionError
from .loader import CategoryLoader
from .units import Category, Unit


logger = logging.getLogger(__name__)

EXACT_NAME = 100
EXACT_SYMBOL = 90
EXACT_ALIAS = 70
NAME_PREFIX = 60
SYMBOL_PREFIX = 55
NAME_SUBSTRING = 50
SYMBOL_SUBSTRING = 45
ALIAS_SUBSTRING = 40


@dataclass(frozen=True)
class UnitSearchResult:
    unit_id: str
    category_id: str
    category_name: str
    subcategory_id: Optional[str]
    name: str
    symbol: str
    relevance: int
    unit: Optional[Unit] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class _Entry:
    unit: Unit
    category_id: str
    subcategory_id: Optional[str]
    name: str
    symbol: str
    aliases: Tuple[str, ...]

    @classmethod
    def build(cls, unit: Unit, category_id: str, subcategory_id: Optional[str]) -> "_Entry":
        aliases = [alias.casefold() for alias in unit.aliases]
        if unit.plural_name:
            aliases.append(unit.plural_name.casefold())
        return cls(
            unit=unit,
            category_id=category_id,
            subcategory_id=subcategory_id,
            name=unit.name.casefold(),
            symbol=unit.symbol.casefold(),
            aliases=tuple(dict.fromkeys(alias for alias in aliases if alias)),
        )

    def score(self, query: str) -> int:
        if self.name == query:
            return EXACT_NAME
        if self.symbol == query:
            return EXACT_SYMBOL
        if query in self.aliases:
            return EXACT_ALIAS
        if self.name.startswith(query):
            return NAME_PREFIX
        if self.symbol.startswith(query):
            return SYMBOL_PREFIX
        if query in self.name:
            return NAME_SUBSTRING
        if query in self.symbol:
            return SYMBOL_SUBSTRING
        if any(query in alias for alias in self.aliases):
            return ALIAS_SUBSTRING
        return 0


def _sort_key(result: UnitSearchResult) -> Tuple[int, str, str]:
    return (-result.relevance, result.unit_id, result.category_id)


class UnitSearchIndex:
    """Flattened, case-insensitive view of every indexed unit.

    The index holds the loader's own :class:`Unit` objects. When built with a
    loader it subscribes to it, so categories are indexed as they load.
    """

    def __init__(self, loader: Optional[CategoryLoader] = None) -> None:
        self.loader = loader
        self._entries: Dict[str, Tuple[_Entry, ...]] = {}
        if loader is not None:
            loader.add_listener(self.add_category, self.remove_category)

    def add_category(self, category: Category) -> None:
        entries = tuple(_Entry.build(unit, category.id, sub_id) for unit, sub_id in category.iter_units())
        self._entries[category.id] = entries
        logger.debug("Indexed %d units of category %s", len(entries), category.id)

    def remove_category(self, category_id: str) -> bool:
        return self._entries.pop(str(category_id), None) is not None

    def clear(self) -> None:
        self._entries.clear()

    async def index_all(self) -> None:
        """Load and index every category the loader knows about."""

        if self.loader is None:
            raise InvalidArgument("index_all needs an index built with a loader")
        for category_id in self.loader.known_categories():
            try:
                category = await self.loader.load_unit_category(category_id)
            except UnitConversionError as exc:
                logger.warning("Skipping category %s while indexing: %s", category_id, exc)
                continue
            if category.id not in self._entries:
                self.add_category(category)

    def indexed_categories(self) -> List[str]:
        return list(self._entries)

    def stats(self) -> Dict[str, int]:
        units = sum(len(entries) for entries in self._entries.values())
        terms = sum(2 + len(entry.aliases) for entries in self._entries.values() for entry in entries)
        return {"categories": len(self._entries), "units": units, "terms": terms}

    def iter_matches(self, query: str, categories: Optional[Iterable[str]] = None) -> Iterator[UnitSearchResult]:
        """Yield every unit matching *query*, in index order."""

        needle = query.strip().casefold() if isinstance(query, str) else ""
        if not needle:
            return
        wanted = None if categories is None else {str(category_id) for category_id in categories}
        snapshot = [
            (category_id, entries)
            for category_id, entries in self._entries.items()
            if wanted is None or category_id in wanted
        ]
        for category_id, entries in snapshot:
            category_name = category_display_name(category_id)
            for entry in entries:
                relevance = entry.score(needle)
                if relevance:
                    yield UnitSearchResult(
                        unit_id=entry.unit.id,
                        category_id=category_id,
                        category_name=category_name,
                        subcategory_id=entry.subcategory_id,
                        name=entry.unit.name,
                        symbol=entry.unit.symbol,
                        relevance=relevance,
                        unit=entry.unit,
                    )

    def search_units(
        self,
        query: str,
        limit: Optional[int] = None,
        categories: Optional[Iterable[str]] = None,
    ) -> List[UnitSearchResult]:
        """Return matches sorted by relevance, then unit id, then category id."""

        if limit is not None and limit < 0:
            raise InvalidArgument(f"limit must be non-negative, got {limit}")
        results = sorted(self.iter_matches(query, categories), key=_sort_key)
        return results if limit is None else results[:limit]


__all__ = [
    "UnitSearchIndex",
    "UnitSearchResult",
    "EXACT_NAME",
    "EXACT_SYMBOL",
    "EXACT_ALIAS",
    "NAME_PREFIX",
    "SYMBOL_PREFIX",
    "NAME_SUBSTRING",
    "SYMBOL_SUBSTRING",
    "ALIAS_SUBSTRING",
]
