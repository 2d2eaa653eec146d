"""Explicit engine context owning the loader, converter, index and dispatcher."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional

from .batch import BatchConversionDispatcher, DispatchStrategy, InlineDispatchStrategy, WorkerDispatchStrategy
from .catalog import CATEGORY_INFO
from .compound import CompoundEngine, CompoundFormatType
from .config import EngineConfig
from .conversion import ConversionOptions, UnitConverter
from .loader import CategoryLoader, CategorySource, CategoryStatus
from .search import UnitSearchIndex, UnitSearchResult
from .session import CompoundInputField, ConversionField


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategorySummary:
    id: str
    name: str
    icon: str
    description: str
    status: CategoryStatus


class ConversionEngine:
    """Construct once at start-up and pass to consumers.

    ``await engine.start()`` loads the essential categories; ``close()``
    stops the batch worker. The engine is also an async context manager.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        sources: Optional[Mapping[str, CategorySource]] = None,
        strategy: Optional[DispatchStrategy] = None,
    ) -> None:
        self.config = config if config is not None else EngineConfig()
        self.loader = CategoryLoader(sources, essential_categories=self.config.essential_categories)
        self.converter = UnitConverter(self.loader)
        self.compound = CompoundEngine(self.converter, precision=self.config.compound_precision)
        self.search_index = UnitSearchIndex(self.loader)
        if strategy is None:
            strategy = (
                WorkerDispatchStrategy(timeout_s=self.config.worker_timeout_s)
                if self.config.use_worker
                else InlineDispatchStrategy()
            )
        self.batch = BatchConversionDispatcher(self.converter, strategy)
        self.started = False
        self.closed = False

    async def start(self) -> "ConversionEngine":
        if not self.started:
            await self.loader.initialize_essential_categories()
            self.started = True
            logger.info("Conversion engine ready with categories %s", ", ".join(self.loader.loaded_categories()))
        return self

    async def close(self) -> None:
        if self.closed:
            return
        await self.loader.drain()
        self.batch.close()
        self.closed = True

    async def __aenter__(self) -> "ConversionEngine":
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ------------------------------------------------------------------ conveniences
    def list_categories(self) -> List[CategorySummary]:
        """Every known category with its load status, without loading any."""

        summaries = []
        for category_id in self.loader.known_categories():
            info = CATEGORY_INFO.get(category_id)
            summaries.append(
                CategorySummary(
                    id=category_id,
                    name=info.name if info is not None else category_id,
                    icon=info.icon if info is not None else "",
                    description=info.description if info is not None else "",
                    status=self.loader.category_status(category_id),
                )
            )
        return summaries

    async def convert(self, value, category_id: str, from_unit_id: str, to_unit_id: str,
                      options: Optional[ConversionOptions] = None):
        return await self.converter.convert(value, category_id, from_unit_id, to_unit_id, options)

    def search_units(self, query: str, limit: Optional[int] = None, categories=None) -> List[UnitSearchResult]:
        return self.search_index.search_units(
            query, limit if limit is not None else self.config.search_limit, categories
        )

    def conversion_field(self, category_id: str, from_unit_id: str, to_unit_id: str, **kwargs) -> ConversionField:
        kwargs.setdefault("debounce_s", self.config.debounce_s)
        return ConversionField(self.converter, category_id, from_unit_id, to_unit_id, **kwargs)

    def compound_field(self, format_type: "str | CompoundFormatType", on_change=None) -> CompoundInputField:
        return CompoundInputField(self.compound, format_type, on_change)


__all__ = ["CategorySummary", "ConversionEngine"]
