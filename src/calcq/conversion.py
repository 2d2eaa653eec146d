"""Conversion core: pivot every conversion through the category's base unit."""

from __future__ import annotations

import logging
import math
import numbers
import time
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import CategoryNotFound, ConversionFailed, InvalidArgument, UnitNotFound
from .formatting import (
    RoundingMode,
    determine_precision,
    format_by_category,
    format_plain,
    format_relationship,
)
from .loader import CategoryLoader
from .units import Category, CategoryId, Unit


logger = logging.getLogger(__name__)


@dataclass
class ConversionOptions:
    """Display preferences for a conversion result."""

    precision: Optional[int] = None
    rounding_mode: RoundingMode = RoundingMode.ROUND
    format: bool = True
    timestamp: Optional[float] = None

    def __post_init__(self) -> None:
        if self.precision is not None:
            if isinstance(self.precision, bool) or not isinstance(self.precision, numbers.Integral):
                raise InvalidArgument(f"precision must be an integer, got {self.precision!r}")
            if self.precision < 0:
                raise InvalidArgument(f"precision must be non-negative, got {self.precision}")
            self.precision = int(self.precision)
        self.rounding_mode = RoundingMode.coerce(self.rounding_mode)


@dataclass(frozen=True)
class UnitConversionResult:
    value: float
    formatted_value: str
    from_unit: Unit
    to_unit: Unit
    category_id: str
    precision: int
    rounding_mode: RoundingMode
    timestamp: float = field(default_factory=time.time)

    @property
    def display(self) -> str:
        """Formatted value followed by the target symbol, e.g. ``32 °F``."""

        if self.to_unit.formatter is not None:
            return self.to_unit.formatter(self.formatted_value)
        return f"{self.formatted_value} {self.to_unit.symbol}"


def _coerce_value(value, category_id: str, unit_ids) -> float:
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, str)):
        raise ConversionFailed(
            f"Value must be numeric, got {type(value).__name__}", category_id=category_id, unit_ids=unit_ids
        )
    try:
        number = float(value.strip()) if isinstance(value, str) else float(value)
    except ValueError as exc:
        raise ConversionFailed(f"Value {value!r} is not a number", category_id=category_id, unit_ids=unit_ids) from exc
    if not math.isfinite(number):
        raise ConversionFailed(f"Value {value!r} is not finite", category_id=category_id, unit_ids=unit_ids)
    return number


class UnitConverter:
    """Convert values between units of one category.

    Units are resolved through the shared :class:`CategoryLoader`, so a
    category is loaded at most once however many converters use it.
    """

    def __init__(self, loader: Optional[CategoryLoader] = None) -> None:
        self.loader = loader if loader is not None else CategoryLoader()

    # ------------------------------------------------------------------ lookups
    async def get_category(self, category_id: "str | CategoryId") -> Category:
        return await self.loader.load_unit_category(category_id)

    async def get_unit(self, category_id: "str | CategoryId", unit_id: str) -> Unit:
        category = await self.get_category(category_id)
        unit = category.find_unit(unit_id)
        if unit is None:
            raise UnitNotFound(str(category_id), unit_id)
        return unit

    async def find_unit(self, category_id: "str | CategoryId", unit_id: str) -> Optional[Unit]:
        """Like :meth:`get_unit` but returns ``None`` for unknown categories or units."""

        try:
            return await self.get_unit(category_id, unit_id)
        except (CategoryNotFound, UnitNotFound):
            return None

    async def get_compatible_units(self, category_id: "str | CategoryId", unit_id: str) -> List[Unit]:
        """Every unit the given unit can be converted to, flattened across subcategories."""

        category = await self.get_category(category_id)
        if category.find_unit(unit_id) is None:
            raise UnitNotFound(str(category_id), unit_id)
        return [unit for unit in category.all_units() if unit.id != unit_id]

    async def get_related_units(self, category_id: "str | CategoryId", unit_id: str) -> List[Unit]:
        """Units the catalog suggests alongside *unit_id*, in the order it lists them."""

        unit = await self.get_unit(category_id, unit_id)
        category = await self.get_category(category_id)
        related = (category.find_unit(related_id) for related_id in unit.related_units)
        return [candidate for candidate in related if candidate is not None and candidate is not unit]

    async def get_popular_units(
        self,
        category_id: "str | CategoryId",
        subcategory_id: Optional[str] = None,
        limit: int = 5,
    ) -> List[Unit]:
        category = await self.get_category(category_id)
        popular_ids = category.popular_units
        candidates = category.all_units()
        if subcategory_id is not None:
            subcategory = category.subcategory(subcategory_id)
            if subcategory is None:
                raise InvalidArgument(f"Category {category.id!r} has no subcategory {subcategory_id!r}")
            popular_ids = subcategory.popular_units
            candidates = list(subcategory.units)

        units = [category.find_unit(unit_id) for unit_id in popular_ids]
        resolved = [unit for unit in units if unit is not None]
        if not resolved:
            base = category.base_unit
            if base is not None and any(unit is base for unit in candidates):
                resolved.append(base)
            resolved.extend(unit for unit in candidates if unit is not base)
        return resolved[:limit]

    # ------------------------------------------------------------------ conversion
    async def convert(
        self,
        value,
        category_id: "str | CategoryId",
        from_unit_id: str,
        to_unit_id: str,
        options: Optional[ConversionOptions] = None,
    ) -> UnitConversionResult:
        """Convert *value* from one unit to another within *category_id*.

        Raises :class:`ConversionFailed` for unknown ids, non-finite input and
        transforms that fail or leave the finite range.
        """

        options = options if options is not None else ConversionOptions()
        key = str(category_id)
        unit_ids = (from_unit_id, to_unit_id)
        number = _coerce_value(value, key, unit_ids)

        try:
            category = await self.get_category(key)
        except CategoryNotFound as exc:
            raise ConversionFailed(str(exc), category_id=key, unit_ids=unit_ids) from exc
        from_unit = category.find_unit(from_unit_id)
        to_unit = category.find_unit(to_unit_id)
        missing = from_unit_id if from_unit is None else to_unit_id if to_unit is None else None
        if missing is not None:
            raise ConversionFailed(
                f"Unit {missing!r} not found in category {key!r}", category_id=key, unit_ids=(missing,)
            ) from UnitNotFound(key, missing)

        result = self._apply(number, from_unit, to_unit, key)
        precision = determine_precision(
            result, key, requested=options.precision, unit_precision=to_unit.precision
        )
        if options.format:
            formatted = format_by_category(result, precision, key, options.rounding_mode)
        else:
            formatted = format_plain(result)

        logger.debug("Converted %s %s -> %s %s", number, from_unit_id, result, to_unit_id)
        return UnitConversionResult(
            value=result,
            formatted_value=formatted,
            from_unit=from_unit,
            to_unit=to_unit,
            category_id=key,
            precision=precision,
            rounding_mode=options.rounding_mode,
            timestamp=options.timestamp if options.timestamp is not None else time.time(),
        )

    async def convert_value(self, value, category_id: "str | CategoryId", from_unit_id: str, to_unit_id: str) -> float:
        """Return only the full-precision converted value."""

        result = await self.convert(value, category_id, from_unit_id, to_unit_id, ConversionOptions(format=False))
        return result.value

    async def describe_relationship(self, category_id: "str | CategoryId", from_unit_id: str, to_unit_id: str) -> str:
        """Return ``"1 ft = 0.3048 m"`` style text, or ``""`` for non-linear pairs."""

        from_unit = await self.get_unit(category_id, from_unit_id)
        to_unit = await self.get_unit(category_id, to_unit_id)
        if from_unit.conversion_factor is None or to_unit.conversion_factor is None:
            return ""
        ratio = self._apply(1.0, from_unit, to_unit, str(category_id))
        return format_relationship(from_unit.symbol, to_unit.symbol, ratio)

    @staticmethod
    def _apply(value: float, from_unit: Unit, to_unit: Unit, category_id: str) -> float:
        unit_ids = (from_unit.id, to_unit.id)
        if from_unit is to_unit:
            return value
        try:
            result = to_unit.from_base(from_unit.to_base(value))
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise ConversionFailed(
                f"Transform failed converting {from_unit.id!r} to {to_unit.id!r}: {exc}",
                category_id=category_id,
                unit_ids=unit_ids,
            ) from exc
        if isinstance(result, complex) or not math.isfinite(result):
            raise ConversionFailed(
                f"Converting {value} {from_unit.id} to {to_unit.id} produced a non-finite result",
                category_id=category_id,
                unit_ids=unit_ids,
            )
        return float(result)


__all__ = [
    "ConversionOptions",
    "UnitConversionResult",
    "UnitConverter",
]
