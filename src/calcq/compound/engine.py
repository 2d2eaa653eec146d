"""Compound measurements: parsing, carry-based conversion and display."""

from __future__ import annotations

import logging
import math
import re
import time
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Set, Tuple

from ..conversion import ConversionOptions, UnitConversionResult, UnitConverter
from ..errors import CatalogIntegrityError, ConversionFailed, InvalidArgument, UnitNotFound
from ..formatting import RoundingMode, apply_rounding, format_number
from ..units import Category, Unit, unit_size
from .formats import (
    MIXED_NUMBER,
    CompoundFormatConfig,
    CompoundFormatType,
    SlotKind,
    get_format_config,
    parse_number,
)


logger = logging.getLogger(__name__)

DEFAULT_COMPOUND_PRECISION = 2

# Quotients this close (relative) to the next integer count as that integer.
CARRY_TOLERANCE = 1e-9

_SINGLE_VALUE_RE = re.compile(rf"([-+]?(?:{MIXED_NUMBER}))\s*(.+)")
_HEIGHT_MARKS = {"foot": "'", "inch": '"'}


@dataclass(frozen=True)
class MeasurementComponent:
    value: float
    unit_id: str
    unit: Optional[Unit] = field(default=None, compare=False, repr=False)

    def resolve(self, category: Category) -> "MeasurementComponent":
        """Return a copy with ``unit`` filled in from *category*."""

        if self.unit is not None:
            return self
        unit = category.find_unit(self.unit_id)
        if unit is None:
            raise UnitNotFound(category.id, self.unit_id)
        return replace(self, unit=unit)


@dataclass(frozen=True)
class CompoundMeasurement:
    components: Tuple[MeasurementComponent, ...]
    category_id: str
    format_type: Optional[CompoundFormatType] = None

    @property
    def values(self) -> Tuple[float, ...]:
        return tuple(component.value for component in self.components)

    @property
    def unit_ids(self) -> Tuple[str, ...]:
        return tuple(component.unit_id for component in self.components)


@dataclass(frozen=True)
class CompoundConversionResult:
    original: CompoundMeasurement
    converted: CompoundMeasurement
    single_unit_equivalent: UnitConversionResult
    timestamp: float = field(default_factory=time.time)


def measurement_key(measurement: Optional[CompoundMeasurement]) -> Optional[Tuple]:
    """Value-based identity of a measurement: category plus (unit id, value) pairs."""

    if measurement is None:
        return None
    return (
        measurement.category_id,
        tuple((component.unit_id, round(component.value, 9)) for component in measurement.components),
    )


def _snap(quotient: float) -> int:
    whole = math.floor(quotient)
    if (whole + 1) - quotient <= CARRY_TOLERANCE * max(1.0, abs(quotient)):
        whole += 1
    return whole


def redistribute(
    total: float,
    units: Sequence[Unit],
    precision: int = DEFAULT_COMPOUND_PRECISION,
    mode: "RoundingMode | str" = RoundingMode.ROUND,
) -> List[float]:
    """Spread the base-unit *total* over *units*, largest first.

    Every unit but the last receives a whole count; the last absorbs the
    remainder rounded to *precision* with *mode*, applied to its magnitude when
    there are several units. A remainder that rounds up to a full
    unit of the previous target is carried into it, cascading upwards. The
    sign of a negative total goes on the first non-zero component.
    """

    if not units:
        raise InvalidArgument("At least one target unit is required")
    if len(units) == 1:
        return [apply_rounding(units[0].from_base(total), precision, mode)]

    sign = -1.0 if total < 0 else 1.0
    remaining = abs(total)
    sizes = [unit_size(unit) for unit in units]
    parts: List[float] = []
    for size in sizes[:-1]:
        whole = _snap(remaining / size)
        parts.append(float(whole))
        remaining = max(remaining - whole * size, 0.0)
    parts.append(apply_rounding(remaining / sizes[-1], precision, mode))

    for index in range(len(parts) - 1, 0, -1):
        ratio = sizes[index - 1] / sizes[index]
        carried = math.floor(parts[index] / ratio + CARRY_TOLERANCE)
        if carried > 0:
            parts[index] = apply_rounding(max(parts[index] - carried * ratio, 0.0), precision, mode)
            parts[index - 1] += carried

    parts = [part + 0.0 for part in parts]
    if sign < 0:
        for index, part in enumerate(parts):
            if part != 0:
                parts[index] = -part
                break
    return parts


class CompoundEngine:
    """Parse, convert and render multi-unit measurements such as ``5' 10"``."""

    def __init__(self, converter: UnitConverter, precision: int = DEFAULT_COMPOUND_PRECISION) -> None:
        self.converter = converter
        self.precision = precision
        self._validated: Set[CompoundFormatType] = set()

    @property
    def loader(self):
        return self.converter.loader

    # ------------------------------------------------------------------ formats
    async def format_category(self, format_type: "str | CompoundFormatType") -> Tuple[CompoundFormatConfig, Category]:
        """Return the format config and its loaded category, validating the config on first use."""

        config = get_format_config(format_type)
        category = await self.loader.load_unit_category(config.category_id)
        if config.id not in self._validated:
            missing = [unit_id for unit_id in config.referenced_unit_ids() if category.find_unit(unit_id) is None]
            if missing:
                raise CatalogIntegrityError(category.id, f"format {config.id.value!r} references unknown units {missing}")
            self._validated.add(config.id)
        return config, category

    async def default_measurement(self, format_type: "str | CompoundFormatType") -> CompoundMeasurement:
        """An all-zero measurement in the format's default source units."""

        config, category = await self.format_category(format_type)
        components = tuple(MeasurementComponent(0.0, unit_id).resolve(category) for unit_id in config.default_from)
        return CompoundMeasurement(components, category.id, config.id)

    async def ensure_valid_target_units(
        self, format_type: "str | CompoundFormatType", unit_ids: Sequence[str]
    ) -> Tuple[str, ...]:
        """Keep the ids the format accepts, falling back to its default targets."""

        config, category = await self.format_category(format_type)
        valid = tuple(
            unit_id
            for unit_id in dict.fromkeys(unit_ids)
            if config.allows(unit_id) and category.find_unit(unit_id) is not None
        )
        return valid or config.default_to

    # ------------------------------------------------------------------ parsing
    async def parse_compound_input(
        self, text: str, format_type: "str | CompoundFormatType"
    ) -> Optional[CompoundMeasurement]:
        """Parse free text into a measurement, or return ``None`` if it is not recognisable."""

        if not isinstance(text, str) or not text.strip():
            return None
        config, category = await self.format_category(format_type)

        match = config.grammar.match(text)
        if match is not None:
            pairs = list(zip(match.values, match.unit_ids))
        else:
            pairs = self._match_single_value(text.strip(), config, category)
            if pairs is None:
                return None

        components = tuple(MeasurementComponent(value, unit_id).resolve(category) for value, unit_id in pairs)
        return CompoundMeasurement(components, category.id, config.id)

    @staticmethod
    def _match_single_value(
        text: str, config: CompoundFormatConfig, category: Category
    ) -> Optional[List[Tuple[float, str]]]:
        found = _SINGLE_VALUE_RE.fullmatch(text)
        if found is None:
            return None
        raw_value, unit_text = found.groups()
        sign = -1.0 if raw_value.startswith("-") else 1.0
        value = parse_number(raw_value.lstrip("+-"), SlotKind.MIXED_FRACTION)
        if value is None:
            return None
        wanted = unit_text.strip().casefold()
        for unit in category.all_units():
            if not config.allows(unit.id):
                continue
            if wanted in (term.casefold() for term in unit.search_terms()):
                return [(sign * value, unit.id)]
        return None

    # ------------------------------------------------------------------ building
    async def create_compound_measurement(
        self,
        values: Sequence[float],
        unit_ids: Sequence[str],
        category_id: str,
        format_type: "str | CompoundFormatType | None" = None,
    ) -> CompoundMeasurement:
        """Build a measurement from discrete per-component field values."""

        if len(values) != len(unit_ids):
            raise InvalidArgument(f"Got {len(values)} values for {len(unit_ids)} units")
        config = None
        if format_type is not None:
            config, category = await self.format_category(format_type)
            if category.id != str(category_id):
                raise InvalidArgument(f"Format {config.id.value!r} belongs to category {category.id!r}")
        else:
            category = await self.loader.load_unit_category(category_id)

        components = []
        for value, unit_id in zip(values, unit_ids):
            try:
                number = float(value)
            except (TypeError, ValueError) as exc:
                raise InvalidArgument(f"Component value {value!r} is not a number") from exc
            if not math.isfinite(number):
                raise InvalidArgument(f"Component value {value!r} is not finite")
            if config is not None and not config.allows(unit_id):
                raise InvalidArgument(f"Unit {unit_id!r} is not allowed in format {config.id.value!r}")
            components.append(MeasurementComponent(number, unit_id).resolve(category))
        return CompoundMeasurement(tuple(components), category.id, config.id if config is not None else None)

    # ------------------------------------------------------------------ conversion
    async def convert_compound(
        self,
        measurement: CompoundMeasurement,
        target_unit_ids: Sequence[str],
        options: Optional[ConversionOptions] = None,
    ) -> CompoundConversionResult:
        """Convert *measurement* into *target_unit_ids* with carry between components."""

        if not target_unit_ids:
            raise InvalidArgument("At least one target unit is required")
        if not measurement.components:
            raise InvalidArgument("Cannot convert an empty measurement")
        options = options if options is not None else ConversionOptions()
        precision = options.precision if options.precision is not None else self.precision

        category = await self.loader.load_unit_category(measurement.category_id)
        sources = [component.resolve(category) for component in measurement.components]
        targets = []
        for unit_id in target_unit_ids:
            unit = category.find_unit(unit_id)
            if unit is None:
                raise UnitNotFound(category.id, unit_id)
            targets.append(unit)
        if len(targets) > 1 and any(unit.conversion_factor is None for unit in targets):
            raise InvalidArgument("Carrying between components needs linear target units")

        try:
            total = math.fsum(component.unit.to_base(component.value) for component in sources)
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise ConversionFailed(f"Could not reduce measurement: {exc}", category_id=category.id) from exc
        if not math.isfinite(total):
            raise ConversionFailed("Measurement total is not finite", category_id=category.id)

        ordered = sorted(targets, key=unit_size, reverse=True)
        parts = redistribute(total, ordered, precision, options.rounding_mode)
        converted = CompoundMeasurement(
            tuple(MeasurementComponent(value, unit.id, unit) for value, unit in zip(parts, ordered)),
            category.id,
            measurement.format_type,
        )
        equivalent = await self.converter.convert(total, category.id, category.base_unit_id, ordered[0].id, options)
        logger.debug("Converted compound %s -> %s", measurement.unit_ids, converted.unit_ids)
        return CompoundConversionResult(
            original=measurement,
            converted=converted,
            single_unit_equivalent=equivalent,
            timestamp=options.timestamp if options.timestamp is not None else time.time(),
        )

    # ------------------------------------------------------------------ display
    def format_compound_measurement(
        self,
        measurement: CompoundMeasurement,
        format_type: "str | CompoundFormatType | None" = None,
    ) -> str:
        if format_type is None:
            format_type = measurement.format_type or CompoundFormatType.CUSTOM
        format_type = CompoundFormatType.coerce(format_type)

        if format_type is CompoundFormatType.HEIGHT and all(
            component.unit_id in _HEIGHT_MARKS for component in measurement.components
        ):
            return " ".join(
                f"{self._number(component.value)}{_HEIGHT_MARKS[component.unit_id]}"
                for component in measurement.components
            )
        if format_type is CompoundFormatType.COOKING:
            shown = [component for component in measurement.components if component.value != 0]
            return " + ".join(self._labelled(component) for component in shown or measurement.components[:1])
        return " ".join(self._labelled(component) for component in measurement.components)

    def _number(self, value: float) -> str:
        return format_number(value, self.precision, separators=False)

    def _labelled(self, component: MeasurementComponent) -> str:
        symbol = component.unit.symbol if component.unit is not None else component.unit_id
        return f"{self._number(component.value)} {symbol}"


__all__ = [
    "CARRY_TOLERANCE",
    "DEFAULT_COMPOUND_PRECISION",
    "CompoundConversionResult",
    "CompoundEngine",
    "CompoundMeasurement",
    "MeasurementComponent",
    "measurement_key",
    "redistribute",
]
