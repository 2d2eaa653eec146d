"""Precision selection, rounding modes and number rendering for results."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
from typing import Dict

import numpy as np

from .errors import InvalidArgument
from .units import CategoryId


class RoundingMode(str, Enum):
    CEIL = "ceil"
    FLOOR = "floor"
    ROUND = "round"
    TRUNC = "trunc"

    @classmethod
    def coerce(cls, value: "str | RoundingMode | None") -> "RoundingMode":
        if value is None:
            return cls.ROUND
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidArgument(f"Unknown rounding mode: {value!r}") from exc


_DECIMAL_ROUNDING = {
    RoundingMode.CEIL: ROUND_CEILING,
    RoundingMode.FLOOR: ROUND_FLOOR,
    RoundingMode.ROUND: ROUND_HALF_UP,
    RoundingMode.TRUNC: ROUND_DOWN,
}

# Beyond this magnitude a double has no fractional digits left to round.
_NO_FRACTION_ABOVE = 1e21
_SCIENTIFIC_ABOVE = 1e15


@dataclass(frozen=True)
class PrecisionDefaults:
    default: int = 4
    minimum: int = 0
    maximum: int = 10


PRECISION_DEFAULTS: Dict[str, PrecisionDefaults] = {
    CategoryId.LENGTH.value: PrecisionDefaults(4, 0, 10),
    CategoryId.MASS.value: PrecisionDefaults(4, 0, 10),
    CategoryId.TEMPERATURE.value: PrecisionDefaults(2, 0, 6),
    CategoryId.VOLUME.value: PrecisionDefaults(4, 0, 10),
    CategoryId.AREA.value: PrecisionDefaults(4, 0, 10),
    CategoryId.TIME.value: PrecisionDefaults(3, 0, 9),
}
_FALLBACK_DEFAULTS = PrecisionDefaults()


def _magnitude_precision(value: float, defaults: PrecisionDefaults) -> int:
    magnitude = abs(value)
    if magnitude == 0:
        return defaults.default
    if magnitude < 0.001:
        return defaults.maximum
    if magnitude < 0.01:
        return min(defaults.maximum, 6)
    if magnitude < 0.1:
        return min(defaults.maximum, 5)
    if magnitude < 1:
        return min(defaults.maximum, 4)
    if magnitude > 1_000_000:
        return defaults.minimum
    if magnitude > 10_000:
        return max(defaults.minimum, 1)
    return defaults.default


def determine_precision(
    value: float,
    category_id: str,
    *,
    requested: "int | None" = None,
    unit_precision: "int | None" = None,
) -> int:
    """Return the number of decimals to display *value* with.

    An explicit *requested* precision always wins. Otherwise the unit's own
    precision is used, raised for magnitudes below one so small results do not
    collapse to zero. Without either, the category default adjusted for the
    magnitude of *value* applies.
    """

    if requested is not None:
        return int(requested)
    defaults = PRECISION_DEFAULTS.get(str(category_id), _FALLBACK_DEFAULTS)
    by_magnitude = _magnitude_precision(value, defaults)
    if unit_precision is None:
        return by_magnitude
    if value != 0 and abs(value) < 1:
        return max(unit_precision, by_magnitude)
    return unit_precision


def round_decimal(value: float, precision: int, mode: "RoundingMode | str" = RoundingMode.ROUND) -> Decimal:
    """Round *value* to *precision* decimals with *mode*, returning a :class:`Decimal`."""

    mode = RoundingMode.coerce(mode)
    exact = Decimal(repr(float(value)))
    if abs(value) >= _NO_FRACTION_ABOVE:
        return exact
    with localcontext() as ctx:
        ctx.prec = 60
        return exact.quantize(Decimal(1).scaleb(-precision), rounding=_DECIMAL_ROUNDING[mode])


def apply_rounding(value: float, precision: int, mode: "RoundingMode | str" = RoundingMode.ROUND) -> float:
    return float(round_decimal(value, precision, mode))


def _trim_fraction(text: str, min_decimals: int) -> str:
    if "." not in text:
        return text + ("." + "0" * min_decimals if min_decimals else "")
    whole, fraction = text.split(".", 1)
    fraction = fraction.rstrip("0")
    if len(fraction) < min_decimals:
        fraction = fraction.ljust(min_decimals, "0")
    return f"{whole}.{fraction}" if fraction else whole


def format_number(
    value: float,
    precision: int,
    mode: "RoundingMode | str" = RoundingMode.ROUND,
    *,
    min_decimals: int = 0,
    separators: bool = True,
) -> str:
    """Render *value* rounded to *precision* decimals with trailing zeros removed."""

    if not math.isfinite(value):
        return ""
    if abs(value) >= _SCIENTIFIC_ABOVE:
        return f"{value:.{min(max(precision, 2), 6)}e}"
    rounded = round_decimal(value, precision, mode)
    if rounded == 0 and value != 0 and mode == RoundingMode.ROUND:
        # too small for the requested decimals; show significant digits instead
        return f"{value:.3e}"
    if rounded == 0:
        rounded = abs(rounded)
    pattern = f",.{precision}f" if separators else f".{precision}f"
    return _trim_fraction(format(rounded, pattern), min_decimals)


def format_by_category(
    value: float,
    precision: int,
    category_id: str,
    mode: "RoundingMode | str" = RoundingMode.ROUND,
) -> str:
    """Category-aware variant of :func:`format_number`."""

    if str(category_id) == CategoryId.TEMPERATURE.value:
        return format_number(value, precision, mode, min_decimals=min(1, precision))
    return format_number(value, precision, mode)


def format_plain(value: float) -> str:
    """Plain positional decimal text for *value*: no separators, no exponent."""

    return np.format_float_positional(float(value), trim="-")


def format_relationship(from_symbol: str, to_symbol: str, ratio: float) -> str:
    """Describe one source unit in target units, e.g. ``1 ft = 0.3048 m``."""

    if ratio == 0 or not math.isfinite(ratio):
        return ""
    if ratio == 1:
        return f"1 {from_symbol} = 1 {to_symbol}"
    if ratio >= 1000 or ratio < 0.001:
        return f"1 {from_symbol} = {ratio:.4e} {to_symbol}"
    if ratio < 1:
        inverse = 1 / ratio
        if abs(inverse - round(inverse)) < 1e-9:
            return f"1 {from_symbol} = 1/{int(round(inverse))} {to_symbol}"
    return f"1 {from_symbol} = {format_number(ratio, 4)} {to_symbol}"


__all__ = [
    "RoundingMode",
    "PrecisionDefaults",
    "PRECISION_DEFAULTS",
    "determine_precision",
    "round_decimal",
    "apply_rounding",
    "format_number",
    "format_by_category",
    "format_plain",
    "format_relationship",
]
