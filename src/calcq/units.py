"""Unit and category data model used by the catalog and the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence, Tuple


Transform = Callable[[float], float]
# Receives the already rounded text of a value.
Formatter = Callable[[str], str]


class CategoryId(str, Enum):
    """Known category keys. Values double as the public string ids."""

    LENGTH = "length"
    MASS = "mass"
    TEMPERATURE = "temperature"
    VOLUME = "volume"
    AREA = "area"
    TIME = "time"
    SPEED = "speed"
    DIGITAL = "digital"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | CategoryId") -> Optional["CategoryId"]:
        """Return the matching member, or ``None`` for an unknown id."""

        try:
            return cls(str(value))
        except ValueError:
            return None


def _identity(value: float) -> float:
    return value


@dataclass(frozen=True, eq=False)
class Unit:
    """A single unit with transforms to and from its category's base unit.

    Units are shared between the cache, the search index and compound
    measurements, so they are immutable and compared by identity.
    """

    id: str
    name: str
    symbol: str
    to_base: Transform = _identity
    from_base: Transform = _identity
    plural_name: Optional[str] = None
    aliases: Tuple[str, ...] = ()
    base_unit: bool = False
    conversion_factor: Optional[float] = None
    precision: Optional[int] = None
    formatter: Optional[Formatter] = None
    related_units: Tuple[str, ...] = ()

    @property
    def display_plural(self) -> str:
        return self.plural_name or f"{self.name}s"

    def search_terms(self) -> Tuple[str, ...]:
        terms = [self.name, self.symbol, *self.aliases]
        if self.plural_name:
            terms.append(self.plural_name)
        return tuple(term for term in terms if term)

    def __repr__(self) -> str:
        return f"Unit(id={self.id!r}, symbol={self.symbol!r})"


@dataclass(frozen=True, eq=False)
class SubCategory:
    id: str
    name: str
    units: Tuple[Unit, ...]
    description: str = ""
    popular_units: Tuple[str, ...] = ()


@dataclass(frozen=True, eq=False)
class Category:
    """A domain of mutually convertible units, optionally split into subcategories."""

    id: str
    name: str
    base_unit_id: str
    icon: str = ""
    description: str = ""
    units: Tuple[Unit, ...] = ()
    subcategories: Tuple[SubCategory, ...] = ()
    popular_units: Tuple[str, ...] = ()

    def iter_units(self) -> Iterator[Tuple[Unit, Optional[str]]]:
        """Yield ``(unit, subcategory_id)`` pairs in catalog order."""

        for unit in self.units:
            yield unit, None
        for subcategory in self.subcategories:
            for unit in subcategory.units:
                yield unit, subcategory.id

    def all_units(self) -> List[Unit]:
        return [unit for unit, _ in self.iter_units()]

    def find_unit(self, unit_id: str) -> Optional[Unit]:
        for unit, _ in self.iter_units():
            if unit.id == unit_id:
                return unit
        return None

    def subcategory(self, subcategory_id: str) -> Optional[SubCategory]:
        for subcategory in self.subcategories:
            if subcategory.id == subcategory_id:
                return subcategory
        return None

    @property
    def base_unit(self) -> Optional[Unit]:
        return self.find_unit(self.base_unit_id)


# ---------------------------------------------------------------------- builders
def base_unit(
    unit_id: str,
    name: str,
    symbol: str,
    *,
    plural: Optional[str] = None,
    aliases: Sequence[str] = (),
    precision: Optional[int] = None,
    related: Sequence[str] = (),
) -> Unit:
    """Return the identity-transform unit a category pivots through."""

    return Unit(
        id=unit_id,
        name=name,
        symbol=symbol,
        plural_name=plural,
        aliases=tuple(aliases),
        base_unit=True,
        conversion_factor=1.0,
        precision=precision,
        related_units=tuple(related),
    )


def linear_unit(
    unit_id: str,
    name: str,
    symbol: str,
    factor: float,
    *,
    plural: Optional[str] = None,
    aliases: Sequence[str] = (),
    precision: Optional[int] = None,
    related: Sequence[str] = (),
) -> Unit:
    """Return a unit where ``base = value * factor``."""

    return Unit(
        id=unit_id,
        name=name,
        symbol=symbol,
        to_base=lambda value: value * factor,
        from_base=lambda value: value / factor,
        plural_name=plural,
        aliases=tuple(aliases),
        conversion_factor=factor,
        precision=precision,
        related_units=tuple(related),
    )


def affine_unit(
    unit_id: str,
    name: str,
    symbol: str,
    *,
    scale: float,
    offset: float,
    plural: Optional[str] = None,
    aliases: Sequence[str] = (),
    precision: Optional[int] = None,
    related: Sequence[str] = (),
    formatter: Optional[Formatter] = None,
) -> Unit:
    """Return a unit where ``value = base * scale + offset`` (temperature scales)."""

    return Unit(
        id=unit_id,
        name=name,
        symbol=symbol,
        to_base=lambda value: (value - offset) / scale,
        from_base=lambda value: value * scale + offset,
        plural_name=plural,
        aliases=tuple(aliases),
        precision=precision,
        formatter=formatter,
        related_units=tuple(related),
    )


def unit_size(unit: Unit) -> float:
    """Base-unit magnitude of one ``unit``, used to order compound components."""

    return abs(unit.to_base(1.0) - unit.to_base(0.0))


__all__ = [
    "CategoryId",
    "Unit",
    "SubCategory",
    "Category",
    "base_unit",
    "linear_unit",
    "affine_unit",
    "unit_size",
]
