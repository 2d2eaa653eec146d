"""Compound measurement formats and their free-text grammars.

Each format declares its parse rules as data. :class:`CompoundGrammar` tries
them in order against the whole trimmed input and the first rule whose
captured groups all read as numbers wins. Text around a measurement, as in
``Height: 6 ft``, is not recognised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Dict, Optional, Sequence, Tuple

from ..errors import InvalidArgument
from ..units import CategoryId


class CompoundFormatType(str, Enum):
    HEIGHT = "height"
    COOKING = "cooking"
    DISTANCE = "distance"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: "str | CompoundFormatType") -> "CompoundFormatType":
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidArgument(f"Unknown compound format: {value!r}") from exc


class SlotKind(str, Enum):
    NUMBER = "number"
    MIXED_FRACTION = "mixed_fraction"


NUMBER = r"\d+(?:\.\d+)?|\.\d+"
MIXED_NUMBER = r"\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?|\.\d+"

_MIXED_RE = re.compile(r"(?:(\d+)\s+)?(\d+)/(\d+)")


def parse_number(text: str, kind: SlotKind = SlotKind.NUMBER) -> Optional[float]:
    """Read a captured group as a number, or return ``None``.

    ``MIXED_FRACTION`` slots also accept ``"1/2"`` and ``"2 1/2"``.
    """

    text = text.strip()
    if kind is SlotKind.MIXED_FRACTION:
        match = _MIXED_RE.fullmatch(text)
        if match is not None:
            whole, numerator, denominator = match.groups()
            if int(denominator) == 0:
                return None
            return float(int(whole or 0) + Fraction(int(numerator), int(denominator)))
    try:
        return float(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class ParseRule:
    """One recognisable spelling of a compound value.

    Group *i* fills ``unit_ids[i]`` when given, otherwise the format's
    ``default_from[i]``. Groups that do not take part in the match read as 0.
    """

    pattern: str
    unit_ids: Tuple[str, ...] = ()
    kinds: Tuple[SlotKind, ...] = ()
    example: str = ""
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", re.compile(self.pattern, re.IGNORECASE))

    def slot_kind(self, index: int) -> SlotKind:
        return self.kinds[index] if index < len(self.kinds) else SlotKind.NUMBER


@dataclass(frozen=True)
class GrammarMatch:
    rule: ParseRule
    values: Tuple[float, ...]
    unit_ids: Tuple[str, ...]


class CompoundGrammar:
    """Ordered alternatives over a format's parse rules."""

    def __init__(self, rules: Sequence[ParseRule], default_unit_ids: Sequence[str]) -> None:
        self.rules = tuple(rules)
        self.default_unit_ids = tuple(default_unit_ids)

    def match(self, text: str) -> Optional[GrammarMatch]:
        candidate = text.strip()
        if not candidate:
            return None
        for rule in self.rules:
            found = rule.regex.fullmatch(candidate)
            if found is None:
                continue
            result = self._read_groups(rule, found.groups())
            if result is not None:
                return result
        return None

    def _read_groups(self, rule: ParseRule, groups: Sequence[Optional[str]]) -> Optional[GrammarMatch]:
        unit_ids = rule.unit_ids or self.default_unit_ids
        if len(groups) > len(unit_ids):
            return None
        values = []
        for index, group in enumerate(groups):
            if group is None:
                values.append(0.0)
                continue
            number = parse_number(group, rule.slot_kind(index))
            if number is None:
                return None
            values.append(number)
        return GrammarMatch(rule=rule, values=tuple(values), unit_ids=tuple(unit_ids[: len(values)]))


@dataclass(frozen=True)
class CompoundFormatConfig:
    id: CompoundFormatType
    name: str
    description: str
    category_id: str
    default_from: Tuple[str, ...]
    default_to: Tuple[str, ...]
    allowed_unit_ids: Tuple[str, ...] = ()
    display_pattern: str = ""
    parse_rules: Tuple[ParseRule, ...] = ()

    @property
    def grammar(self) -> CompoundGrammar:
        return CompoundGrammar(self.parse_rules, self.default_from)

    def allows(self, unit_id: str) -> bool:
        """Empty ``allowed_unit_ids`` admits every unit of the category."""

        return not self.allowed_unit_ids or unit_id in self.allowed_unit_ids

    def referenced_unit_ids(self) -> Tuple[str, ...]:
        ids = list(self.default_from) + list(self.default_to) + list(self.allowed_unit_ids)
        for rule in self.parse_rules:
            ids.extend(rule.unit_ids)
        return tuple(dict.fromkeys(ids))


_FEET = r"(?:'|′|ft|feet|foot)"
_INCHES = r"(?:\"|″|''|in|inch|inches)"
_METERS = r"(?:m|meters?|metres?)"
_CENTIMETERS = r"(?:cm|centimeters?|centimetres?)"
_CUPS = r"(?:cups?|c)"
_TABLESPOONS = r"(?:tbsp|tbs|tablespoons?)"
_TEASPOONS = r"(?:tsp|teaspoons?)"
_MILES = r"(?:mi|miles?)"
_YARDS = r"(?:yd|yds|yards?)"
_KILOMETERS = r"(?:km|kilometers?|kilometres?)"
_MIXED = SlotKind.MIXED_FRACTION


COMPOUND_FORMATS: Dict[CompoundFormatType, CompoundFormatConfig] = {
    CompoundFormatType.HEIGHT: CompoundFormatConfig(
        id=CompoundFormatType.HEIGHT,
        name="Height",
        description="Feet and inches, or meters and centimeters",
        category_id=CategoryId.LENGTH.value,
        default_from=("foot", "inch"),
        default_to=("meter", "centimeter"),
        allowed_unit_ids=("foot", "inch", "meter", "centimeter", "millimeter"),
        display_pattern="X' Y\"",
        parse_rules=(
            ParseRule(rf"({NUMBER})\s*{_FEET}\s*(?:({NUMBER})\s*{_INCHES}?)?", example="5'10\""),
            ParseRule(rf"({NUMBER})\s*{_METERS}\s*(?:({NUMBER})\s*{_CENTIMETERS}?)?",
                      unit_ids=("meter", "centimeter"), example="1 m 78 cm"),
        ),
    ),
    CompoundFormatType.COOKING: CompoundFormatConfig(
        id=CompoundFormatType.COOKING,
        name="Cooking",
        description="Cups, tablespoons and teaspoons",
        category_id=CategoryId.VOLUME.value,
        default_from=("cup", "tablespoon", "teaspoon"),
        default_to=("milliliter",),
        allowed_unit_ids=(
            "cup", "tablespoon", "teaspoon", "fluid_ounce", "pint", "quart", "gallon",
            "milliliter", "liter", "deciliter",
        ),
        display_pattern="X cup + Y tbsp + Z tsp",
        parse_rules=(
            ParseRule(rf"({MIXED_NUMBER})\s*{_CUPS}\s*(?:\+|and)?\s*({MIXED_NUMBER})\s*{_TABLESPOONS}"
                      rf"\s*(?:\+|and)?\s*({MIXED_NUMBER})\s*{_TEASPOONS}",
                      kinds=(_MIXED, _MIXED, _MIXED), example="1 cup + 2 tbsp + 1 tsp"),
            ParseRule(rf"({MIXED_NUMBER})\s*{_CUPS}\s*(?:\+|and)?\s*({MIXED_NUMBER})\s*{_TABLESPOONS}",
                      kinds=(_MIXED, _MIXED), example="1 cup 2 tbsp"),
            ParseRule(rf"({MIXED_NUMBER})\s*{_TABLESPOONS}\s*(?:\+|and)?\s*({MIXED_NUMBER})\s*{_TEASPOONS}",
                      unit_ids=("tablespoon", "teaspoon"), kinds=(_MIXED, _MIXED), example="2 tbsp 1 tsp"),
            ParseRule(rf"({MIXED_NUMBER})\s*{_CUPS}", kinds=(_MIXED,), example="2 1/2 cups"),
            ParseRule(rf"({MIXED_NUMBER})\s*{_TABLESPOONS}", unit_ids=("tablespoon",), kinds=(_MIXED,)),
            ParseRule(rf"({MIXED_NUMBER})\s*{_TEASPOONS}", unit_ids=("teaspoon",), kinds=(_MIXED,)),
        ),
    ),
    CompoundFormatType.DISTANCE: CompoundFormatConfig(
        id=CompoundFormatType.DISTANCE,
        name="Distance",
        description="Miles, yards and feet, or kilometers and meters",
        category_id=CategoryId.LENGTH.value,
        default_from=("mile", "yard", "foot"),
        default_to=("kilometer", "meter"),
        allowed_unit_ids=("mile", "yard", "foot", "inch", "kilometer", "meter", "centimeter"),
        display_pattern="X mi Y yd Z ft",
        parse_rules=(
            ParseRule(rf"({NUMBER})\s*{_MILES}\s*({NUMBER})\s*{_YARDS}\s*({NUMBER})\s*{_FEET}",
                      example="1 mi 200 yd 2 ft"),
            ParseRule(rf"({NUMBER})\s*{_MILES}\s*(?:({NUMBER})\s*{_YARDS})?", example="2 mi 300 yd"),
            ParseRule(rf"({NUMBER})\s*{_KILOMETERS}\s*(?:({NUMBER})\s*{_METERS})?",
                      unit_ids=("kilometer", "meter"), example="2 km 350 m"),
        ),
    ),
    CompoundFormatType.CUSTOM: CompoundFormatConfig(
        id=CompoundFormatType.CUSTOM,
        name="Custom",
        description="Any combination of length units",
        category_id=CategoryId.LENGTH.value,
        default_from=("meter",),
        default_to=("foot", "inch"),
        display_pattern="X unit Y unit",
    ),
}


def get_format_config(format_type: "str | CompoundFormatType") -> CompoundFormatConfig:
    return COMPOUND_FORMATS[CompoundFormatType.coerce(format_type)]


__all__ = [
    "CompoundFormatType",
    "SlotKind",
    "ParseRule",
    "GrammarMatch",
    "CompoundGrammar",
    "CompoundFormatConfig",
    "COMPOUND_FORMATS",
    "get_format_config",
    "parse_number",
]
