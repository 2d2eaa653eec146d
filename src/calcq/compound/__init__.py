"""Compound (multi-unit) measurement support."""

from .engine import (
    CARRY_TOLERANCE,
    DEFAULT_COMPOUND_PRECISION,
    CompoundConversionResult,
    CompoundEngine,
    CompoundMeasurement,
    MeasurementComponent,
    measurement_key,
    redistribute,
)
from .formats import (
    COMPOUND_FORMATS,
    CompoundFormatConfig,
    CompoundFormatType,
    CompoundGrammar,
    GrammarMatch,
    ParseRule,
    SlotKind,
    get_format_config,
    parse_number,
)

__all__ = [
    "CARRY_TOLERANCE",
    "COMPOUND_FORMATS",
    "DEFAULT_COMPOUND_PRECISION",
    "CompoundConversionResult",
    "CompoundEngine",
    "CompoundFormatConfig",
    "CompoundFormatType",
    "CompoundGrammar",
    "CompoundMeasurement",
    "GrammarMatch",
    "MeasurementComponent",
    "ParseRule",
    "SlotKind",
    "get_format_config",
    "measurement_key",
    "parse_number",
    "redistribute",
]
