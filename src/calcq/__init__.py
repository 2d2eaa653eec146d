"""Unit conversion engine: catalog, loader, conversion core, compound values, search and batching."""

from . import units
from .batch import (
    BatchConversionDispatcher,
    BatchItem,
    BatchResponse,
    InlineDispatchStrategy,
    WorkerDispatchStrategy,
)
from .compound import (
    CompoundConversionResult,
    CompoundEngine,
    CompoundFormatType,
    CompoundMeasurement,
    MeasurementComponent,
)
from .config import EngineConfig
from .conversion import ConversionOptions, UnitConversionResult, UnitConverter
from .engine import ConversionEngine
from .errors import (
    CatalogIntegrityError,
    CategoryNotFound,
    ConversionFailed,
    InvalidArgument,
    UnitConversionError,
    UnitNotFound,
)
from .formatting import RoundingMode
from .loader import CategoryLoader, CategoryStatus
from .search import UnitSearchIndex, UnitSearchResult
from .session import CompoundInputField, ConversionField, InputState
from .units import Category, CategoryId, SubCategory, Unit

__all__ = [
    "BatchConversionDispatcher",
    "BatchItem",
    "BatchResponse",
    "CatalogIntegrityError",
    "Category",
    "CategoryId",
    "CategoryLoader",
    "CategoryNotFound",
    "CategoryStatus",
    "CompoundConversionResult",
    "CompoundEngine",
    "CompoundFormatType",
    "CompoundInputField",
    "CompoundMeasurement",
    "ConversionEngine",
    "ConversionFailed",
    "ConversionField",
    "ConversionOptions",
    "EngineConfig",
    "InlineDispatchStrategy",
    "InputState",
    "InvalidArgument",
    "MeasurementComponent",
    "RoundingMode",
    "SubCategory",
    "Unit",
    "UnitConversionError",
    "UnitConversionResult",
    "UnitConverter",
    "UnitNotFound",
    "UnitSearchIndex",
    "UnitSearchResult",
    "WorkerDispatchStrategy",
    "units",
]
