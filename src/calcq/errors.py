"""Error taxonomy shared by every engine component."""

from __future__ import annotations

from typing import Optional, Sequence


class UnitConversionError(ValueError):
    """Base class for every error raised by the engine."""


class CategoryNotFound(UnitConversionError, LookupError):
    """Raised when a category id is not part of the catalog."""

    def __init__(self, category_id: str) -> None:
        super().__init__(f"Unknown unit category: {category_id!r}")
        self.category_id = category_id


class UnitNotFound(UnitConversionError, LookupError):
    """Raised when a unit id does not exist inside a category."""

    def __init__(self, category_id: str, unit_id: str) -> None:
        super().__init__(f"Unit {unit_id!r} not found in category {category_id!r}")
        self.category_id = category_id
        self.unit_id = unit_id


class CatalogIntegrityError(UnitConversionError):
    """A catalog entry is malformed. This is a catalog bug, not a user error."""

    def __init__(self, category_id: str, problem: str) -> None:
        super().__init__(f"Category {category_id!r} is malformed: {problem}")
        self.category_id = category_id
        self.problem = problem


class ConversionFailed(UnitConversionError):
    """A single conversion could not produce a finite value."""

    def __init__(
        self,
        reason: str,
        *,
        category_id: Optional[str] = None,
        unit_ids: Sequence[str] = (),
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.category_id = category_id
        self.unit_ids = tuple(unit_ids)


class InvalidArgument(UnitConversionError):
    """The caller violated an argument contract."""


__all__ = [
    "UnitConversionError",
    "CategoryNotFound",
    "UnitNotFound",
    "CatalogIntegrityError",
    "ConversionFailed",
    "InvalidArgument",
]
