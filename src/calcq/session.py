"""Per-field input controllers.

:class:`ConversionField` debounces a single-value input and drops results
that were superseded by newer input. :class:`CompoundInputField` keeps the
free-text and per-component views of a compound value in agreement.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, Sequence

from .compound import CompoundEngine, CompoundFormatType, CompoundMeasurement, get_format_config, measurement_key
from .conversion import ConversionOptions, UnitConversionResult, UnitConverter
from .errors import UnitConversionError


logger = logging.getLogger(__name__)


class ConversionField:
    """Debounced single-value conversion bound to one (category, from, to) selection.

    Only the most recent input of a burst is converted. Every submission gets
    a new token and a completion whose token is no longer current is dropped.
    """

    def __init__(
        self,
        converter: UnitConverter,
        category_id: str,
        from_unit_id: str,
        to_unit_id: str,
        *,
        debounce_s: float = 0.15,
        options: Optional[ConversionOptions] = None,
        on_result: Optional[Callable[[Optional[UnitConversionResult], Optional[str]], None]] = None,
    ) -> None:
        self.converter = converter
        self.category_id = str(category_id)
        self.from_unit_id = from_unit_id
        self.to_unit_id = to_unit_id
        self.debounce_s = debounce_s
        self.options = options
        self.on_result = on_result
        self.result: Optional[UnitConversionResult] = None
        self.error: Optional[str] = None
        self.conversions_started = 0
        self._token = 0
        self._value = None
        self._pending: Optional[asyncio.Task] = None

    @property
    def token(self) -> int:
        return self._token

    def submit(self, value) -> int:
        """Record new input and schedule its conversion after the debounce delay."""

        self._token += 1
        self._value = value
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = asyncio.get_running_loop().create_task(self._run(self._token, value))
        return self._token

    def select_units(self, from_unit_id: Optional[str] = None, to_unit_id: Optional[str] = None) -> Optional[int]:
        """Change the unit selection and reconvert the current input."""

        if from_unit_id is not None:
            self.from_unit_id = from_unit_id
        if to_unit_id is not None:
            self.to_unit_id = to_unit_id
        if self._value is None:
            return None
        return self.submit(self._value)

    def swap_units(self) -> Optional[int]:
        return self.select_units(self.to_unit_id, self.from_unit_id)

    async def wait(self) -> None:
        """Wait until the latest submission has settled."""

        while self._pending is not None and not self._pending.done():
            await asyncio.wait({self._pending})

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()

    async def _run(self, token: int, value) -> None:
        if self.debounce_s > 0:
            await asyncio.sleep(self.debounce_s)
        if token != self._token:
            return
        if value is None or (isinstance(value, str) and not value.strip()):
            self._publish(token, None, None)
            return

        self.conversions_started += 1
        try:
            result = await self.converter.convert(
                value, self.category_id, self.from_unit_id, self.to_unit_id, self.options
            )
        except UnitConversionError as exc:
            self._publish(token, None, str(exc))
            return
        self._publish(token, result, None)

    def _publish(self, token: int, result: Optional[UnitConversionResult], error: Optional[str]) -> None:
        if token != self._token:
            logger.debug("Dropping stale completion %d (current %d)", token, self._token)
            return
        self.result = result
        self.error = error
        if self.on_result is not None:
            self.on_result(result, error)


class InputState(str, Enum):
    EMPTY = "empty"
    PARSING = "parsing"
    PARSED = "parsed"
    UNPARSEABLE = "unparseable"


class CompoundInputField:
    """Text and component inputs for one compound value.

    A measurement is emitted through *on_change* only when its components
    differ from the last emitted one, so echoing a derived value back into the
    other input does not loop.
    """

    def __init__(
        self,
        engine: CompoundEngine,
        format_type: "str | CompoundFormatType",
        on_change: Optional[Callable[[Optional[CompoundMeasurement]], None]] = None,
    ) -> None:
        self.engine = engine
        self.config = get_format_config(format_type)
        self.on_change = on_change
        self.state = InputState.EMPTY
        self.text = ""
        self.measurement: Optional[CompoundMeasurement] = None
        self.emitted = 0
        self._last_key = None
        self._token = 0

    async def set_text(self, text: str) -> Optional[CompoundMeasurement]:
        self.text = text
        self._token += 1
        token = self._token
        if not text or not text.strip():
            self.state = InputState.EMPTY
            self.measurement = None
            self._emit(None)
            return None

        self.state = InputState.PARSING
        measurement = await self.engine.parse_compound_input(text, self.config.id)
        if token != self._token:
            return self.measurement
        if measurement is None:
            self.state = InputState.UNPARSEABLE
            return None
        self.state = InputState.PARSED
        self.measurement = measurement
        self._emit(measurement)
        return measurement

    async def set_components(
        self, values: Sequence[float], unit_ids: Optional[Sequence[str]] = None
    ) -> CompoundMeasurement:
        """Update from discrete component fields and re-derive the text."""

        if unit_ids is None:
            unit_ids = self.measurement.unit_ids if self.measurement is not None else self.config.default_from
        self._token += 1
        measurement = await self.engine.create_compound_measurement(
            values, unit_ids, self.config.category_id, self.config.id
        )
        self.text = self.engine.format_compound_measurement(measurement, self.config.id)
        self.state = InputState.PARSED
        self.measurement = measurement
        self._emit(measurement)
        return measurement

    def _emit(self, measurement: Optional[CompoundMeasurement]) -> bool:
        key = measurement_key(measurement)
        if key == self._last_key:
            return False
        self._last_key = key
        self.emitted += 1
        if self.on_change is not None:
            self.on_change(measurement)
        return True


__all__ = ["ConversionField", "CompoundInputField", "InputState"]
