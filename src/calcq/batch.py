"""Batch conversion with an optional background worker stage.

The worker only validates and echoes the serialised batch. Final values
always come from :class:`~calcq.conversion.UnitConverter` on the caller's
event loop, so the worker path and the inline path return the same results.
"""

from __future__ import annotations

import abc
import asyncio
import json
import logging
import secrets
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, replace
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .conversion import ConversionOptions, UnitConversionResult, UnitConverter
from .errors import UnitConversionError


logger = logging.getLogger(__name__)


class WorkerError(RuntimeError):
    """The background worker returned an unusable reply."""


@dataclass
class BatchItem:
    value: Union[float, str]
    category_id: str
    from_unit_id: str
    to_unit_id: str
    result: Optional[UnitConversionResult] = None
    error: Optional[str] = None

    def to_payload(self) -> dict:
        payload = asdict(self)
        payload.pop("result")
        payload.pop("error")
        return payload

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass(frozen=True)
class BatchResponse:
    items: Tuple[BatchItem, ...]
    batch_id: str
    processing_time_ms: float
    dispatched_to_worker: bool

    @property
    def failed(self) -> List[BatchItem]:
        return [item for item in self.items if item.error is not None]


def new_batch_id() -> str:
    """Nanosecond timestamp plus a random suffix, unique per call."""

    return f"{time.time_ns()}-{secrets.token_hex(4)}"


def validate_batch_message(message: str) -> str:
    """Worker stage: decode a batch, flag non-finite values and echo it back."""

    payload = json.loads(message)
    values = []
    for item in payload["items"]:
        try:
            values.append(float(item["value"]))
        except (TypeError, ValueError):
            values.append(np.nan)
    payload["finite"] = np.isfinite(np.asarray(values, dtype=float)).tolist()
    return json.dumps(payload)


class DispatchStrategy(abc.ABC):
    """How a batch is handed off before the conversions run."""

    name = "base"

    @abc.abstractmethod
    async def dispatch(self, batch_id: str, items: Sequence[BatchItem]) -> bool:
        """Return ``True`` if the batch went through a background worker."""

    def reset(self) -> None:
        pass

    def close(self) -> None:
        pass


class InlineDispatchStrategy(DispatchStrategy):
    name = "inline"

    async def dispatch(self, batch_id: str, items: Sequence[BatchItem]) -> bool:
        return False


class WorkerDispatchStrategy(DispatchStrategy):
    """Send each batch as JSON to a single background worker thread."""

    name = "worker"

    def __init__(self, timeout_s: float = 5.0, stage: Callable[[str], str] = validate_batch_message) -> None:
        self.timeout_s = timeout_s
        self.stage = stage
        self.restarts = 0
        self._executor: Optional[ThreadPoolExecutor] = None

    def _worker(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="calcq-batch")
        return self._executor

    async def dispatch(self, batch_id: str, items: Sequence[BatchItem]) -> bool:
        message = json.dumps({"batch_id": batch_id, "items": [item.to_payload() for item in items]})
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(self._worker(), self.stage, message)
        reply = json.loads(await asyncio.wait_for(future, self.timeout_s))
        if reply.get("batch_id") != batch_id:
            raise WorkerError(f"reply for batch {reply.get('batch_id')!r} while waiting for {batch_id!r}")
        if len(reply.get("items", ())) != len(items):
            raise WorkerError(f"batch {batch_id} came back with {len(reply.get('items', ()))} of {len(items)} items")
        logger.debug("Batch %s validated by worker (%d items)", batch_id, len(items))
        return True

    def reset(self) -> None:
        """Discard the current worker; the next dispatch starts a fresh one."""

        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        self.restarts += 1

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True, cancel_futures=True)
            self._executor = None


ItemLike = Union[BatchItem, Tuple[Union[float, str], str, str, str]]


def _as_item(item: ItemLike) -> BatchItem:
    if isinstance(item, BatchItem):
        return replace(item, result=None, error=None)
    value, category_id, from_unit_id, to_unit_id = item
    return BatchItem(value, str(category_id), from_unit_id, to_unit_id)


class BatchConversionDispatcher:
    def __init__(
        self,
        converter: UnitConverter,
        strategy: Optional[DispatchStrategy] = None,
        options: Optional[ConversionOptions] = None,
    ) -> None:
        self.converter = converter
        self.strategy = strategy if strategy is not None else InlineDispatchStrategy()
        self.options = options

    async def convert(self, items: Sequence[ItemLike]) -> BatchResponse:
        """Convert every item independently; failures are reported per item."""

        batch_id = new_batch_id()
        pending = [_as_item(item) for item in items]
        started = time.perf_counter()

        dispatched = False
        try:
            dispatched = await self.strategy.dispatch(batch_id, pending)
        except Exception as exc:
            # worker faults never fail the batch; recreate and go inline
            logger.warning(
                "Batch %s: %s dispatch failed (%r), converting synchronously", batch_id, self.strategy.name, exc
            )
            self.strategy.reset()

        completed = [await self._convert_one(item) for item in pending]
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.debug("Batch %s finished: %d items in %.2f ms", batch_id, len(completed), elapsed_ms)
        return BatchResponse(
            items=tuple(completed),
            batch_id=batch_id,
            processing_time_ms=elapsed_ms,
            dispatched_to_worker=dispatched,
        )

    async def _convert_one(self, item: BatchItem) -> BatchItem:
        try:
            result = await self.converter.convert(
                item.value, item.category_id, item.from_unit_id, item.to_unit_id, self.options
            )
        except UnitConversionError as exc:
            return replace(item, error=str(exc))
        return replace(item, result=result)

    def close(self) -> None:
        self.strategy.close()


__all__ = [
    "BatchItem",
    "BatchResponse",
    "BatchConversionDispatcher",
    "DispatchStrategy",
    "InlineDispatchStrategy",
    "WorkerDispatchStrategy",
    "WorkerError",
    "new_batch_id",
    "validate_batch_message",
]
