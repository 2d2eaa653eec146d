"""Engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Tuple

from .units import CategoryId


_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EngineConfig:
    """Tunable engine parameters."""

    essential_categories: Tuple[str, ...] = (
        CategoryId.LENGTH.value,
        CategoryId.MASS.value,
        CategoryId.TEMPERATURE.value,
    )
    use_worker: bool = True
    worker_timeout_s: float = 5.0
    debounce_s: float = 0.15
    compound_precision: int = 2
    search_limit: Optional[int] = 10

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "EngineConfig":
        """Build a config from ``CALCQ_*`` environment variables.

        Keyword *overrides* win over the environment.
        """

        env = os.environ if environ is None else environ
        config = cls()
        essential = env.get("CALCQ_ESSENTIAL_CATEGORIES")
        if essential:
            ids = tuple(part.strip() for part in essential.split(",") if part.strip())
            config = replace(config, essential_categories=ids)
        use_worker = env.get("CALCQ_USE_WORKER")
        if use_worker is not None:
            config = replace(config, use_worker=use_worker.strip().lower() in _TRUE_VALUES)
        timeout = env.get("CALCQ_WORKER_TIMEOUT_S")
        if timeout:
            config = replace(config, worker_timeout_s=float(timeout))
        debounce = env.get("CALCQ_DEBOUNCE_S")
        if debounce:
            config = replace(config, debounce_s=float(debounce))
        if overrides:
            config = replace(config, **overrides)
        return config


__all__ = ["EngineConfig"]
