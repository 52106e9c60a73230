"""CacheSystem: the three cache tiers, the key memoizer and the sweep timer.

Each engine owns one CacheSystem; there is no process-wide cache. The
periodic sweep runs on a daemon ``threading.Timer`` and ``shutdown()``
cancels it so the host can exit cleanly.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any

from zyracss.cache.keys import KeyMemoizer
from zyracss.cache.tier import CacheTier, Clock
from zyracss.config import CacheConfig

logger = logging.getLogger(__name__)


class CacheSystem:
    def __init__(self, config: CacheConfig | None = None, clock: Clock = time.monotonic) -> None:
        self.config = config or CacheConfig()
        cfg = self.config
        self.parse: CacheTier = CacheTier("parse", cfg.parse_max_size, cfg.ttl, clock)
        self.generation: CacheTier = CacheTier(
            "generation", cfg.generation_max_size, cfg.ttl, clock
        )
        self.rules: CacheTier = CacheTier("rule", cfg.rule_max_size, cfg.ttl, clock)
        self.keys = KeyMemoizer(cfg.memo_max_size, cfg.memo_eviction_fraction)
        self._timer_lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._sweeps = 0
        self._closed = False

    @property
    def tiers(self) -> dict[str, CacheTier]:
        return {"parse": self.parse, "generation": self.generation, "rule": self.rules}

    # --- maintenance ----------------------------------------------------------

    def optimize(self) -> dict[str, int]:
        """Sweep stale entries from every tier and cold keys from the memoizer."""
        removed = {name: tier.optimize(self.config.max_age) for name, tier in self.tiers.items()}
        removed["keys"] = self.keys.optimize()
        return removed

    def clear(self) -> None:
        for tier in self.tiers.values():
            tier.clear()
        self.keys.clear()

    # --- background sweep -----------------------------------------------------

    def _arm(self, interval: float) -> None:
        timer = threading.Timer(interval, self._sweep, args=(interval,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _sweep(self, interval: float) -> None:
        try:
            removed = self.optimize()
            self._sweeps += 1
            logger.debug("Cache sweep %d removed %s", self._sweeps, removed)
        finally:
            with self._timer_lock:
                if not self._closed:
                    self._arm(interval)

    def start_sweeper(self, interval: float | None = None) -> bool:
        """Start the periodic sweep; returns False if disabled or running."""
        interval = self.config.sweep_interval if interval is None else interval
        if interval <= 0:
            return False
        with self._timer_lock:
            if self._closed or self._timer is not None:
                return False
            self._arm(interval)
        return True

    @property
    def sweeping(self) -> bool:
        with self._timer_lock:
            return self._timer is not None and not self._closed

    def shutdown(self) -> None:
        """Cancel the sweep timer. Idempotent."""
        with self._timer_lock:
            self._closed = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def __enter__(self) -> CacheSystem:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()

    # --- stats ----------------------------------------------------------------

    def stats(self) -> dict[str, Any]:
        return {
            "tiers": {name: tier.stats() for name, tier in self.tiers.items()},
            "keys": self.keys.stats(),
            "sweeps": self._sweeps,
            "sweeping": self.sweeping,
        }
