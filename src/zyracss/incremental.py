"""IncrementalEngine: a live class set that rebuilds its stylesheet on demand.

Editors and previews add and remove classes one edit at a time. The set
remembers every valid class it has been given and keeps the last
stylesheet until the set or the options change.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

from zyracss import __version__
from zyracss.cache.tier import Clock
from zyracss.config import GenerationOptions
from zyracss.engine import Engine, GenerationResult, InvalidClass
from zyracss.errors import InvalidInputError
from zyracss.parser.extractor import extract_classes

logger = logging.getLogger(__name__)

MAX_CLASSES = 10_000


@dataclass(frozen=True)
class UpdateResult:
    added: int
    invalid: tuple[InvalidClass, ...]
    total_classes: int
    processing_time: float  # milliseconds
    extracted: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "added": self.added,
            "invalid": [item.to_dict() for item in self.invalid],
            "total_classes": self.total_classes,
            "processing_time": self.processing_time,
        }
        if self.extracted is not None:
            data["extracted"] = self.extracted
        return data


@dataclass
class _Counters:
    total_updates: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    last_generation_time: float = 0.0
    generation_times: list[float] = field(default_factory=list)


class IncrementalEngine:
    """Accumulates valid classes and serves the stylesheet for the whole set.

    Args:
        engine: Engine used to parse and compile. One is created (and shut
            down by ``close()``) when omitted.
        options: Default generation options for ``css()``.
        max_classes: Most classes the set may hold.
        cache_enabled: Keep the last stylesheet between unchanged calls.
    """

    def __init__(
        self,
        engine: Engine | None = None,
        options: GenerationOptions | Mapping[str, Any] | None = None,
        max_classes: int = MAX_CLASSES,
        cache_enabled: bool = True,
        clock: Clock = time.monotonic,
    ) -> None:
        if max_classes < 1:
            raise ValueError(f"max_classes must be at least 1, got {max_classes}")
        self._owns_engine = engine is None
        self.engine = engine or Engine()
        self.options = _resolve(options)
        self.max_classes = max_classes
        self.cache_enabled = cache_enabled
        self._clock = clock
        self._lock = threading.Lock()
        self._classes: dict[str, None] = {}
        self._cached: GenerationResult | None = None
        self._cached_options: GenerationOptions | None = None
        self._pending = 0
        self._counters = _Counters()
        self._started = clock()

    def _invalidate(self) -> None:
        self._cached = None
        self._cached_options = None
        self._pending += 1

    # --- class set ------------------------------------------------------------

    def add_classes(self, classes: str | Iterable[object]) -> UpdateResult:
        """Add every valid class; invalid ones are reported, not stored.

        Raises:
            InvalidInputError: *classes* is not a string or list, or the set
                would grow past ``max_classes``.
        """
        start = time.perf_counter()
        batch = self.engine.parse_many(classes)
        with self._lock:
            new = [name for name in batch.valid if name not in self._classes]
            if len(self._classes) + len(new) > self.max_classes:
                raise InvalidInputError(
                    f"engine holds at most {self.max_classes} classes, "
                    f"adding {len(new)} to {len(self._classes)} would exceed it"
                )
            for name in new:
                self._classes[name] = None
            if new:
                self._invalidate()
            self._counters.total_updates += 1
            total = len(self._classes)
        logger.debug("Added %d new classes (%d processed)", len(new), batch.total_input)
        return UpdateResult(
            added=len(new),
            invalid=tuple(batch.invalid),
            total_classes=total,
            processing_time=round((time.perf_counter() - start) * 1000.0, 2),
        )

    def add_from_html(self, html: str) -> UpdateResult:
        """Add the classes found in the class attributes of *html*."""
        if not isinstance(html, str):
            raise InvalidInputError(f"html must be a string, got {type(html).__name__}")
        extracted = extract_classes(html)
        return replace(self.add_classes(extracted), extracted=len(extracted))

    def remove_classes(self, classes: Iterable[object]) -> int:
        """Drop the named classes and return how many were present."""
        if isinstance(classes, str):
            classes = classes.split()
        with self._lock:
            removed = 0
            for name in classes:
                if isinstance(name, str) and name in self._classes:
                    del self._classes[name]
                    removed += 1
            if removed:
                self._invalidate()
        return removed

    def has_class(self, class_name: str) -> bool:
        with self._lock:
            return class_name in self._classes

    __contains__ = has_class

    def classes(self) -> list[str]:
        """Held classes in the order they were first added."""
        with self._lock:
            return list(self._classes)

    def __len__(self) -> int:
        with self._lock:
            return len(self._classes)

    def clear(self) -> int:
        """Empty the set and return how many classes it held."""
        with self._lock:
            count = len(self._classes)
            self._classes.clear()
            self._invalidate()
        return count

    # --- output ---------------------------------------------------------------

    def css(self, options: GenerationOptions | Mapping[str, Any] | None = None) -> GenerationResult:
        """Stylesheet for the whole set.

        Mapping *options* override the defaults key by key. The previous
        result is returned, marked ``from_cache``, while neither the set
        nor the effective options have changed.
        """
        opts = self._merged(options)
        with self._lock:
            if self.cache_enabled and self._cached is not None and self._cached_options == opts:
                self._counters.cache_hits += 1
                cached = self._cached
                return replace(cached, stats=replace(cached.stats, from_cache=True, processing_time=0.0))
            self._counters.cache_misses += 1
            result = self.engine.generate(list(self._classes), opts)
            elapsed = result.stats.processing_time
            self._counters.last_generation_time = elapsed
            self._counters.generation_times.append(elapsed)
            if self.cache_enabled:
                self._cached = result
                self._cached_options = opts
                self._pending = 0
        return result

    # --- management -----------------------------------------------------------

    def update_options(self, **changes: Any) -> GenerationOptions:
        """Merge *changes* (snake_case or camelCase) into the default options.

        Raises:
            InvalidOptionsError: A key is unknown or a value has the wrong type.
        """
        merged = _resolve({**self.options.normalized(), **changes})
        with self._lock:
            self.options = merged
            self._invalidate()
        return merged

    def stats(self) -> dict[str, Any]:
        with self._lock:
            counters = self._counters
            lookups = counters.cache_hits + counters.cache_misses
            times = counters.generation_times
            return {
                "total_updates": counters.total_updates,
                "total_classes": len(self._classes),
                "cache_hits": counters.cache_hits,
                "cache_misses": counters.cache_misses,
                "cache_hit_rate": counters.cache_hits / lookups if lookups else 0.0,
                "pending_changes": self._pending,
                "last_generation_time": counters.last_generation_time,
                "average_generation_time": round(sum(times) / len(times), 2) if times else 0.0,
                "uptime": round(self._clock() - self._started, 3),
            }

    def export_state(self) -> dict[str, Any]:
        """JSON-serializable snapshot of the class set and options."""
        with self._lock:
            classes = list(self._classes)
        return {
            "version": __version__,
            "classes": classes,
            "options": self.options.normalized(),
            "stats": self.stats(),
            "timestamp": time.time(),
        }

    def import_state(self, state: Mapping[str, Any]) -> UpdateResult:
        """Replace the set and options with an exported snapshot.

        The snapshot is checked before anything is replaced.

        Raises:
            InvalidInputError: *state* has no ``classes`` list.
            InvalidOptionsError: Its ``options`` are malformed.
        """
        if not isinstance(state, Mapping) or not isinstance(state.get("classes"), list):
            raise InvalidInputError("state must be a mapping with a 'classes' list")
        options = state.get("options")
        merged = self.options if options is None else _resolve(options)
        self.clear()
        with self._lock:
            self.options = merged
        result = self.add_classes(state["classes"])
        logger.info("Imported %d classes", result.added)
        return result

    # --- lifecycle ------------------------------------------------------------

    def close(self) -> None:
        if self._owns_engine:
            self.engine.shutdown()

    def __enter__(self) -> IncrementalEngine:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _merged(self, options: GenerationOptions | Mapping[str, Any] | None) -> GenerationOptions:
        if options is None:
            return self.options
        if isinstance(options, GenerationOptions):
            return options
        return _resolve({**self.options.normalized(), **options})


def _resolve(options: GenerationOptions | Mapping[str, Any] | None) -> GenerationOptions:
    if isinstance(options, GenerationOptions):
        return options
    return GenerationOptions.from_mapping(options)
