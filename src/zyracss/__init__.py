"""zyracss: compile bracket-syntax utility classes into validated CSS."""

__version__ = "0.4.0"

from zyracss.config import CacheConfig, EngineConfig, GenerationOptions, SecurityConfig  # noqa: E402
from zyracss.engine import (  # noqa: E402
    BatchResult,
    Engine,
    GenerationResult,
    GenerationStats,
    InvalidClass,
    SizeEstimate,
)
from zyracss.errors import ErrorCode, Failure, ZyraError  # noqa: E402
from zyracss.incremental import IncrementalEngine, UpdateResult  # noqa: E402

__all__ = [
    "__version__",
    "Engine",
    "IncrementalEngine",
    "EngineConfig",
    "SecurityConfig",
    "CacheConfig",
    "GenerationOptions",
    "BatchResult",
    "GenerationResult",
    "GenerationStats",
    "InvalidClass",
    "SizeEstimate",
    "UpdateResult",
    "ErrorCode",
    "Failure",
    "ZyraError",
]
