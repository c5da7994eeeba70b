from .cache import SingleFlightCache
from .configs.main import CacheConfig, Config, LoggingConfig
from .errors import (
    FlightCacheError,
    HandleAlreadyRunningError,
    HandleAlreadySettledError,
    RecursiveComputationError,
    WaitTimeoutError,
)
from .handle import ComputationHandle
from .logger import configure_logging
from .types import CacheStats, HandleState
from .utils.singleflight_cache import singleflight_cache

__all__ = [
    "SingleFlightCache",
    "ComputationHandle",
    "HandleState",
    "CacheStats",
    "Config",
    "CacheConfig",
    "LoggingConfig",
    "configure_logging",
    "singleflight_cache",
    "FlightCacheError",
    "HandleAlreadyRunningError",
    "HandleAlreadySettledError",
    "RecursiveComputationError",
    "WaitTimeoutError",
]
