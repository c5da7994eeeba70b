from .main import CacheConfig, Config, LoggingConfig

__all__ = [
    "CacheConfig",
    "Config",
    "LoggingConfig",
]
