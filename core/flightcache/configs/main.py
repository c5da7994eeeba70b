import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class CacheConfig(BaseModel):
    name: str = Field(
        description="Name of the cache, used to label its log records.",
        default="default",
    )
    wait_timeout: Optional[float] = Field(
        description="Seconds a caller waits for another caller's in-flight "
        "computation before giving up. None waits forever.",
        default=None,
        ge=0,
    )


class LoggingConfig(BaseModel):
    level: str = Field(description="Root log level.", default="INFO")
    format: str = Field(
        description="Format string of the console handler.",
        default="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    )


class Config(BaseModel):
    cache: CacheConfig = CacheConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Config":
        load_dotenv(env_file)
        wait_timeout = os.getenv("FLIGHTCACHE_WAIT_TIMEOUT")
        return cls(
            cache=CacheConfig(
                name=os.getenv("FLIGHTCACHE_NAME", "default"),
                wait_timeout=wait_timeout or None,
            ),
            logging=LoggingConfig(
                level=os.getenv("FLIGHTCACHE_LOG_LEVEL", "INFO").upper(),
            ),
        )
