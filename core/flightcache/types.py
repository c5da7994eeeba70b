from enum import Enum

from pydantic import BaseModel, Field


class HandleState(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    def __str__(self):
        return self.value


class CacheStats(BaseModel):
    hits: int = Field(
        description="Lookups that found an existing entry, pending or settled.",
        default=0,
    )
    misses: int = Field(
        description="Lookups that installed a new entry.",
        default=0,
    )
    computations: int = Field(
        description="Computations passed to get_value that were executed. "
        "Seeded values are not counted.",
        default=0,
    )
    failures: int = Field(
        description="Computations that raised instead of returning a value.",
        default=0,
    )
    evictions: int = Field(
        description="Entries removed after a failure or a cancelled wait.",
        default=0,
    )
