import logging
import time
from datetime import datetime

from flightcache import Config, SingleFlightCache, configure_logging

logger = logging.getLogger("slow_task")


def slow_timestamp(delay: float = 2.0) -> datetime:
    time.sleep(delay)
    return datetime.now()


def main(repeat: int = 10):
    config = Config.from_env()
    configure_logging(config.logging)

    cache = SingleFlightCache.from_config(config.cache)
    for i in range(repeat):
        started = time.perf_counter()
        value = cache.get_value("a", slow_timestamp)
        logger.info(
            "Call %d returned %s (took %.3fms)",
            i,
            value.isoformat(),
            (time.perf_counter() - started) * 1000,
        )


if __name__ == "__main__":
    main()
