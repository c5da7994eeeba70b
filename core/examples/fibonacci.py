import logging
import sys
import time

from flightcache import Config, SingleFlightCache, configure_logging

logger = logging.getLogger("fibonacci")


class Fibonacci:
    """Fibonacci numbers memoized through a SingleFlightCache, seeded with fib(0) = fib(1) = 1."""

    def __init__(self, cache: SingleFlightCache):
        self._cache = cache
        self._cache.set_value_if_absent(0, 1)
        self._cache.set_value_if_absent(1, 1)

    def get(self, n: int) -> int:
        return self._cache.get_value(n, lambda: self._compute(n))

    def _compute(self, n: int) -> int:
        logger.debug("Computing fib(%d)", n)
        return self.get(n - 1) + self.get(n - 2)


def main(n: int = 50):
    config = Config.from_env()
    configure_logging(config.logging)

    fibonacci = Fibonacci(SingleFlightCache.from_config(config.cache))
    started = time.perf_counter()
    value = fibonacci.get(n)
    logger.info(
        "fib(%d) = %d (took %.3fms)", n, value, (time.perf_counter() - started) * 1000
    )


if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 50)
