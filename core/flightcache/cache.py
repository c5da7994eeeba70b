import logging
import threading
from typing import Any, Callable, Dict, Generic, Hashable, Optional, TypeVar

from flightcache.configs.main import CacheConfig
from flightcache.errors import RecursiveComputationError, WaitTimeoutError
from flightcache.handle import ComputationHandle
from flightcache.types import CacheStats, HandleState

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SingleFlightCache(Generic[K, V]):
    """
    A thread-safe memoizing cache implementing the 'singleflight' pattern.

    For any key, the first caller to find it missing installs a pending
    handle and runs the computation; every other caller asking for the same
    key, concurrently or later, waits on that handle and receives the same
    value. Successful results stay cached for the lifetime of the instance.
    Failed computations and abandoned waits remove the entry, so the next
    call for the key computes it again.

    Example:
        cache = SingleFlightCache()
        cache.set_value_if_absent(0, 1)
        cache.get_value("config", load_config)  # load_config runs once
    """

    def __init__(self, name: str = "default", wait_timeout: Optional[float] = None):
        self._name = name
        self._wait_timeout = wait_timeout
        self._entries: Dict[K, ComputationHandle[V]] = {}
        self._lock = threading.Lock()
        self._stats = CacheStats()
        self._logger = logger.getChild(name)

    @classmethod
    def from_config(cls, config: CacheConfig) -> "SingleFlightCache":
        return cls(name=config.name, wait_timeout=config.wait_timeout)

    @property
    def name(self) -> str:
        return self._name

    def get_value(
        self,
        key: K,
        compute: Callable[[], V],
        timeout: Optional[float] = None,
    ) -> V:
        """
        Return the value cached for ``key``, computing it with ``compute`` if
        no entry exists yet.

        Args:
            key: Any hashable value.
            compute: A zero-argument callable. It is invoked at most once per
                key, by the caller that installs the entry.
            timeout: Seconds to wait for another caller's in-flight
                computation. Defaults to the cache's ``wait_timeout``.

        Raises:
            WaitTimeoutError: The in-flight computation did not finish in time.
            Exception: Whatever ``compute`` raised, re-raised to every caller
                waiting on the same entry.
        """
        if timeout is None:
            timeout = self._wait_timeout

        handle = None
        try:
            handle = self._create_handle_if_absent(key, compute)
            return handle.result(timeout=timeout)
        except RecursiveComputationError:
            # The handle is still pending while its own computation asks for
            # it; only the owner's settled failure may evict it.
            if handle is not None and handle.done():
                self._remove_if_same(key, handle)
            raise
        except WaitTimeoutError:
            self._logger.warning(
                "Gave up waiting %ss for the computation of key %r.", timeout, key
            )
            self._remove_if_same(key, handle)
            raise
        except BaseException:
            if handle is not None:
                self._remove_if_same(key, handle)
            raise

    def set_value_if_absent(self, key: K, value: V) -> None:
        """
        Seed ``key`` with a precomputed ``value``. An existing entry, pending
        or settled, is left untouched.
        """
        self._create_handle_if_absent(key, lambda: value, seed=True)

    def peek(self, key: K, default: Any = None) -> Any:
        """Return the completed value for ``key`` without waiting or computing."""
        handle = self._entries.get(key)
        if handle is None or handle.state != HandleState.COMPLETED:
            return default
        return handle.result()

    def stats(self) -> CacheStats:
        with self._lock:
            return self._stats.model_copy()

    def _create_handle_if_absent(
        self, key: K, compute: Callable[[], V], seed: bool = False
    ) -> ComputationHandle[V]:
        handle = self._entries.get(key)
        if handle is None:
            new_handle = ComputationHandle(compute, key=key)
            try:
                handle = self._put_if_absent(key, new_handle)
                if handle is None:
                    self._logger.debug("Computing value for key %r.", key)
                    new_handle.run()
                    if not seed:
                        self._record_run(key, new_handle)
                    return new_handle
            except BaseException as e:
                # Interrupted between installing the handle and settling it.
                if not new_handle.done():
                    new_handle.set_exception(e)
                if new_handle.state == HandleState.FAILED:
                    self._remove_if_same(key, new_handle)
                raise

        with self._lock:
            self._stats.hits += 1
        return handle

    def _record_run(self, key: K, handle: ComputationHandle[V]) -> None:
        failed = handle.state == HandleState.FAILED
        with self._lock:
            self._stats.computations += 1
            if failed:
                self._stats.failures += 1
        if failed:
            self._logger.warning("Computation for key %r failed.", key)

    def _put_if_absent(
        self, key: K, handle: ComputationHandle[V]
    ) -> Optional[ComputationHandle[V]]:
        with self._lock:
            existing = self._entries.get(key)
            if existing is None:
                self._entries[key] = handle
                self._stats.misses += 1
            return existing

    def _remove_if_same(self, key: K, handle: ComputationHandle[V]) -> bool:
        with self._lock:
            if self._entries.get(key) is not handle:
                return False
            del self._entries[key]
            self._stats.evictions += 1
        self._logger.debug("Evicted entry for key %r.", key)
        return True

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Any) -> bool:
        return key in self._entries

    def __repr__(self):
        return f"SingleFlightCache(name={self._name!r}, entries={len(self)})"
