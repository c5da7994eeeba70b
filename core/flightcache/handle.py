import threading
from typing import Any, Callable, Generic, Optional, TypeVar

from flightcache.errors import (
    HandleAlreadyRunningError,
    HandleAlreadySettledError,
    RecursiveComputationError,
    WaitTimeoutError,
)
from flightcache.types import HandleState

V = TypeVar("V")


class ComputationHandle(Generic[V]):
    """
    A one-shot holder for a computation and its outcome.

    The handle starts ``PENDING`` and is settled exactly once, either to
    ``COMPLETED`` with a value or to ``FAILED`` with an exception. Any number
    of threads may block in :meth:`result` until that happens; all of them
    observe the same outcome.
    """

    def __init__(self, compute: Callable[[], V], key: Any = None):
        self._compute = compute
        self._key = key
        self._state = HandleState.PENDING
        self._value: Optional[V] = None
        self._error: Optional[BaseException] = None
        self._owner: Optional[int] = None
        self._lock = threading.Lock()
        self._settled = threading.Event()

    @property
    def key(self) -> Any:
        return self._key

    @property
    def state(self) -> HandleState:
        return self._state

    def done(self) -> bool:
        return self._settled.is_set()

    def run(self) -> None:
        """
        Execute the computation in the calling thread and settle the handle
        with its outcome. Exceptions raised by the computation are captured,
        not propagated; they are re-raised from :meth:`result`.
        """
        with self._lock:
            if self._owner is not None or self._state != HandleState.PENDING:
                raise HandleAlreadyRunningError(self._key)
            self._owner = threading.get_ident()
            compute, self._compute = self._compute, None

        try:
            value = compute()
        except BaseException as e:
            self.set_exception(e)
        else:
            self.set_result(value)

    def set_result(self, value: V) -> None:
        self._settle(HandleState.COMPLETED, value=value)

    def set_exception(self, error: BaseException) -> None:
        self._settle(HandleState.FAILED, error=error)

    def _settle(
        self,
        state: HandleState,
        value: Optional[V] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        with self._lock:
            if self._state != HandleState.PENDING:
                raise HandleAlreadySettledError(self._state)
            self._value = value
            self._error = error
            self._state = state
        self._settled.set()

    def result(self, timeout: Optional[float] = None) -> V:
        """
        Block until the handle settles and return its value, or re-raise the
        exception the computation failed with.

        Raises:
            WaitTimeoutError: The handle did not settle within ``timeout`` seconds.
            RecursiveComputationError: The calling thread is the one running
                this computation, so waiting would never return.
        """
        if not self._settled.is_set() and self._owner == threading.get_ident():
            raise RecursiveComputationError(self._key)
        if not self._settled.wait(timeout):
            raise WaitTimeoutError(self._key, timeout)
        if self._state == HandleState.FAILED:
            raise self._error
        return self._value

    def __repr__(self):
        return f"ComputationHandle(key={self._key!r}, state={self._state})"
