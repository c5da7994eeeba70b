from typing import Any, Optional


class FlightCacheError(Exception):
    """Base class for errors raised by the cache itself."""


class HandleAlreadySettledError(FlightCacheError, RuntimeError):
    """
    Exception raised when a computation handle is settled a second time.

    Attributes:
        state (HandleState): The state the handle had already settled into.
    """

    def __init__(self, state):
        self.state = state
        super().__init__(f"The computation handle is already settled ({state}).")


class RecursiveComputationError(FlightCacheError, RuntimeError):
    """
    Exception raised when the thread computing a key asks for the same key
    while its own computation is still pending.
    """

    def __init__(self, key: Any = None):
        self.key = key
        super().__init__(
            f"The computation for key {key!r} depends on its own result."
        )


class WaitTimeoutError(FlightCacheError, TimeoutError):
    """
    Exception raised when a caller gives up waiting for another thread's
    in-flight computation.

    Attributes:
        key: The key the caller was waiting on.
        timeout (float): The number of seconds the caller waited.
    """

    def __init__(self, key: Any = None, timeout: Optional[float] = None):
        self.key = key
        self.timeout = timeout
        super().__init__(
            f"Timed out after {timeout}s waiting for the computation of key {key!r}."
        )


class HandleAlreadyRunningError(FlightCacheError, RuntimeError):
    """
    Exception raised when a computation handle is asked to run a second time.

    Attributes:
        key: The key the handle computes.
    """

    def __init__(self, key: Any = None):
        self.key = key
        super().__init__(
            f"The computation for key {key!r} has already been started."
        )
