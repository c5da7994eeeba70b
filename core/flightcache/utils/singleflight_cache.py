from functools import partial, wraps
from typing import Optional

from flightcache.cache import SingleFlightCache


def singleflight_cache(func=None, *, cache: Optional[SingleFlightCache] = None):
    """
    A thread-safe cache decorator implementing the 'singleflight' pattern.

    For any given set of arguments, concurrent calls to the decorated
    function result in a single actual execution. Other threads with the
    same arguments wait for the first execution to complete and receive the
    same result. A call that raises is not cached; the next call with the
    same arguments runs the function again.

    Example:
        @singleflight_cache
        def load_data(key):
            # expensive operation
            ...

        # In multiple threads:
        load_data('foo')  # Only one thread will actually execute the function for 'foo'

    The underlying cache is available as ``load_data.cache``. Pass
    ``cache=...`` to share one cache between several functions.
    """
    if func is None:
        return partial(singleflight_cache, cache=cache)

    _cache = cache if cache is not None else SingleFlightCache(name=func.__name__)

    @wraps(func)
    def wrapper(*args, **kwargs):
        key = args + tuple(sorted(kwargs.items()))
        return _cache.get_value(key, partial(func, *args, **kwargs))

    wrapper.cache = _cache
    return wrapper
