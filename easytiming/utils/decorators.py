"""
Decorator form of Timer for functions and coroutine functions.
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Optional, TypeVar, Union

from easytiming.utils.timing import Sink, Timer

F = TypeVar("F", bound=Callable[..., Any])


def timed(
    name: Union[str, F, None] = None,
    *,
    sink: Optional[Sink] = None,
    quiet: bool = False,
) -> Any:
    """
    Decorator that times every call of the wrapped function.

    Usage:
        @timed("load_index")
        async def load(...):
            ...

        @timed
        def rebuild(...):
            ...

    The label defaults to the function's qualified name. Each call gets its
    own Timer; a shared writer sink receives one report per call.
    """

    def decorator(func: F) -> F:
        label = name if name is not None else func.__qualname__

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with Timer(label, sink=sink, quiet=quiet):
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with Timer(label, sink=sink, quiet=quiet):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    if callable(name):
        func, name = name, None
        return decorator(func)
    return decorator
