"""Helpers for awaiting backend calls from the event loop."""

import asyncio
import inspect
from typing import Any, Callable


async def call(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """
    Await a backend callable, whether it is blocking or a coroutine function.

    Blocking callables (e.g. the requests based backend) run in a worker thread
    so that concurrent fetches overlap. Their results come back to the event
    loop, which is the only place session state is written.
    """
    if inspect.iscoroutinefunction(func):
        return await func(*args, **kwargs)
    result = await asyncio.to_thread(func, *args, **kwargs)
    if inspect.isawaitable(result):
        return await result
    return result
