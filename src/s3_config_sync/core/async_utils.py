"""Async utilities for bridging blocking SDK and file calls to the run loop."""

import asyncio
from typing import Any, Callable, TypeVar

T = TypeVar("T")


async def run_sync(
    func: Callable[..., T], *args: Any, **kwargs: Any
) -> T:
    """Run a synchronous function in a worker thread without blocking the event loop.

    Used to wrap blocking boto3 calls and disk reads so the engine can
    await them like any other suspension point.

    Args:
        func: Synchronous function to call
        *args: Positional arguments for func
        **kwargs: Keyword arguments for func

    Returns:
        Result of func(*args, **kwargs)

    Example:
        exists = await run_sync(client.head_bucket, Bucket="configs")
    """
    return await asyncio.to_thread(func, *args, **kwargs)
