"""Joining concurrent pipeline steps."""

import asyncio
from typing import Any


async def gather_in_order(*aws: Any) -> list[Any]:
    """Run awaitables concurrently and wait for all of them.

    If any failed, the first failure in argument order is raised, after its
    siblings have finished. Nothing is left running once this returns.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results
