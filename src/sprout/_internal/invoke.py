"""Invoke helpers — call sync or async page callables uniformly.

Page middleware can be ``def`` or ``async def``. Any code that calls
one must handle both cases, so the sync/async check lives here.

Usage::

    from sprout._internal.invoke import invoke

    result = await invoke(middleware, request)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync — returns immediately
        def middleware(request):
            return {"props": {"url": request.url}}

        # async — returns a coroutine, awaited here
        async def middleware(request):
            user = await load_user(request)
            return {"props": {"user": user}}
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
