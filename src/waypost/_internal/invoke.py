"""Invoke helpers — call sync or async hooks uniformly.

Lifecycle hooks can be ``def`` or ``async def``. Any code that calls a
component hook must handle both cases. This module provides a single
helper so the sync/async check lives in exactly one place.

Usage::

    from waypost._internal.invoke import invoke

    result = await invoke(hooks.can_deactivate, current, next_state)
"""

import inspect
from typing import Any


async def invoke(hook: Any, *args: Any) -> Any:
    """Call a hook and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: already a result
        def can_navigate(self):
            return self.name == self.crisis.name

        # async: awaited before the sequencer moves on
        async def can_navigate(self):
            return await dialog.confirm("Discard changes?")
    """
    result = hook(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
