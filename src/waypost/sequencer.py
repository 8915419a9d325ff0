"""Navigation guard sequencer — runs lifecycle hooks for one navigation.

Given a planned ``NavigationRequest``, decides which hooks to call, in
what order, and how their answers combine. Every hook may be sync or
async; they run one at a time so the order is deterministic.

Pipeline::

    1. Permission   deepest-first over leaving nodes:
                    can_navigate() if present, else can_deactivate(from, to).
                    False -> Cancelled, Redirect -> Redirect. No side effects yet.
    2. Reuse        top-down over entering nodes: reused only if the node
                    is already live, can_reuse(from, to) is True, and its
                    parent is reused too.
    3. Deactivate   deepest-first over leaving nodes that are not reused:
                    on_deactivate(from, to), then discard the instance.
    4. Activate     top-down over entering nodes: keep or create the
                    instance, then await on_activate(from, to) before
                    moving to its child.

Phases 3 and 4 are shielded from cancellation: once the first instance
is discarded the attempt runs to completion. There is no rollback; a
fault during activation leaves the deactivations already performed in
place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import anyio

from waypost._internal.invoke import invoke
from waypost.context import navigation_var
from waypost.errors import HookFault
from waypost.events import EventSink, NavigationEvent
from waypost.outcome import Cancelled, CancelReason, Outcome, Proceed, Redirect
from waypost.request import NavigationRequest
from waypost.routing.tree import RouteNode

logger = logging.getLogger("waypost.navigation")


def _discard(event: NavigationEvent) -> None:
    pass


async def attempt_navigation(
    request: NavigationRequest,
    *,
    strict: bool = True,
    emit: EventSink | None = None,
) -> Outcome:
    """Run one navigation attempt and return its outcome.

    Returns ``Proceed``, ``Cancelled`` (a guard declined), or ``Redirect``
    (a guard asked to go elsewhere; the caller decides whether to follow).

    Raises ``HookFault`` if a guard, reuse check, factory, or
    ``on_activate`` hook raises. ``on_deactivate`` faults are logged and
    reported on ``Proceed.deactivation_faults`` instead.
    """
    notify = _Notifier(request, emit or _discard)
    token = navigation_var.set(request)
    try:
        notify("start")
        logger.debug(
            "navigate %s -> %s (%d leaving, %d entering)",
            request.from_state,
            request.to_state,
            len(request.leaving),
            len(request.entering),
        )
        try:
            outcome = await _run(request, strict, notify)
        except HookFault as fault:
            notify("fault", fault.node, fault.hook)
            raise
        notify("end", detail=type(outcome).__name__)
        return outcome
    finally:
        navigation_var.reset(token)


async def _run(request: NavigationRequest, strict: bool, notify: _Notifier) -> Outcome:
    decision = await check_permissions(request, strict=strict, notify=notify)
    if decision is not None:
        return decision

    reused = await determine_reuse(request, strict=strict)

    with anyio.CancelScope(shield=True):
        faults = await _deactivate(request, reused, notify)
        await _activate(request, reused, notify)

    return Proceed(state=request.to_state, deactivation_faults=tuple(faults))


# ---------------------------------------------------------------------------
# Phase 1: permission
# ---------------------------------------------------------------------------


async def check_permissions(
    request: NavigationRequest,
    *,
    strict: bool = True,
    notify: Callable[..., None] | None = None,
) -> Cancelled | Redirect | None:
    """Ask every leaving instance, deepest first, whether it may go.

    Returns ``None`` when all guards agree, otherwise the first
    ``Cancelled`` or ``Redirect`` answer.
    """
    for node in reversed(request.leaving):
        hooks = node.hooks
        if hooks.can_navigate is not None:
            hook = "can_navigate"
            result = await _call(hooks.can_navigate, (), hook, node, "permission")
        elif hooks.can_deactivate is not None:
            hook = "can_deactivate"
            result = await _call(
                hooks.can_deactivate,
                (request.from_state, request.to_state),
                hook,
                node,
                "permission",
            )
        else:
            continue

        answer = _guard_answer(result, hook, node, strict)
        if isinstance(answer, Redirect):
            logger.debug("%s() on %s redirected to %s", hook, node.key, answer.state)
            if notify is not None:
                notify("redirect", node.key, str(answer.state))
            return answer
        if not answer:
            logger.debug("%s() on %s declined %s", hook, node.key, request.to_state)
            if notify is not None:
                notify("declined", node.key, hook)
            return Cancelled(state=request.to_state, reason=CancelReason.DECLINED, node=node.key)
    return None


def _guard_answer(result: Any, hook: str, node: RouteNode, strict: bool) -> bool | Redirect:
    if isinstance(result, bool | Redirect):
        return result
    if not strict:
        return bool(result)
    detail = f"returned {type(result).__name__}, expected bool or Redirect"
    raise HookFault(hook, node.key, "permission", detail)


# ---------------------------------------------------------------------------
# Phase 2: reuse
# ---------------------------------------------------------------------------


async def determine_reuse(request: NavigationRequest, *, strict: bool = True) -> set[RouteNode]:
    """Return the entering nodes whose live instance is kept.

    Top-down with an "ancestor reused" accumulator: once a node is not
    reused, nothing beneath it is asked.
    """
    leaving = set(request.leaving)
    reused: set[RouteNode] = set()
    ancestor_reused = True
    for placement in request.entering:
        node = placement.node
        reusable = False
        if ancestor_reused and node in leaving and node.hooks.can_reuse is not None:
            answer = await _call(
                node.hooks.can_reuse,
                (request.from_state, request.to_state),
                "can_reuse",
                node,
                "reuse",
            )
            if strict and not isinstance(answer, bool):
                detail = f"returned {type(answer).__name__}, expected bool"
                raise HookFault("can_reuse", node.key, "reuse", detail)
            reusable = bool(answer)
        if reusable:
            reused.add(node)
        ancestor_reused = reusable
    return reused


# ---------------------------------------------------------------------------
# Phases 3 and 4: side effects
# ---------------------------------------------------------------------------


async def _deactivate(
    request: NavigationRequest,
    reused: set[RouteNode],
    notify: _Notifier,
) -> list[HookFault]:
    faults: list[HookFault] = []
    for node in reversed(request.leaving):
        if node in reused:
            continue
        if node.hooks.on_deactivate is not None:
            try:
                await _call(
                    node.hooks.on_deactivate,
                    (request.from_state, request.to_state),
                    "on_deactivate",
                    node,
                    "deactivate",
                )
            except HookFault as fault:
                logger.exception("on_deactivate() failed on %s", node.key)
                notify("fault", node.key, "on_deactivate")
                faults.append(fault)
        node.detach()
        notify("deactivate", node.key)
    return faults


async def _activate(
    request: NavigationRequest,
    reused: set[RouteNode],
    notify: _Notifier,
) -> None:
    for placement in request.entering:
        node = placement.node
        if node in reused:
            node.retarget(placement.params, request.to_state)
            detail = "reused"
        else:
            try:
                instance = node.config.component()  # type: ignore[misc]
                node.attach(instance, placement.params, request.to_state)
            except Exception as exc:
                raise HookFault("component", node.key, "activate", str(exc)) from exc
            detail = "created"

        if node.hooks.on_activate is not None:
            await _call(
                node.hooks.on_activate,
                (request.from_state, request.to_state),
                "on_activate",
                node,
                "activate",
            )
        notify("activate", node.key, detail)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _call(
    handle: Callable[..., Any],
    args: tuple[Any, ...],
    hook: str,
    node: RouteNode,
    phase: str,
) -> Any:
    """Invoke one hook, wrapping anything it raises in ``HookFault``."""
    try:
        return await invoke(handle, *args)
    except Exception as exc:
        raise HookFault(hook, node.key, phase, str(exc)) from exc


class _Notifier:
    """Builds ``NavigationEvent`` records for one request and forwards them."""

    __slots__ = ("_emit", "_request")

    def __init__(self, request: NavigationRequest, emit: EventSink) -> None:
        self._request = request
        self._emit = emit

    def __call__(self, kind: str, node: str | None = None, detail: str = "") -> None:
        event = NavigationEvent(
            kind=kind,
            from_state=self._request.from_state,
            to_state=self._request.to_state,
            node=node,
            detail=detail,
        )
        # Runs inside the shielded phases; a listener must not abort them
        try:
            self._emit(event)
        except Exception:
            logger.exception("navigation listener failed on %s event", kind)
