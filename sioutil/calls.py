"""Calling a named method of an object on a chosen kind of thread."""

from __future__ import annotations

import enum
import logging
from concurrent.futures import Future
from typing import Any, Callable, Optional

from .runnable import (
    LatentAction,
    MainThreadDispatcher,
    run_on_background_thread,
    run_on_thread_pool,
)

logger = logging.getLogger(__name__)


class CallbackType(enum.Enum):
    """Where a callback runs."""

    GAME_THREAD = 0
    BACKGROUND_THREADPOOL = 1
    BACKGROUND_TASKGRAPH = 2


def _resolve(target: Any, function_name: str) -> Callable[[], Any]:
    if target is None:
        logger.warning("CallFunctionOnThread: Target not found for '%s'", function_name)
        raise ValueError(f"no target to call '{function_name}' on")
    function = getattr(target, function_name, None)
    if not callable(function):
        logger.warning("CallFunctionOnThread: Function not found '%s'", function_name)
        raise AttributeError(f"{type(target).__name__} has no function '{function_name}'")
    return function


def _completed(func: Callable[[], Any]) -> Future:
    future: Future = Future()
    try:
        future.set_result(func())
    except Exception as exc:
        future.set_exception(exc)
    return future


def _dispatch(
    func: Callable[[], Any],
    thread_type: CallbackType,
    dispatcher: Optional[MainThreadDispatcher],
) -> Future:
    thread_type = CallbackType(thread_type)
    if thread_type is CallbackType.GAME_THREAD:
        if dispatcher is None or dispatcher.is_current_thread():
            return _completed(func)
        return dispatcher.post(func)
    if thread_type is CallbackType.BACKGROUND_THREADPOOL:
        return run_on_thread_pool(func)
    return run_on_background_thread(func)


def call_function_on_thread(
    target: Any,
    function_name: str,
    thread_type: CallbackType,
    dispatcher: Optional[MainThreadDispatcher] = None,
) -> Future:
    """Call ``target.function_name()`` on the thread kind given.

    For the game thread the call runs at once when already on the
    dispatcher's thread (or without a dispatcher), otherwise it is posted
    to the dispatcher. Raises ValueError for a missing target and
    AttributeError for a missing function.
    """
    function = _resolve(target, function_name)
    return _dispatch(function, thread_type, dispatcher)


def call_function_on_thread_graph_return(
    target: Any,
    function_name: str,
    thread_type: CallbackType,
    latent_action: LatentAction,
    dispatcher: Optional[MainThreadDispatcher] = None,
) -> Future:
    """Like call_function_on_thread, then mark ``latent_action`` done.

    If the target or function is missing the action is still marked done
    before the error is raised.
    """
    try:
        function = _resolve(target, function_name)
    except (ValueError, AttributeError):
        latent_action.call()
        raise

    def run_then_complete() -> Any:
        result = function()
        latent_action.call()
        return result

    return _dispatch(run_then_complete, thread_type, dispatcher)