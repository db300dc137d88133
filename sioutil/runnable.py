"""Helpers for running callables on background threads and a main-thread queue."""

from __future__ import annotations

import logging
import queue
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

_pool: Optional[ThreadPoolExecutor] = None
_pool_lock = threading.Lock()


def _run_into(future: Future, func: Callable[[], Any]) -> None:
    if not future.set_running_or_notify_cancel():
        return
    try:
        result = func()
    except BaseException as exc:  # delivered through the future
        future.set_exception(exc)
    else:
        future.set_result(result)


class MainThreadDispatcher:
    """A queue of callables that the owning thread runs when it calls process_pending."""

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[tuple[Future, Callable[[], Any]]] = queue.SimpleQueue()
        self.owner_thread_id = threading.get_ident()

    def is_current_thread(self) -> bool:
        """True when called from the thread that owns this dispatcher."""
        return threading.get_ident() == self.owner_thread_id

    def post(self, func: Callable[[], Any]) -> Future:
        """Queue ``func`` to run on the owning thread; the future holds its result."""
        future: Future = Future()
        self._queue.put((future, func))
        return future

    def process_pending(self) -> int:
        """Run every queued callable on the calling thread and return how many ran."""
        count = 0
        while True:
            try:
                future, func = self._queue.get_nowait()
            except queue.Empty:
                return count
            _run_into(future, func)
            count += 1


def run_on_background_thread(func: Callable[[], Any]) -> Future:
    """Run ``func`` on a new daemon thread; the future holds its result."""
    future: Future = Future()
    thread = threading.Thread(target=_run_into, args=(future, func), daemon=True)
    thread.start()
    return future


def _thread_pool() -> ThreadPoolExecutor:
    global _pool
    with _pool_lock:
        if _pool is None:
            _pool = ThreadPoolExecutor(thread_name_prefix="sioutil-pool")
        return _pool


def run_on_thread_pool(func: Callable[[], Any]) -> Future:
    """Run ``func`` on the shared background thread pool."""
    return _thread_pool().submit(func)


def set_timeout(
    on_done: Callable[[], Any],
    duration: float,
    dispatcher: Optional[MainThreadDispatcher] = None,
) -> Future:
    """Wait ``duration`` seconds on a background thread, then call ``on_done``.

    With a dispatcher the call is posted to it; otherwise it runs on the
    background thread. The returned future completes once the wait is over
    and the callback has been called or posted.
    """

    def wait_then_call() -> Any:
        time.sleep(duration)
        if dispatcher is not None:
            dispatcher.post(on_done)
            return None
        return on_done()

    return run_on_background_thread(wait_then_call)


class LatentAction:
    """A pending action that completes once ``call`` has been invoked."""

    def __init__(self, uuid: int = 0, on_cancel: Optional[Callable[[], Any]] = None) -> None:
        self.uuid = uuid
        self.on_cancel = on_cancel
        self.cancelled = False
        self._called = threading.Event()

    def call(self) -> None:
        """Mark the action as done."""
        self._called.set()

    def cancel(self) -> None:
        """Record the cancellation and notify the cancel callback, or log it."""
        self.cancelled = True
        if self.on_cancel is not None:
            self.on_cancel()
        else:
            logger.info("%d graph callback cancelled.", self.uuid)

    def notify_object_destroyed(self) -> None:
        self.cancel()

    def notify_action_aborted(self) -> None:
        self.cancel()

    def is_done(self) -> bool:
        return self._called.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the action is done or the timeout passes."""
        return self._called.wait(timeout)

    def description(self) -> str:
        return "Done." if self.is_done() else "Pending."