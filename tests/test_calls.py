import threading

import pytest

from sioutil.calls import CallbackType, call_function_on_thread, call_function_on_thread_graph_return
from sioutil.runnable import LatentAction, MainThreadDispatcher


class Recorder:
    def __init__(self):
        self.threads = []

    def work(self):
        self.threads.append(threading.get_ident())
        return len(self.threads)


def _foreign_dispatcher():
    holder = {}
    thread = threading.Thread(target=lambda: holder.setdefault("d", MainThreadDispatcher()))
    thread.start()
    thread.join()
    return holder["d"]


def test_game_thread_runs_immediately_on_owner_thread():
    target = Recorder()
    future = call_function_on_thread(target, "work", CallbackType.GAME_THREAD, MainThreadDispatcher())
    assert future.result(timeout=5) == 1
    assert target.threads == [threading.get_ident()]


def test_game_thread_posts_when_off_owner_thread():
    target = Recorder()
    dispatcher = _foreign_dispatcher()
    future = call_function_on_thread(target, "work", CallbackType.GAME_THREAD, dispatcher)
    assert target.threads == []
    assert dispatcher.process_pending() == 1
    assert future.result(timeout=5) == 1
    assert len(target.threads) == 1


def test_thread_pool_runs_off_caller_thread():
    target = Recorder()
    future = call_function_on_thread(target, "work", CallbackType.BACKGROUND_THREADPOOL)
    assert future.result(timeout=5) == 1
    assert target.threads[0] != threading.get_ident()


def test_task_graph_runs_off_caller_thread():
    target = Recorder()
    future = call_function_on_thread(target, "work", CallbackType.BACKGROUND_TASKGRAPH)
    assert future.result(timeout=5) == 1
    assert target.threads[0] != threading.get_ident()


def test_missing_function_raises():
    with pytest.raises(AttributeError):
        call_function_on_thread(Recorder(), "nothing_here", CallbackType.GAME_THREAD)


def test_missing_target_raises():
    with pytest.raises(ValueError):
        call_function_on_thread(None, "work", CallbackType.GAME_THREAD)


@pytest.mark.parametrize(
    "thread_type",
    [CallbackType.GAME_THREAD, CallbackType.BACKGROUND_THREADPOOL, CallbackType.BACKGROUND_TASKGRAPH],
)
def test_graph_return_completes_latent_action(thread_type):
    target = Recorder()
    action = LatentAction(uuid=7)
    future = call_function_on_thread_graph_return(target, "work", thread_type, action)
    assert future.result(timeout=5) == 1
    assert action.wait(5) is True
    assert action.description() == "Done."


def test_graph_return_waits_for_posted_call():
    target = Recorder()
    action = LatentAction()
    dispatcher = _foreign_dispatcher()
    call_function_on_thread_graph_return(target, "work", CallbackType.GAME_THREAD, action, dispatcher)
    assert action.is_done() is False
    dispatcher.process_pending()
    assert action.is_done() is True


def test_graph_return_missing_function_still_completes():
    action = LatentAction()
    with pytest.raises(AttributeError):
        call_function_on_thread_graph_return(Recorder(), "absent", CallbackType.GAME_THREAD, action)
    assert action.is_done() is True


def test_graph_return_missing_target_still_completes():
    action = LatentAction()
    with pytest.raises(ValueError):
        call_function_on_thread_graph_return(None, "work", CallbackType.BACKGROUND_THREADPOOL, action)
    assert action.is_done() is True