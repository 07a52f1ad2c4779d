import asyncio
import threading

import pytest

from skybox.executors import Executors


async def _thread_id():
    return threading.get_ident()


def test_round_robin():
    ex = Executors(2)
    ex.startup()
    try:
        first = ex.get_executor()
        second = ex.get_executor()
        third = ex.get_executor()
        assert first is not second
        assert third is first
    finally:
        ex.shutdown()


def test_each_loop_runs_on_its_own_thread():
    with Executors(3) as ex:
        loops = [ex.get_executor() for _ in range(3)]
        idents = {
            asyncio.run_coroutine_threadsafe(_thread_id(), loop).result(5) for loop in loops
        }
    assert len(idents) == 3
    assert threading.get_ident() not in idents


def test_shutdown_closes_loops():
    ex = Executors(2)
    ex.startup()
    loops = [ex.get_executor(), ex.get_executor()]
    ex.shutdown()
    assert all(loop.is_closed() for loop in loops)
    with pytest.raises(RuntimeError):
        ex.get_executor()


def test_get_before_startup_raises():
    with pytest.raises(RuntimeError):
        Executors(1).get_executor()


def test_empty_pool_has_no_executor():
    with Executors(0) as ex:
        with pytest.raises(RuntimeError):
            ex.get_executor()


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Executors(-1)