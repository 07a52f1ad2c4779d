"""A fixed pool of event loops, each running on its own thread."""

from __future__ import annotations

import asyncio
import threading


def _worker(loop: asyncio.AbstractEventLoop) -> None:
    asyncio.set_event_loop(loop)
    loop.run_forever()


class Executors:
    """Runs ``size`` event loops and hands them out in turn."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self._size = size
        self._lock = threading.Lock()
        self._loops: list[asyncio.AbstractEventLoop] = []
        self._threads: list[threading.Thread] = []
        self._selected = 0

    def startup(self) -> None:
        """Create the loops and start their threads."""
        with self._lock:
            for _ in range(self._size):
                loop = asyncio.new_event_loop()
                thread = threading.Thread(target=_worker, args=(loop,), daemon=True)
                thread.start()
                self._loops.append(loop)
                self._threads.append(thread)

    def shutdown(self) -> None:
        """Stop every loop, wait for its thread and close it."""
        with self._lock:
            for loop in self._loops:
                if not loop.is_closed():
                    loop.call_soon_threadsafe(loop.stop)
            for thread in self._threads:
                thread.join()
            for loop in self._loops:
                if not loop.is_closed():
                    loop.close()
            self._loops.clear()
            self._threads.clear()

    def get_executor(self) -> asyncio.AbstractEventLoop:
        """Return the next loop, round robin."""
        with self._lock:
            if not self._loops:
                raise RuntimeError("no running executors")
            if self._selected >= len(self._loops):
                self._selected = 0
            loop = self._loops[self._selected]
            self._selected += 1
            return loop

    def __enter__(self) -> Executors:
        self.startup()
        return self

    def __exit__(self, *args) -> bool:
        self.shutdown()
        return False