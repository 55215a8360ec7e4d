'''
Clock and deferred callbacks for the reveal controller.

All reveal-state transitions happen on a single event loop: either in a click handler, or in a
callback scheduled here. The default implementation uses asyncio's loop (its monotonic clock and
call_later()), so nothing ever runs concurrently for the same block.

Clicks may also be dispatched synchronously, with no loop running at all. The clock is then
time.monotonic() (which is what asyncio's loop.time() uses anyway), and timers go onto a private
loop that the scheduler creates for itself. Such timers fire only while that loop is being run;
until then, an expired block is still disarmed by the next click, since every click compares
against the clock.
'''

import asyncio
import time
from typing import Callable, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def now(self) -> float:
        '''Current time, in milliseconds.'''
        ...

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class AsyncioScheduler:
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._own_loop: Optional[asyncio.AbstractEventLoop] = None


    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        # Resolved on each use, since the controller may be created before a loop starts running.
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            if self._own_loop is None or self._own_loop.is_closed():
                self._own_loop = asyncio.new_event_loop()
            return self._own_loop


    def now(self) -> float:
        if self._loop is not None:
            return self._loop.time() * 1000
        try:
            return asyncio.get_running_loop().time() * 1000
        except RuntimeError:
            return time.monotonic() * 1000


    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay_ms / 1000, callback)


    def close(self):
        '''Closes the private loop, if one was created. Pending timers on it are discarded.'''
        own_loop = self._own_loop
        self._own_loop = None
        if own_loop is not None and not own_loop.is_closed():
            own_loop.close()
