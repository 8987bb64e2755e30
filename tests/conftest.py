"""
Shared test helpers
"""

import asyncio

import pytest


async def settle(rounds: int = 10) -> None:
    """Let scheduled tasks run until they block again"""
    for _ in range(rounds):
        await asyncio.sleep(0)


class ManualSleep:
    """Stand-in for asyncio.sleep that only returns when released"""
    
    def __init__(self):
        self.calls = []
        self._waiters = []
    
    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        await waiter
    
    @property
    def pending(self) -> int:
        return sum(1 for waiter in self._waiters if not waiter.done())
    
    async def advance(self, ticks: int = 1) -> None:
        """Release every sleeping loop once per tick"""
        for _ in range(ticks):
            await settle()
            for waiter in list(self._waiters):
                if not waiter.done():
                    waiter.set_result(None)
            await settle()


@pytest.fixture
def manual_sleep():
    return ManualSleep()
