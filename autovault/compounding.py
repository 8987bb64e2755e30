"""
Compounding Engine Module

Accrues simulated yield onto the vault on a fixed interval. Each tick adds

    balance * (apy / 100) * compound_rate * (interval_ms / MILLISECONDS_PER_YEAR)

to both balance and earnings: a linear per-tick approximation, not
continuous compounding.

The scheduler runs as a single asyncio task on the caller's event loop and is
either IDLE or ACTIVE. Stopping cancels the task handle immediately, so no
tick runs after stop() returns.
"""

import asyncio
import logging
import threading
from enum import Enum
from typing import Awaitable, Callable, Optional

from .persistence import VaultStore
from .state import VaultState

logger = logging.getLogger("autovault.compounding")

AUTO_COMPOUND_INTERVAL_MS = 10000
COMPOUND_RATE = 0.001  # 0.1% per compound
MILLISECONDS_PER_YEAR = 365 * 24 * 60 * 60 * 1000


class SchedulerState(Enum):
    """Compounding scheduler lifecycle"""
    IDLE = "idle"
    ACTIVE = "active"


def compute_compound_amount(balance: float, apy: float,
                            compound_rate: float = COMPOUND_RATE,
                            interval_ms: int = AUTO_COMPOUND_INTERVAL_MS) -> float:
    """Yield credited by one tick"""
    annual_yield = balance * (apy / 100)
    return annual_yield * (compound_rate * (interval_ms / MILLISECONDS_PER_YEAR))


def _current_task() -> Optional[asyncio.Task]:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


class CompoundingEngine:
    """
    Recurring accrual scheduler for one VaultState.

    The lock is shared with whoever else mutates the state so a tick never
    interleaves with a deposit or withdrawal.
    """

    def __init__(
        self,
        state: VaultState,
        store: VaultStore,
        interval_ms: int = AUTO_COMPOUND_INTERVAL_MS,
        compound_rate: float = COMPOUND_RATE,
        lock: Optional[threading.RLock] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if interval_ms <= 0:
            raise ValueError("Compounding interval must be positive")
        self.state = state
        self.store = store
        self.interval_ms = interval_ms
        self.compound_rate = compound_rate
        self._lock = lock or threading.RLock()
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None
        self._scheduler_state = SchedulerState.IDLE
        self.tick_count = 0

    @property
    def scheduler_state(self) -> SchedulerState:
        return self._scheduler_state

    @property
    def is_active(self) -> bool:
        return self._scheduler_state is SchedulerState.ACTIVE

    def start(self) -> bool:
        """
        Move IDLE -> ACTIVE and schedule the tick loop.

        Returns False without creating a second task when already ACTIVE.
        Must be called with a running event loop.
        """
        if self.is_active:
            return False
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(), name="autovault-compounding")
        self._scheduler_state = SchedulerState.ACTIVE
        logger.info("Auto-compound started")
        return True

    def stop(self) -> bool:
        """Move ACTIVE -> IDLE and cancel the tick loop; returns whether it was ACTIVE"""
        if not self.is_active:
            return False
        self._scheduler_state = SchedulerState.IDLE
        task, self._task = self._task, None
        if task is not None and task is not _current_task():
            task.cancel()
        logger.info("Auto-compound stopped")
        return True

    def tick(self) -> Optional[float]:
        """
        Apply one accrual step.

        Returns the amount credited, or None when the balance is exhausted, in
        which case the scheduler halts itself and clears the auto-compound flag.
        """
        with self._lock:
            if self.state.balance <= 0:
                self.stop()
                self.state.auto_compound = False
                self.store.save(self.state)
                logger.info("Auto-compound disabled: vault balance exhausted")
                return None

            amount = compute_compound_amount(
                self.state.balance, self.state.apy,
                self.compound_rate, self.interval_ms
            )
            self.state.earnings += amount
            self.state.balance += amount
            self.tick_count += 1
            self.store.save(self.state)

        logger.debug(f"Compounded {amount:.10f}; balance now {self.state.balance:.4f}")
        return amount

    async def _run(self) -> None:
        me = _current_task()
        try:
            while self.is_active and self._task is me:
                await self._sleep(self.interval_ms / 1000)
                if not self.is_active or self._task is not me:
                    break
                try:
                    self.tick()
                except Exception:
                    logger.exception("Compounding tick failed")
        finally:
            if self._task is me:
                self._task = None
