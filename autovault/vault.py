"""
Vault Service Module

Owns the vault state and applies the user-facing operations to it:
deposits, withdrawals, and switching auto-compounding on or off. Every
mutation is persisted immediately. Rule violations come back as
OperationResult values; nothing here raises for bad input.

Withdrawing any amount resets accrued earnings to zero.
"""

import asyncio
import logging
import math
import threading
from typing import Any, Awaitable, Callable, Dict, Optional

from .compounding import (
    AUTO_COMPOUND_INTERVAL_MS, COMPOUND_RATE, CompoundingEngine, SchedulerState
)
from .errors import OperationResult, VaultErrorKind
from .ledger import OperationKind, OperationLedger
from .logging_config import log_action
from .persistence import VaultStore
from .rpc_client import UNAVAILABLE, BalanceQueryClient, BalanceQueryResult
from .state import VaultState, is_real_number

logger = logging.getLogger("autovault.vault")

DEFAULT_UNIT = "MAS"


def parse_amount(value: Any) -> Optional[float]:
    """Return value as a finite positive float, or None if it is not one"""
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not is_real_number(value):
        return None
    amount = float(value)
    if amount <= 0:
        return None
    return amount


class VaultService:
    """
    Vault operations over an explicitly owned VaultState.

    Mutations and compounding ticks share one re-entrant lock, so a mutation
    always completes before the next one (or a tick) begins.
    """

    def __init__(
        self,
        store: VaultStore,
        state: Optional[VaultState] = None,
        ledger: Optional[OperationLedger] = None,
        balance_client: Optional[BalanceQueryClient] = None,
        interval_ms: int = AUTO_COMPOUND_INTERVAL_MS,
        compound_rate: float = COMPOUND_RATE,
        unit: str = DEFAULT_UNIT,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.store = store
        self.state = state or VaultState()
        self.ledger = ledger or OperationLedger()
        self.balance_client = balance_client
        self.unit = unit
        self._lock = threading.RLock()
        self.engine = CompoundingEngine(
            self.state, store,
            interval_ms=interval_ms,
            compound_rate=compound_rate,
            lock=self._lock,
            sleep=sleep,
        )
        self._wallet_result: Optional[BalanceQueryResult] = None

    # ============================================================
    # LIFECYCLE
    # ============================================================

    def restore(self) -> OperationResult:
        """
        Overlay the persisted snapshot and resume compounding if it was on.

        Resuming needs a running event loop and funds; without funds the flag
        is switched back off and persisted.
        """
        with self._lock:
            self.store.load_into(self.state)
            logger.info(
                f"Vault restored: balance={self.state.balance:.4f} "
                f"earnings={self.state.earnings:.4f} autoCompound={self.state.auto_compound}"
            )
            if self.state.auto_compound:
                return self.set_auto_compound(True)
        return OperationResult.ok("Vault restored")

    def shutdown(self) -> None:
        """Stop the scheduler but keep the persisted flag for the next restore"""
        self.engine.stop()

    # ============================================================
    # MUTATIONS
    # ============================================================

    def deposit(self, amount: Any) -> OperationResult:
        """Add amount to the balance; earnings are untouched"""
        value = parse_amount(amount)
        if value is None:
            return OperationResult.fail(VaultErrorKind.INVALID_AMOUNT, "Please enter a valid amount")

        with self._lock:
            if not math.isfinite(self.state.balance + value):
                return OperationResult.fail(VaultErrorKind.INVALID_AMOUNT, "Amount exceeds the vault capacity")

            self.state.balance += value
            operation_id = self.ledger.generate(OperationKind.DEPOSIT)
            self.store.save(self.state)

        log_action(logger, "info", f"Deposited {value:.4f}",
                   action="deposit", resource="vault", operation_id=operation_id,
                   extra={"amount": value, "balance": self.state.balance})
        return OperationResult.ok("Deposit successful", operation_id=operation_id)

    def withdraw(self, amount: Any) -> OperationResult:
        """Remove amount from the balance and reset earnings to zero"""
        value = parse_amount(amount)
        if value is None:
            return OperationResult.fail(VaultErrorKind.INVALID_AMOUNT, "Please enter a valid amount")

        with self._lock:
            if value > self.state.balance:
                return OperationResult.fail(VaultErrorKind.INSUFFICIENT_BALANCE, "Insufficient balance")

            self.state.balance -= value
            self.state.earnings = 0.0
            operation_id = self.ledger.generate(OperationKind.WITHDRAW)
            self.store.save(self.state)

        log_action(logger, "info", f"Withdrew {value:.4f}",
                   action="withdraw", resource="vault", operation_id=operation_id,
                   extra={"amount": value, "balance": self.state.balance})
        return OperationResult.ok("Withdrawal successful", operation_id=operation_id)

    def set_auto_compound(self, enabled: bool) -> OperationResult:
        """
        Switch the compounding scheduler on or off; the flag is always persisted.

        Enabling with funds starts the scheduler task, so it must be called
        with a running event loop; otherwise RuntimeError is raised.
        """
        with self._lock:
            if enabled:
                if self.state.balance <= 0:
                    self.state.auto_compound = False
                    self.store.save(self.state)
                    log_action(logger, "warning", "Auto-compound rejected: no funds",
                               action="auto_compound", resource="vault")
                    return OperationResult.fail(
                        VaultErrorKind.AUTO_COMPOUND_REQUIRES_FUNDS,
                        "Please deposit funds to enable auto-compounding",
                    )
                self.engine.start()
                self.state.auto_compound = True
            else:
                self.engine.stop()
                self.state.auto_compound = False
            self.store.save(self.state)

        log_action(logger, "info", f"Auto-compound {'enabled' if enabled else 'disabled'}",
                   action="auto_compound", resource="vault", extra={"enabled": enabled})
        return OperationResult.ok("Auto-compound enabled" if enabled else "Auto-compound disabled")

    # ============================================================
    # WALLET BALANCE
    # ============================================================

    async def query_wallet_balance(self, address: str) -> BalanceQueryResult:
        """Fetch an on-chain balance and keep it for display"""
        if self.balance_client is None:
            raise RuntimeError("No balance query client configured")
        result = await self.balance_client.fetch_balance(address)
        if result.error_kind is not VaultErrorKind.INVALID_ADDRESS:
            self._wallet_result = result
        return result

    @property
    def wallet_balance(self) -> str:
        """Last fetched wallet balance, or the unavailable sentinel"""
        if self._wallet_result is None:
            return UNAVAILABLE
        return self._wallet_result.display

    @property
    def wallet_query_busy(self) -> bool:
        return self.balance_client is not None and self.balance_client.busy

    # ============================================================
    # READ ACCESSORS
    # ============================================================

    @property
    def balance(self) -> float:
        return self.state.balance

    @property
    def earnings(self) -> float:
        return self.state.earnings

    @property
    def apy(self) -> float:
        return self.state.apy

    @property
    def auto_compound(self) -> bool:
        return self.state.auto_compound

    @property
    def last_operation_id(self) -> str:
        return self.ledger.last_operation_id

    @property
    def scheduler_state(self) -> SchedulerState:
        return self.engine.scheduler_state

    def view(self) -> Dict[str, Any]:
        """Plain values for a presentation layer"""
        with self._lock:
            return {
                "balance": f"{self.state.balance:.4f}",
                "earnings": f"{self.state.earnings:.4f}",
                "apy": f"{self.state.apy:.2f}%",
                "unit": self.unit,
                "auto_compound": self.state.auto_compound,
                "scheduler_state": self.engine.scheduler_state.value,
                "last_operation_id": self.ledger.last_operation_id,
                "wallet_balance": self.wallet_balance,
                "wallet_query_busy": self.wallet_query_busy,
            }
