"""
Operation Ledger Module

Generates traceable identifiers for deposits and withdrawals, e.g.
DEPOSIT-1760870400000-K3J9QZ. Only the most recent identifier is kept.
"""

import random
import string
import time
from enum import Enum
from typing import Callable, Optional, Union


SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
SUFFIX_LENGTH = 6
DELIMITER = "-"


class OperationKind(Enum):
    """State-mutating operations that receive an identifier"""
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


def _now_ms() -> int:
    return int(time.time() * 1000)


class OperationLedger:
    """Produces operation identifiers and remembers the last one"""

    def __init__(self, clock: Callable[[], int] = _now_ms,
                 rng: Optional[random.Random] = None):
        self._clock = clock
        self._rng = rng or random.Random()
        self.last_operation_id: str = ""

    def generate(self, kind: Union[OperationKind, str]) -> str:
        """Create a new identifier for kind and retain it as the latest"""
        tag = kind.value if isinstance(kind, OperationKind) else str(kind)
        suffix = "".join(self._rng.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))
        operation_id = DELIMITER.join([tag, str(self._clock()), suffix]).upper()
        self.last_operation_id = operation_id
        return operation_id
