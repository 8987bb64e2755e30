"""
Vault State Module

The vault's data record: balance, accrued earnings, the APY used for
compounding, and whether auto-compounding is switched on. Snapshots are
overlaid field by field so a partial or damaged snapshot only loses the
fields it got wrong.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict


BASE_APY = 12.5  # percent


def is_real_number(value: Any) -> bool:
    """True for finite ints and floats that fit a float; bools are not amounts"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _valid_non_negative(value: Any) -> bool:
    return is_real_number(value) and value >= 0


def _valid_flag(value: Any) -> bool:
    return isinstance(value, bool)


@dataclass
class VaultState:
    """
    Mutable vault record.

    balance and earnings are non-negative; apy is a non-negative percentage; auto_compound
    tracks whether the compounding scheduler is running.
    """
    balance: float = 0.0
    earnings: float = 0.0
    apy: float = BASE_APY
    auto_compound: bool = False

    # JSON key -> (attribute, validator)
    FIELDS = {
        "balance": ("balance", _valid_non_negative),
        "earnings": ("earnings", _valid_non_negative),
        "apy": ("apy", _valid_non_negative),
        "autoCompound": ("auto_compound", _valid_flag),
    }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted JSON layout"""
        return {
            "balance": self.balance,
            "earnings": self.earnings,
            "apy": self.apy,
            "autoCompound": self.auto_compound,
        }

    def overlay(self, data: Dict[str, Any]) -> None:
        """Copy every valid known field from data onto this state, in place"""
        for key, (attr, is_valid) in self.FIELDS.items():
            if key not in data:
                continue
            value = data[key]
            if not is_valid(value):
                continue
            if attr != "auto_compound":
                value = float(value)
            setattr(self, attr, value)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VaultState':
        """Create a default state overlaid with data"""
        state = cls()
        state.overlay(data)
        return state
