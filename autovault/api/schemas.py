"""
Pydantic schemas for API requests
"""

from typing import Union
from pydantic import BaseModel, Field


class AmountRequest(BaseModel):
    amount: Union[float, str] = Field(..., description="Amount in vault units")


class AutoCompoundRequest(BaseModel):
    enabled: bool


class WalletBalanceRequest(BaseModel):
    address: str = Field(..., description="On-chain account address")
