"""
Wallet balance endpoints
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .schemas import WalletBalanceRequest
from .system import VaultSystem, get_vault_system
from ..errors import VaultErrorKind


router = APIRouter()


@router.post("/balance")
async def fetch_wallet_balance(
    request: WalletBalanceRequest,
    system: VaultSystem = Depends(get_vault_system)
):
    """Look up an on-chain balance through the configured node"""
    result = await system.vault.query_wallet_balance(request.address)
    body = result.to_dict()
    body["unit"] = system.vault.unit
    
    if result.error_kind is VaultErrorKind.INVALID_ADDRESS:
        return JSONResponse(status_code=400, content=body)
    if result.error_kind is VaultErrorKind.REMOTE_QUERY_FAILURE:
        return JSONResponse(status_code=502, content=body)
    return body


@router.get("/balance")
async def get_wallet_balance(system: VaultSystem = Depends(get_vault_system)):
    """Last fetched balance and whether a lookup is in flight"""
    return {
        "display": system.vault.wallet_balance,
        "unit": system.vault.unit,
        "busy": system.vault.wallet_query_busy,
    }
