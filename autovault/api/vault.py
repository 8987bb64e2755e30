"""
Vault endpoints
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .schemas import AmountRequest, AutoCompoundRequest
from .system import VaultSystem, get_vault_system
from ..errors import OperationResult


router = APIRouter()


def _respond(result: OperationResult, system: VaultSystem):
    body = result.to_dict()
    body["vault"] = system.vault.view()
    if not result.success:
        return JSONResponse(status_code=400, content=body)
    return body


@router.get("")
async def get_vault(system: VaultSystem = Depends(get_vault_system)):
    """Current vault values"""
    return system.vault.view()


@router.post("/deposit")
async def deposit(
    request: AmountRequest,
    system: VaultSystem = Depends(get_vault_system)
):
    """Deposit into the vault"""
    return _respond(system.vault.deposit(request.amount), system)


@router.post("/withdraw")
async def withdraw(
    request: AmountRequest,
    system: VaultSystem = Depends(get_vault_system)
):
    """Withdraw from the vault; resets accrued earnings"""
    return _respond(system.vault.withdraw(request.amount), system)


@router.post("/auto-compound")
async def set_auto_compound(
    request: AutoCompoundRequest,
    system: VaultSystem = Depends(get_vault_system)
):
    """Switch auto-compounding on or off"""
    return _respond(system.vault.set_auto_compound(request.enabled), system)
