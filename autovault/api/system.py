"""
Vault system wiring and request dependencies
"""

from typing import Optional

from fastapi import Request

from ..config import AutoVaultConfig, get_config
from ..persistence import VaultStore
from ..rpc_client import BalanceQueryClient
from ..state import VaultState
from ..storage import StorageInterface, create_storage
from ..vault import VaultService


class VaultSystem:
    """Vault components built from configuration"""
    
    def __init__(self, config: Optional[AutoVaultConfig] = None,
                 storage: Optional[StorageInterface] = None,
                 balance_client: Optional[BalanceQueryClient] = None):
        self.config = config or get_config()
        
        self.storage = storage or create_storage(self.config.database_url)
        self.store = VaultStore(self.storage, key=self.config.storage_key)
        self.balance_client = balance_client or BalanceQueryClient(
            rpc_url=self.config.rpc_url,
            timeout=self.config.rpc_timeout,
        )
        self.vault = VaultService(
            self.store,
            state=VaultState(apy=self.config.base_apy),
            balance_client=self.balance_client,
            interval_ms=self.config.compound_interval_ms,
            compound_rate=self.config.compound_rate,
            unit=self.config.display_unit,
        )
    
    def start(self) -> None:
        """Restore persisted state; resumes compounding when it was on"""
        self.vault.restore()
    
    async def stop(self) -> None:
        """Stop compounding and release connections"""
        self.vault.shutdown()
        await self.balance_client.close()
        self.storage.close()


def get_vault_system(request: Request) -> VaultSystem:
    """Dependency returning the application's vault system"""
    return request.app.state.vault_system
