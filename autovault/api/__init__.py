"""
AutoVault API Application Factory
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .system import VaultSystem, get_vault_system
from .vault import router as vault_router
from .wallet import router as wallet_router
from .. import __version__


def create_app(system: Optional[VaultSystem] = None) -> FastAPI:
    """Create and configure the FastAPI application"""
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        vault_system = system or VaultSystem()
        app.state.vault_system = vault_system
        vault_system.start()
        yield
        await vault_system.stop()
    
    app = FastAPI(
        title="AutoVault API",
        description="Simulated yield vault with auto-compounding",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    app.include_router(vault_router, prefix="/vault", tags=["Vault"])
    app.include_router(wallet_router, prefix="/wallet", tags=["Wallet"])
    
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "autovault_api",
            "version": __version__
        }
    
    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "AutoVault API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "vault": "/vault",
                "wallet": "/wallet/balance",
            }
        }
    
    return app


__all__ = ["create_app", "VaultSystem", "get_vault_system"]
