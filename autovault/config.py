"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Optional


class AutoVaultConfig(BaseSettings):
    """AutoVault configuration"""
    
    # Storage configuration
    database_url: str = "sqlite:///autovault.db"  # or memory://
    storage_key: str = "autovault_state"
    
    # Vault economics
    base_apy: float = Field(12.5, ge=0)  # percent
    compound_rate: float = 0.001  # 0.1% per compound
    compound_interval_ms: int = 10000  # 10 seconds
    display_unit: str = "MAS"
    
    # Remote node configuration
    rpc_url: str = "https://test.massa.net/api/v2"
    rpc_timeout: Optional[float] = None  # None = transport default
    
    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    
    class Config:
        env_prefix = "AUTOVAULT_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = AutoVaultConfig()


def get_config() -> AutoVaultConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> AutoVaultConfig:
    """Reload configuration from environment"""
    global config
    config = AutoVaultConfig()
    return config
