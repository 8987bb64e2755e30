"""
Tests for environment-based configuration
"""

import pytest
from pydantic import ValidationError

from autovault import config as config_module
from autovault.config import AutoVaultConfig, get_config, reload_config


class TestAutoVaultConfig:
    """Test defaults and environment overrides"""
    
    def test_defaults(self, monkeypatch):
        for key in ("AUTOVAULT_BASE_APY", "AUTOVAULT_COMPOUND_RATE", "AUTOVAULT_COMPOUND_INTERVAL_MS"):
            monkeypatch.delenv(key, raising=False)
        config = AutoVaultConfig(_env_file=None)
        
        assert config.base_apy == 12.5
        assert config.compound_rate == 0.001
        assert config.compound_interval_ms == 10000
        assert config.storage_key == "autovault_state"
        assert config.rpc_url == "https://test.massa.net/api/v2"
        assert config.rpc_timeout is None
        assert config.display_unit == "MAS"
    
    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("AUTOVAULT_BASE_APY", "7.25")
        monkeypatch.setenv("AUTOVAULT_DATABASE_URL", "memory://")
        monkeypatch.setenv("autovault_compound_interval_ms", "500")
        
        config = AutoVaultConfig(_env_file=None)
        
        assert config.base_apy == 7.25
        assert config.database_url == "memory://"
        assert config.compound_interval_ms == 500
    
    def test_reload_config(self, monkeypatch):
        original = get_config()
        monkeypatch.setenv("AUTOVAULT_LOG_LEVEL", "DEBUG")
        try:
            reloaded = reload_config()
            assert reloaded.log_level == "DEBUG"
            assert get_config() is reloaded
        finally:
            config_module.config = original
    
    def test_negative_base_apy_is_rejected(self, monkeypatch):
        monkeypatch.setenv("AUTOVAULT_BASE_APY", "-5")
        
        with pytest.raises(ValidationError):
            AutoVaultConfig(_env_file=None)
