"""
Vault Persistence Module

Loads and saves the vault snapshot as a single JSON document under a fixed
storage key. Storage failures are logged and reported through last_error;
they never propagate to the caller, and the in-memory state stays
authoritative for the session.
"""

import json
import logging
from typing import Any, Dict, Optional

from .errors import VaultErrorKind
from .state import VaultState
from .storage import StorageInterface

logger = logging.getLogger("autovault.persistence")

DEFAULT_STORAGE_KEY = "autovault_state"


class VaultStore:
    """Durable snapshot store for a VaultState"""

    def __init__(self, storage: StorageInterface, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self.last_error: Optional[VaultErrorKind] = None

    def load(self) -> Optional[Dict[str, Any]]:
        """
        Read the stored snapshot.

        Returns the decoded JSON object, or None when nothing is stored or the
        stored value cannot be read or parsed.
        """
        self.last_error = None
        try:
            raw = self.storage.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read vault state: {e}")
            self.last_error = VaultErrorKind.PERSISTENCE_READ_FAILURE
            return None

        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to load state: {e}")
            self.last_error = VaultErrorKind.PERSISTENCE_READ_FAILURE
            return None

        if not isinstance(data, dict):
            logger.error(f"Failed to load state: expected a JSON object, got {type(data).__name__}")
            self.last_error = VaultErrorKind.PERSISTENCE_READ_FAILURE
            return None

        return data

    def load_into(self, state: VaultState) -> bool:
        """Overlay the stored snapshot onto state; returns whether one was applied"""
        data = self.load()
        if data is None:
            return False
        state.overlay(data)
        return True

    def save(self, state: VaultState) -> bool:
        """Write the full state; returns False if the write failed"""
        try:
            self.storage.set(self.key, json.dumps(state.to_dict()))
        except Exception as e:
            logger.error(f"Failed to save state: {e}")
            self.last_error = VaultErrorKind.PERSISTENCE_WRITE_FAILURE
            return False
        self.last_error = None
        return True

    def clear(self) -> bool:
        """Remove the stored snapshot"""
        return self.storage.delete(self.key)
