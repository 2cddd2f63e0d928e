"""
Configuration module for Malta Auctions.

Centralizes all configuration with environment variable support,
validation, and caching for the compliance rule files.
"""

import os
import json
import threading
from typing import Dict, Any, Optional
from pathlib import Path

# ============================================================
# Environment Configuration
# ============================================================

ENV = os.getenv("MALTA_AUCTIONS_ENV", "dev")  # dev|stage|prod

PACKAGE_DIR = Path(__file__).resolve().parent

# Paths
DB_PATH = os.getenv("MALTA_AUCTIONS_DB_PATH", "data/malta_auctions.db")
COMPLIANCE_LISTS_PATH = os.getenv(
    "COMPLIANCE_LISTS_PATH", str(PACKAGE_DIR / "rules" / "compliance_lists.json")
)

# Logging
LOG_LEVEL = os.getenv("MALTA_AUCTIONS_LOG_LEVEL", "INFO")
LOG_JSON = os.getenv("MALTA_AUCTIONS_LOG_JSON", "true").lower() in ("1", "true", "yes")

# Connectors
TRANSPORT_MALTA_URL = os.getenv(
    "TRANSPORT_MALTA_URL",
    "https://www.transport.gov.mt/maritime/local-waters/official-notices/warrants-of-arrest-124",
)
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

# Cache TTL (seconds)
CONFIG_CACHE_TTL = int(os.getenv("CONFIG_CACHE_TTL", "60"))


# ============================================================
# Cached Configuration Loaders
# ============================================================

class CachedConfig:
    """
    Thread-safe cached configuration loader.
    Reloads configuration files periodically based on TTL, so edits to
    the compliance lists take effect without restarting the service.
    """

    def __init__(self, ttl_seconds: int = 60):
        self._cache: Dict[str, Any] = {}
        self._timestamps: Dict[str, float] = {}
        self._lock = threading.RLock()
        self._ttl = ttl_seconds

    def _is_stale(self, key: str) -> bool:
        import time
        if key not in self._timestamps:
            return True
        return (time.time() - self._timestamps[key]) > self._ttl

    def get_json(self, path: str, force_reload: bool = False) -> Dict[str, Any]:
        """
        Load JSON file with caching.
        Returns cached version if within TTL, otherwise reloads.
        """
        import time

        with self._lock:
            if not force_reload and path in self._cache and not self._is_stale(path):
                return self._cache[path]

            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)

            self._cache[path] = data
            self._timestamps[path] = time.time()
            return data

    def invalidate(self, path: Optional[str] = None) -> None:
        """Invalidate cache for a specific path or all paths."""
        with self._lock:
            if path:
                self._cache.pop(path, None)
                self._timestamps.pop(path, None)
            else:
                self._cache.clear()
                self._timestamps.clear()


_config_cache = CachedConfig(ttl_seconds=CONFIG_CACHE_TTL)


def load_json_cached(path: str) -> Dict[str, Any]:
    """Load JSON file with caching."""
    return _config_cache.get_json(path)


def load_compliance_lists_data(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the raw compliance lists document with caching."""
    return load_json_cached(path or COMPLIANCE_LISTS_PATH)


def invalidate_config_cache() -> None:
    """Invalidate all cached configuration."""
    _config_cache.invalidate()


# ============================================================
# Validation
# ============================================================

def validate_config() -> Dict[str, bool]:
    """
    Validate that all required configuration files exist.
    Returns dict of name -> exists.
    """
    paths = {
        "compliance_lists": COMPLIANCE_LISTS_PATH,
    }
    return {name: Path(path).exists() for name, path in paths.items()}

