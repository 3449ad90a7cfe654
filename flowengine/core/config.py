# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
flowengine configuration.
YAML for settings. Environment variables for secrets, plus two deployment
overrides: SUPABASE_URL (used when supabase.url is unset) and LOG_LEVEL
(wins over logging.level).
"""

import os
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from flowengine.core.errors import ConfigurationError

STORE_BACKENDS = ("memory", "file", "supabase")


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================

@dataclass(frozen=True)
class Config:
    """
    Immutable engine configuration.
    All values from YAML. No hidden state.
    """

    # -- Persistence --
    store_backend: str = "memory"
    store_base_dir: str = "./data"
    supabase_url: Optional[str] = None

    # -- HTTP --
    http_timeout: float = 10.0

    # -- Execution --
    strict_cycles: bool = False
    persist_logs_on_failure: bool = True
    namespaced_variables: bool = False
    run_timeout: Optional[float] = None
    default_execution_limit: int = 10

    # -- Logging --
    log_level: str = "INFO"
    log_format: str = "json"

    def get_supabase_key(self) -> Optional[str]:
        """Get Supabase service role key from environment"""
        return get_supabase_key()


# =============================================================================
# SECRETS - The ONLY thing from environment variables
# =============================================================================

def get_supabase_key() -> Optional[str]:
    """Service keys cannot be in version control."""
    return os.getenv("SUPABASE_SERVICE_ROLE_KEY")


# =============================================================================
# LOADER
# =============================================================================

def load_config(path: str = "configs/flowengine.yaml") -> Config:
    """
    Load configuration from YAML.
    Returns defaults if file doesn't exist.
    """
    if not Path(path).exists():
        print(f"Config not found at {path}, using defaults")
        return Config()

    with open(path) as f:
        try:
            y = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML: {e}", config_file=path)

    # Helper to safely navigate nested dicts
    def get(d: dict, *keys, default=None):
        for k in keys:
            if not isinstance(d, dict):
                return default
            d = d.get(k, {})
        return d if d != {} else default

    store_backend = get(y, "store", "backend", default="memory")
    if store_backend not in STORE_BACKENDS:
        raise ConfigurationError(
            f"Unknown store backend '{store_backend}', expected one of {STORE_BACKENDS}",
            config_file=path
        )

    run_timeout = get(y, "execution", "run_timeout")

    return Config(
        # Persistence
        store_backend=store_backend,
        store_base_dir=get(y, "store", "base_dir") or "./data",
        supabase_url=get(y, "supabase", "url") or os.getenv("SUPABASE_URL"),

        # HTTP
        http_timeout=float(get(y, "http", "timeout") or 10.0),

        # Execution
        strict_cycles=bool(get(y, "execution", "strict_cycles", default=False)),
        persist_logs_on_failure=bool(get(y, "execution", "persist_logs_on_failure", default=True)),
        namespaced_variables=bool(get(y, "execution", "namespaced_variables", default=False)),
        run_timeout=float(run_timeout) if run_timeout is not None else None,
        default_execution_limit=int(get(y, "execution", "default_limit") or 10),

        # Logging
        log_level=os.getenv("LOG_LEVEL") or get(y, "logging", "level") or "INFO",
        log_format=get(y, "logging", "format") or "json",
    )


# =============================================================================
# GLOBAL INSTANCE
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global config instance."""
    global _config
    if _config is None:
        config_path = os.getenv("FLOWENGINE_CONFIG_PATH", "configs/flowengine.yaml")
        _config = load_config(config_path)
    return _config


def reload_config() -> Config:
    """Force reload configuration."""
    global _config
    _config = None
    return get_config()
