# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Persistence gateways for workflow definitions and execution records.
"""

from flowengine.core.config import Config
from flowengine.core.errors import ConfigurationError
from .gateway import PersistenceGateway
from .memory import InMemoryGateway
from .file_store import FileGateway
from .supabase import SupabaseGateway


def create_gateway(config: Config) -> PersistenceGateway:
    """Build the gateway selected by `store.backend`"""
    if config.store_backend == "memory":
        return InMemoryGateway()
    if config.store_backend == "file":
        return FileGateway(config.store_base_dir)
    if config.store_backend == "supabase":
        key = config.get_supabase_key()
        if not config.supabase_url or not key:
            raise ConfigurationError("Supabase backend needs supabase.url and SUPABASE_SERVICE_ROLE_KEY")
        return SupabaseGateway(config.supabase_url, key, timeout=config.http_timeout)
    raise ConfigurationError(f"Unknown store backend: {config.store_backend}")


__all__ = [
    "PersistenceGateway",
    "InMemoryGateway",
    "FileGateway",
    "SupabaseGateway",
    "create_gateway",
]
