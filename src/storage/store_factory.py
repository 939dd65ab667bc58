"""
Store Factory - Creates the briefing store from configuration.
"""
import logging

from services.config import Config
from storage.base import BriefingStore
from storage.cloudflare_kv import CloudflareKVStore
from storage.file_store import FileStore
from storage.wrangler import WranglerKVStore

logger = logging.getLogger(__name__)


def create_store(config: Config) -> BriefingStore:
    """
    Create the configured store.

    Raises:
        ConfigError: If the backend is unknown or missing credentials
    """
    storage = config.require_storage()

    if storage.backend == "cloudflare":
        store = CloudflareKVStore(
            account_id=storage.account_id,
            namespace_id=storage.namespace_id,
            api_token=storage.api_token,
            key=storage.key,
        )
    elif storage.backend == "wrangler":
        store = WranglerKVStore(namespace_id=storage.namespace_id, key=storage.key)
    else:
        store = FileStore(directory=storage.path, key=storage.key)

    logger.info(f"Using {store.name} store for key '{storage.key}'")
    return store
