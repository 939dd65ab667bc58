"""
Loads and handles config from resources/config.yml
Credentials (BROWSER_USE_API_KEY, CLOUDFLARE_API_TOKEN, ...) are loaded from .env
"""
import os
from typing import Any, Dict, List, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from core.errors import ConfigError

DEFAULT_SEARCH_QUERIES = [
    "new accounts to follow that the accounts i follow follow",
    "new tweets by yc founders",
]

STORAGE_BACKENDS = ("file", "cloudflare", "wrangler")


class BrowserUseConfig(BaseModel):
    """Remote browser agent (Browser Use Cloud) settings."""
    base_url: str = "https://api.browser-use.com/api/v2"
    api_key: Optional[str] = None
    profile_id: Optional[str] = None  # saved login profile, optional
    poll_interval: float = 10.0
    max_wait: float = 600.0
    search_queries: List[str] = DEFAULT_SEARCH_QUERIES


class BrowserConfig(BaseModel):
    """Local Playwright session settings."""
    user_data_dir: str = "data/browser-profile"
    headless: bool = True
    scroll_rounds: int = 8
    scroll_pause: float = 1.5
    feed_url: str = "https://x.com/home"
    notifications_url: str = "https://x.com/notifications"
    accounts_url: str = "https://x.com/i/connect_people"


class StorageConfig(BaseModel):
    """Where the latest briefing is persisted."""
    backend: str = "file"  # file, cloudflare, wrangler
    key: str = "latest"
    path: str = "data/kv"  # For file
    account_id: Optional[str] = None  # For cloudflare
    namespace_id: Optional[str] = None  # For cloudflare and wrangler
    api_token: Optional[str] = None  # For cloudflare


class WebConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8787


class Config(BaseModel):
    output_path: str = "output/briefing.json"
    browser_use: BrowserUseConfig = BrowserUseConfig()
    browser: BrowserConfig = BrowserConfig()
    storage: StorageConfig = StorageConfig()
    web: WebConfig = WebConfig()

    def require_browser_use_key(self) -> str:
        if not self.browser_use.api_key:
            raise ConfigError("Missing BROWSER_USE_API_KEY environment variable.")
        return self.browser_use.api_key

    def require_storage(self) -> StorageConfig:
        """Check that the configured storage backend has what it needs."""
        storage = self.storage
        if storage.backend not in STORAGE_BACKENDS:
            raise ConfigError(f"Unknown storage backend: {storage.backend}")

        if storage.backend == "cloudflare":
            missing = [
                name for name, value in (
                    ("CLOUDFLARE_ACCOUNT_ID", storage.account_id),
                    ("KV_NAMESPACE_ID", storage.namespace_id),
                    ("CLOUDFLARE_API_TOKEN", storage.api_token),
                ) if not value
            ]
            if missing:
                raise ConfigError(f"Cloudflare storage requires: {', '.join(missing)}")

        if storage.backend == "wrangler" and not storage.namespace_id:
            raise ConfigError("Wrangler storage requires KV_NAMESPACE_ID")

        return storage


def _bool(value: str | bool) -> bool:
    """Convert string or bool to boolean."""
    if isinstance(value, bool):
        return value
    return str(value).lower() in ("1", "true", "yes", "on")


def _get_config_path() -> Optional[str]:
    """Get the path to config.yml, handling different working directories."""
    # Try relative path first
    if os.path.exists('resources/config.yml'):
        return 'resources/config.yml'

    # Try from project root
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    config_path = os.path.join(project_root, 'resources', 'config.yml')
    if os.path.exists(config_path):
        return config_path

    return None


def _read_yaml(path: Optional[str]) -> Dict[str, Any]:
    if path is None:
        path = _get_config_path()
        if path is None:
            return {}
    elif not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")

    with open(path, 'r') as file:
        return yaml.safe_load(file) or {}


def _parse_browser_use(data: Dict[str, Any], env: Mapping[str, str]) -> BrowserUseConfig:
    defaults = BrowserUseConfig()
    return BrowserUseConfig(
        base_url=data.get("base_url", defaults.base_url).rstrip("/"),
        api_key=env.get("BROWSER_USE_API_KEY"),
        profile_id=env.get("BROWSER_USE_PROFILE_ID") or data.get("profile_id"),
        poll_interval=float(data.get("poll_interval", defaults.poll_interval)),
        max_wait=float(data.get("max_wait", defaults.max_wait)),
        search_queries=data.get("search_queries") or DEFAULT_SEARCH_QUERIES,
    )


def _parse_browser(data: Dict[str, Any]) -> BrowserConfig:
    defaults = BrowserConfig()
    return BrowserConfig(
        user_data_dir=data.get("user_data_dir", defaults.user_data_dir),
        headless=_bool(data.get("headless", defaults.headless)),
        scroll_rounds=int(data.get("scroll_rounds", defaults.scroll_rounds)),
        scroll_pause=float(data.get("scroll_pause", defaults.scroll_pause)),
        feed_url=data.get("feed_url", defaults.feed_url),
        notifications_url=data.get("notifications_url", defaults.notifications_url),
        accounts_url=data.get("accounts_url", defaults.accounts_url),
    )


def _parse_storage(data: Dict[str, Any], env: Mapping[str, str]) -> StorageConfig:
    defaults = StorageConfig()
    return StorageConfig(
        backend=str(env.get("BRIEFING_STORAGE") or data.get("backend", defaults.backend)).lower(),
        key=data.get("key", defaults.key),
        path=data.get("path", defaults.path),
        account_id=env.get("CLOUDFLARE_ACCOUNT_ID") or data.get("account_id"),
        namespace_id=env.get("KV_NAMESPACE_ID") or data.get("namespace_id"),
        api_token=env.get("CLOUDFLARE_API_TOKEN"),
    )


def load_config(path: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> Config:
    """Load configuration from config.yml and credentials from .env."""
    if env is None:
        # Load .env for sensitive credentials
        load_dotenv()
        env = os.environ

    config = _read_yaml(path)
    web = config.get("web", {}) or {}

    return Config(
        output_path=config.get("output_path", "output/briefing.json"),
        browser_use=_parse_browser_use(config.get("browser_use", {}) or {}, env),
        browser=_parse_browser(config.get("browser", {}) or {}),
        storage=_parse_storage(config.get("storage", {}) or {}, env),
        web=WebConfig(
            host=web.get("host", "127.0.0.1"),
            port=int(web.get("port", 8787)),
        ),
    )
