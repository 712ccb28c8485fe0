"""Asset store factory.

Provides get_asset_store() / set_asset_store() to swap implementations:
- FakeAssetStore for development and testing
- HttpAssetStore when ASSET_STORE=http
"""

from protean.exceptions import ConfigurationError

from storefront.assets.fake_adapter import FakeAssetStore
from storefront.assets.http_adapter import HttpAssetStore
from storefront.assets.port import AssetStore
from storefront.config import settings

_current_store: AssetStore | None = None


def _default_store() -> AssetStore:
    if settings.asset_store == "http":
        if not settings.asset_store_url:
            raise ConfigurationError("ASSET_STORE=http requires ASSET_STORE_URL to be set")
        return HttpAssetStore(
            base_url=settings.asset_store_url,
            api_key=settings.asset_store_api_key,
            timeout=settings.asset_store_timeout,
        )
    return FakeAssetStore()


def get_asset_store() -> AssetStore:
    """Return the current asset store. Defaults to the configured backend."""
    global _current_store
    if _current_store is None:
        _current_store = _default_store()
    return _current_store


def set_asset_store(store: AssetStore) -> None:
    """Override the active asset store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_asset_store() -> None:
    """Reset to the default asset store."""
    global _current_store
    _current_store = None
