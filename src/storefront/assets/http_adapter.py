"""HTTP asset store adapter.

Talks to an asset service exposing:

    POST   {base_url}/assets        multipart "file"  ->  {"key": ..., "url": ...}
    DELETE {base_url}/assets/{key}                     ->  2xx (404 means already gone)

Every call carries a timeout; an expired timeout is reported the same way as
a rejected call so the caller's cleanup policy applies.
"""

import requests

from storefront.assets.port import (
    AssetDeletionError,
    AssetStore,
    AssetUploadError,
    ImageUpload,
    StoredAsset,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class HttpAssetStore(AssetStore):
    """Asset store backed by a remote HTTP service."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if api_key:
            self.session.headers["Authorization"] = f"Bearer {api_key}"

    def upload(self, upload: ImageUpload) -> StoredAsset:
        files = {"file": (upload.filename, upload.content, upload.content_type or "application/octet-stream")}
        try:
            response = self.session.post(f"{self.base_url}/assets", files=files, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
            return StoredAsset(key=body["key"], url=body["url"])
        except requests.RequestException as exc:
            logger.warning("Asset upload failed", filename=upload.filename, error=str(exc))
            raise AssetUploadError(f"Upload of {upload.filename} failed: {exc}") from exc
        except (KeyError, ValueError) as exc:
            raise AssetUploadError(f"Asset service returned an unusable response for {upload.filename}") from exc

    def delete(self, key: str) -> None:
        try:
            response = self.session.delete(f"{self.base_url}/assets/{key}", timeout=self.timeout)
            if response.status_code == 404:
                return
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Asset deletion failed", key=key, error=str(exc))
            raise AssetDeletionError(f"Deletion of {key} failed: {exc}", key=key) from exc
