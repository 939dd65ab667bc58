"""
Cloudflare Workers KV store over the v4 REST API
"""
import logging
from typing import Optional

import httpx

from core.errors import StorageError
from storage.base import BriefingStore

logger = logging.getLogger(__name__)


class CloudflareKVStore(BriefingStore):
    name = "cloudflare"
    BASE_URL = "https://api.cloudflare.com/client/v4"

    def __init__(
        self,
        account_id: str,
        namespace_id: str,
        api_token: str,
        key: str = "latest",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.account_id = account_id
        self.namespace_id = namespace_id
        self.api_token = api_token
        self.key = key
        self.transport = transport

    @property
    def value_url(self) -> str:
        return (
            f"{self.BASE_URL}/accounts/{self.account_id}"
            f"/storage/kv/namespaces/{self.namespace_id}/values/{self.key}"
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=30,
            headers={"Authorization": f"Bearer {self.api_token}"},
            transport=self.transport,
        )

    async def put(self, value: str) -> None:
        try:
            async with self._client() as client:
                resp = await client.put(
                    self.value_url,
                    content=value.encode("utf-8"),
                    headers={"Content-Type": "text/plain"},
                )
        except httpx.HTTPError as e:
            raise StorageError(f"Failed to push to KV: {e}") from e

        if resp.is_error:
            raise StorageError(f"Failed to push to KV ({resp.status_code}): {resp.text}")

        logger.info(f"Briefing pushed to KV key '{self.key}'")

    async def get(self) -> Optional[str]:
        try:
            async with self._client() as client:
                resp = await client.get(self.value_url)
        except httpx.HTTPError as e:
            raise StorageError(f"Failed to read from KV: {e}") from e

        if resp.status_code == 404:
            return None
        if resp.is_error:
            raise StorageError(f"Failed to read from KV ({resp.status_code}): {resp.text}")

        return resp.text
