import time
import asyncio
import logging
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from core.errors import BrowserUseError, TaskTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.browser-use.com/api/v2"

DONE_STATUSES = ("finished", "stopped")
FAILED_STATUSES = ("failed",)


class TaskStatus(BaseModel):
    status: str
    output: Optional[str] = None


class BrowserUseClient:
    """
    Thin async client for the Browser Use Cloud task API.
    Use as an async context manager; the HTTP connection is released on exit.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"X-Browser-Use-API-Key": api_key},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "BrowserUseClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, action: str, **kwargs) -> dict:
        """
        Send one request and return its JSON body.
        Transport failures, error statuses and unreadable bodies all raise BrowserUseError.
        """
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise BrowserUseError(f"Failed to {action}: {e}") from e

        if resp.is_error:
            raise BrowserUseError(f"Failed to {action} ({resp.status_code}): {resp.text}")

        try:
            data = resp.json()
        except ValueError as e:
            raise BrowserUseError(f"Failed to {action}: response is not JSON") from e
        if not isinstance(data, dict):
            raise BrowserUseError(f"Failed to {action}: unexpected response {data!r}")
        return data

    @staticmethod
    def _id(data: dict, action: str) -> str:
        try:
            return str(data["id"])
        except KeyError as e:
            raise BrowserUseError(f"Failed to {action}: response has no id") from e

    async def create_session(self, profile_id: str) -> str:
        """
        Start a browser session bound to a saved login profile.
        """
        data = await self._request(
            "POST",
            "/sessions",
            "create session",
            json={
                "profileId": profile_id,
                "persistMemory": True,
                "keepAlive": False,
            },
        )
        return self._id(data, "create session")

    async def create_task(self, prompt: str, session_id: Optional[str] = None) -> str:
        body = {"task": prompt}
        if session_id:
            body["sessionId"] = session_id

        data = await self._request("POST", "/tasks", "create task", json=body)
        return self._id(data, "create task")

    async def get_task_status(self, task_id: str) -> TaskStatus:
        data = await self._request("GET", f"/tasks/{task_id}/status", "get task status")
        try:
            return TaskStatus.model_validate(data)
        except ValidationError as e:
            raise BrowserUseError(f"Failed to get task status: {e}") from e

    async def poll_until_done(
        self,
        task_id: str,
        interval: float = 10.0,
        max_wait: float = 600.0,
    ) -> str:
        """
        Poll the task status until it finishes and return its raw output.

        Raises TaskTimeoutError once max_wait seconds have elapsed.
        """
        start = time.monotonic()

        while time.monotonic() - start < max_wait:
            status = await self.get_task_status(task_id)
            logger.info(f"Task {task_id} status: {status.status}")

            if status.status in DONE_STATUSES:
                return status.output or ""

            if status.status in FAILED_STATUSES:
                raise BrowserUseError(f"Task {task_id} failed: {status.output or 'no output'}")

            await asyncio.sleep(interval)

        raise TaskTimeoutError(task_id, max_wait)
