"""
Workers KV store driven through the wrangler CLI
"""
import asyncio
import logging
import os
import tempfile
from typing import Optional, Sequence, Tuple

from core.errors import StorageError
from storage.base import BriefingStore

logger = logging.getLogger(__name__)


class WranglerKVStore(BriefingStore):
    name = "wrangler"

    def __init__(self, namespace_id: str, key: str = "latest", command: Sequence[str] = ("npx", "wrangler")):
        self.namespace_id = namespace_id
        self.key = key
        self.command = list(command)

    async def _run(self, *args: str) -> Tuple[int, str, str]:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise StorageError(f"Could not start wrangler: {e}") from e

        stdout, stderr = await proc.communicate()
        return proc.returncode, stdout.decode("utf-8", "replace"), stderr.decode("utf-8", "replace")

    async def put(self, value: str) -> None:
        # The value goes through a temp file to avoid shell escaping issues
        fd, tmp_path = tempfile.mkstemp(prefix="briefing-kv-value-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(value)

            code, _, stderr = await self._run(
                "kv", "key", "put",
                f"--namespace-id={self.namespace_id}",
                self.key,
                f"--path={tmp_path}",
            )
            if code != 0:
                raise StorageError(f"wrangler kv key put exited with {code}: {stderr.strip()}")
        finally:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.info(f"Briefing pushed to KV key '{self.key}' via wrangler")

    async def get(self) -> Optional[str]:
        code, stdout, stderr = await self._run(
            "kv", "key", "get",
            f"--namespace-id={self.namespace_id}",
            self.key,
            "--text",
        )
        if code != 0:
            raise StorageError(f"wrangler kv key get exited with {code}: {stderr.strip()}")
        if not stdout.strip() or stdout.strip() == "Value not found":
            return None
        return stdout
