"""
Local file store, used for development and as the default backend
"""
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from core.errors import StorageError
from storage.base import BriefingStore

logger = logging.getLogger(__name__)


class FileStore(BriefingStore):
    name = "file"

    def __init__(self, directory: str = "data/kv", key: str = "latest"):
        self.directory = Path(directory)
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    async def put(self, value: str) -> None:
        tmp_path = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # Write beside the target so the replace is atomic for readers
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.directory,
                prefix=f".{self.key}-",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = tmp.name
                tmp.write(value)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise StorageError(f"Failed to write {self.path}: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.info(f"Briefing written to {self.path}")

    async def get(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e
