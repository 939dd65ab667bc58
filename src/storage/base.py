"""
Module to contain base class for briefing stores
"""
from abc import ABC, abstractmethod
from typing import Optional

from core.schemas import BriefingDocument


class BriefingStore(ABC):
    """
    Key-value home of the single live briefing.
    A put replaces the whole value; there is no history.
    """

    name: str

    @abstractmethod
    async def put(self, value: str) -> None:
        """
        Replace the stored value.
        Must raise StorageError on failure (handled upstream).
        """
        raise NotImplementedError

    @abstractmethod
    async def get(self) -> Optional[str]:
        """
        Return the stored value, or None when nothing has been written yet.
        """
        raise NotImplementedError

    async def save(self, document: BriefingDocument) -> None:
        await self.put(document.to_json())
