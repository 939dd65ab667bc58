"""
Base classes for Ingestion
"""
from abc import ABC, abstractmethod
from typing import List

from core.entities import AccountCandidate, CandidateItem


class SourceAdapter(ABC):
    """
    Base interface for all tweet retrieval sources.
    """

    name: str

    @abstractmethod
    async def fetch_items(self) -> List[CandidateItem]:
        """
        Fetch candidate tweets, in the order they were encountered.
        Must NEVER raise uncaught exceptions; a broken item is skipped
        and a broken source returns what it collected so far.
        """
        raise NotImplementedError


class AccountSourceAdapter(ABC):
    """
    Base interface for account discovery sources.
    """

    name: str

    @abstractmethod
    async def fetch_accounts(self) -> List[AccountCandidate]:
        raise NotImplementedError
