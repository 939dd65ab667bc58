"""
Contains base class for briefing pipelines
"""
from abc import ABC, abstractmethod

from core.profiles import BriefingProfile
from core.schemas import BriefingDocument


class BriefingPipeline(ABC):
    """
    Orchestrates retrieval → ranking → assembly
    for a single retrieval method.
    """

    name: str
    profile: BriefingProfile

    @abstractmethod
    async def run(self) -> BriefingDocument:
        """
        Execute the pipeline and return the assembled briefing.
        Raises a BriefingError when the run cannot produce a document;
        nothing must be persisted in that case.
        """
        raise NotImplementedError
