import logging
from typing import Iterable, List, Set

from core.entities import CandidateItem

logger = logging.getLogger(__name__)


def dedupe(*sources: Iterable[CandidateItem]) -> List[CandidateItem]:
    """
    Merge source collections into one list unique by id.

    Sources are consumed in the order given and the first occurrence of an
    id wins. Items without an id are always kept.
    """
    unique_items: List[CandidateItem] = []
    seen_ids: Set[str] = set()
    total = 0

    for source in sources:
        for item in source:
            total += 1
            if item.id:
                if item.id in seen_ids:
                    logger.debug(f"Skipping duplicate tweet {item.id}")
                    continue
                seen_ids.add(item.id)
            unique_items.append(item)

    logger.info(f"Dedup: {total} -> {len(unique_items)} items")
    return unique_items
