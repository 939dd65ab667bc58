import logging
from typing import Iterable, List

from core.entities import AccountCandidate
from core.schemas import AccountToFollow
from core.scoring import matched_topics
from processing.assembler import PROFILE_URL

logger = logging.getLogger(__name__)


def why_follow(topics: List[str]) -> str:
    return f"Posts about {', '.join(topics[:3])}"


def filter_relevant_accounts(candidates: Iterable[AccountCandidate]) -> List[AccountToFollow]:
    """
    Keep accounts whose name or bio touches the topic vocabulary,
    in the order they were discovered. Handles seen twice are kept once.
    """
    selected: List[AccountToFollow] = []
    seen_handles = set()

    for candidate in candidates:
        handle = candidate.handle.lstrip("@")
        if not handle or handle.lower() in seen_handles:
            continue

        topics = matched_topics(f"{candidate.name} {candidate.bio}")
        if not topics:
            logger.debug(f"Skipping @{handle}: no topic overlap")
            continue

        seen_handles.add(handle.lower())
        selected.append(
            AccountToFollow(
                handle=handle,
                name=candidate.name or handle,
                bio=candidate.bio,
                followers=candidate.followers,
                following=candidate.following,
                why_follow=why_follow(topics),
                url=PROFILE_URL.format(handle=handle),
            )
        )

    logger.info(f"Account filter: kept {len(selected)} relevant accounts")
    return selected
