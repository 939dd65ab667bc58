import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from core.entities import AccountCandidate, CandidateItem
from core.profiles import INTERACTIVE_BROWSER, BriefingProfile
from core.schemas import BriefingDocument, Methodology
from core.scoring import rank_items
from ingestion.browser import BrowserSession
from ingestion.source_factory import create_account_source, create_timeline_sources
from processing.accounts import filter_relevant_accounts
from processing.assembler import assemble_briefing
from processing.deduplicator import dedupe
from services.config import BrowserConfig, Config
from workflows.base import BriefingPipeline

logger = logging.getLogger(__name__)

BROWSER_METHODOLOGY = Methodology(
    searches=["Home timeline", "Notifications", "Who to follow"],
    plain_english=(
        "Scrolled the home timeline and notifications, ranked tweets by engagement, "
        "topic relevance and reply potential, and picked suggested accounts whose "
        "bios match the tracked topics."
    ),
)


def compose_briefing(
    collections: Sequence[Sequence[CandidateItem]],
    account_candidates: Sequence[AccountCandidate],
    profile: BriefingProfile = INTERACTIVE_BROWSER,
    methodology: Optional[Methodology] = None,
    now: Optional[datetime] = None,
) -> BriefingDocument:
    """
    Dedupe the source collections, rank what is left and bound it to the profile.
    """
    unique_items = dedupe(*collections)
    ranked = rank_items(unique_items)
    accounts = filter_relevant_accounts(account_candidates)

    if ranked:
        logger.info(f"Top score {ranked[0].score} out of {len(ranked)} ranked tweets")

    return assemble_briefing(ranked, accounts, profile, methodology=methodology, now=now)


class BrowserBriefingPipeline(BriefingPipeline):
    name = INTERACTIVE_BROWSER.name
    profile = INTERACTIVE_BROWSER

    def __init__(
        self,
        config: Config,
        session_factory: Callable[[BrowserConfig], BrowserSession] = BrowserSession,
    ):
        self.config = config
        self.session_factory = session_factory

    async def run(self) -> BriefingDocument:
        browser_config = self.config.browser

        async with self.session_factory(browser_config) as session:
            collections = []
            for source in create_timeline_sources(session, browser_config):
                collections.append(await source.fetch_items())

            account_candidates = await create_account_source(session, browser_config).fetch_accounts()

        logger.info(
            f"[{self.name}] Fetched {sum(len(c) for c in collections)} tweets "
            f"and {len(account_candidates)} accounts"
        )

        return compose_briefing(
            collections,
            account_candidates,
            profile=self.profile,
            methodology=BROWSER_METHODOLOGY,
        )
