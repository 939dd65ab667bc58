"""
Source Factory - Creates browser retrieval sources from configuration.
"""
import logging
from typing import List

from ingestion.base import SourceAdapter
from ingestion.browser import BrowserSession, SuggestedAccountsSource, TimelineSource
from services.config import BrowserConfig

logger = logging.getLogger(__name__)


def create_timeline_sources(session: BrowserSession, config: BrowserConfig) -> List[SourceAdapter]:
    """
    Create the tweet sources in priority order.

    The order matters: when the same tweet shows up in several sources,
    the copy from the earlier source is the one that is kept.
    """
    sources: List[SourceAdapter] = [
        TimelineSource(session, name="feed", url=config.feed_url, scroll_rounds=config.scroll_rounds),
        TimelineSource(
            session,
            name="notifications",
            url=config.notifications_url,
            scroll_rounds=max(1, config.scroll_rounds // 2),
        ),
    ]
    for source in sources:
        logger.info(f"Created timeline source: {source.name}")
    return sources


def create_account_source(session: BrowserSession, config: BrowserConfig) -> SuggestedAccountsSource:
    return SuggestedAccountsSource(session, url=config.accounts_url)
