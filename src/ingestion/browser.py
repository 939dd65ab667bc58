"""
Ingestion from a logged-in X session driven by Playwright
"""
import logging
import re
from typing import Any, Dict, List, Optional, Set

from playwright.async_api import BrowserContext, Page, async_playwright
from playwright.async_api import Error as PlaywrightError

from core.counts import parse_count
from core.entities import AccountCandidate, CandidateItem
from core.errors import BrowserSessionError
from ingestion.base import AccountSourceAdapter, SourceAdapter
from services.config import BrowserConfig

logger = logging.getLogger(__name__)

TWEET_SELECTOR = 'article[data-testid="tweet"]'
USER_CELL_SELECTOR = '[data-testid="UserCell"]'

_STATUS_HREF = re.compile(r"^/([^/?#]+)/status/(\d+)")
_PROFILE_HREF = re.compile(r"^/([A-Za-z0-9_]+)/?$")

# Runs inside the page against one <article>; returns raw strings only
EXTRACT_TWEET_JS = """
(article) => {
  const text = (sel) => {
    const el = article.querySelector(sel);
    return el ? el.innerText : "";
  };
  const count = (testid) => {
    const el = article.querySelector(`[data-testid="${testid}"]`);
    return el ? (el.getAttribute("aria-label") || el.innerText || "") : "";
  };
  const time = article.querySelector('a[href*="/status/"] time');
  const link = time ? time.closest("a") : null;
  const views = article.querySelector('a[href$="/analytics"]');
  return {
    href: link ? link.getAttribute("href") : "",
    text: text('[data-testid="tweetText"]'),
    userName: text('[data-testid="User-Name"]'),
    likes: count("like") || count("unlike"),
    retweets: count("retweet") || count("unretweet"),
    replies: count("reply"),
    views: views ? (views.getAttribute("aria-label") || views.innerText || "") : "",
  };
}
"""

EXTRACT_USER_CELL_JS = """
(cell) => {
  const link = cell.querySelector('a[role="link"][href^="/"]');
  return {
    href: link ? link.getAttribute("href") : "",
    text: cell.innerText || "",
  };
}
"""


def _split_user_name(raw: str) -> tuple[str, str]:
    """
    "Display Name\\n@handle\\n·\\n3h" -> ("Display Name", "handle")
    """
    lines = [line.strip() for line in raw.splitlines() if line.strip()]
    name = lines[0] if lines else ""
    handle = next((line[1:] for line in lines if line.startswith("@")), "")
    return name, handle


def candidate_from_raw(raw: Dict[str, Any]) -> Optional[CandidateItem]:
    """
    Build a CandidateItem from the strings scraped out of one tweet.
    Returns None when there is nothing worth keeping.
    """
    href = raw.get("href") or ""
    match = _STATUS_HREF.match(href)
    tweet_id = match.group(2) if match else ""

    name, handle = _split_user_name(raw.get("userName") or "")
    if not handle and match:
        handle = match.group(1)

    text = (raw.get("text") or "").strip()
    if not text and not tweet_id:
        return None

    return CandidateItem(
        id=tweet_id,
        text=text,
        author_name=name or handle,
        author_handle=handle,
        likes=parse_count(raw.get("likes")),
        retweets=parse_count(raw.get("retweets")),
        replies=parse_count(raw.get("replies")),
        views=parse_count(raw.get("views")),
    )


def account_from_raw(raw: Dict[str, Any]) -> Optional[AccountCandidate]:
    """
    Build an AccountCandidate from a "who to follow" cell.
    Follower counts are not shown in the cell and stay 0.
    """
    match = _PROFILE_HREF.match(raw.get("href") or "")
    lines = [line.strip() for line in (raw.get("text") or "").splitlines() if line.strip()]

    handle = next((line[1:] for line in lines if line.startswith("@")), "")
    if not handle and match:
        handle = match.group(1)
    if not handle:
        return None

    name = lines[0] if lines and not lines[0].startswith("@") else handle

    # Everything after the follow button is the bio
    bio_lines: List[str] = []
    for i, line in enumerate(lines):
        if line in ("Follow", "Following", "Follow back"):
            bio_lines = lines[i + 1:]
            break

    return AccountCandidate(handle=handle, name=name, bio=" ".join(bio_lines))


class BrowserSession:
    """
    Persistent Chromium context reusing a saved X login.
    """

    def __init__(self, config: BrowserConfig):
        self.config = config
        self._playwright = None
        self.context: Optional[BrowserContext] = None

    async def __aenter__(self) -> "BrowserSession":
        try:
            self._playwright = await async_playwright().start()
        except PlaywrightError as e:
            raise BrowserSessionError(f"Could not start Playwright: {e}") from e

        try:
            self.context = await self._playwright.chromium.launch_persistent_context(
                self.config.user_data_dir,
                headless=self.config.headless,
            )
        except PlaywrightError as e:
            await self._playwright.stop()
            raise BrowserSessionError(f"Could not launch browser: {e}") from e
        return self

    async def __aexit__(self, *exc_info) -> None:
        try:
            if self.context is not None:
                await self.context.close()
        finally:
            await self._playwright.stop()

    async def new_page(self) -> Page:
        try:
            return await self.context.new_page()
        except PlaywrightError as e:
            raise BrowserSessionError(f"Could not open a page: {e}") from e

    async def scroll(self, page: Page) -> None:
        await page.mouse.wheel(0, 2500)
        await page.wait_for_timeout(self.config.scroll_pause * 1000)


class TimelineSource(SourceAdapter):
    """
    Scrolls one timeline page (home feed, notifications) and collects tweets.
    """

    def __init__(self, session: BrowserSession, name: str, url: str, scroll_rounds: int = 8):
        self.session = session
        self.name = name
        self.url = url
        self.scroll_rounds = scroll_rounds

    async def fetch_items(self) -> List[CandidateItem]:
        items: List[CandidateItem] = []
        seen: Set[str] = set()

        page = await self.session.new_page()
        try:
            await page.goto(self.url, wait_until="domcontentloaded")
            await page.wait_for_selector(TWEET_SELECTOR, timeout=20_000)

            for _ in range(self.scroll_rounds):
                for article in await page.query_selector_all(TWEET_SELECTOR):
                    try:
                        item = candidate_from_raw(await article.evaluate(EXTRACT_TWEET_JS))
                    except Exception as e:
                        logger.debug(f"[{self.name}] Skipping unreadable tweet: {e}")
                        continue

                    if item is None:
                        continue

                    # Tweets stay in the DOM across scrolls
                    key = item.id or f"text:{item.text}"
                    if key in seen:
                        continue
                    seen.add(key)
                    items.append(item)

                await self.session.scroll(page)

        except PlaywrightError as e:
            logger.error(f"[{self.name}] Retrieval stopped early: {e}")
        finally:
            await page.close()

        logger.info(f"[{self.name}] Collected {len(items)} tweets")
        return items


class SuggestedAccountsSource(AccountSourceAdapter):
    name = "suggested_accounts"

    def __init__(self, session: BrowserSession, url: str, scroll_rounds: int = 2):
        self.session = session
        self.url = url
        self.scroll_rounds = scroll_rounds

    async def fetch_accounts(self) -> List[AccountCandidate]:
        accounts: List[AccountCandidate] = []
        seen: Set[str] = set()

        page = await self.session.new_page()
        try:
            await page.goto(self.url, wait_until="domcontentloaded")
            await page.wait_for_selector(USER_CELL_SELECTOR, timeout=20_000)

            for _ in range(self.scroll_rounds):
                for cell in await page.query_selector_all(USER_CELL_SELECTOR):
                    try:
                        account = account_from_raw(await cell.evaluate(EXTRACT_USER_CELL_JS))
                    except Exception as e:
                        logger.debug(f"[{self.name}] Skipping unreadable account: {e}")
                        continue

                    if account is None or account.handle.lower() in seen:
                        continue
                    seen.add(account.handle.lower())
                    accounts.append(account)

                await self.session.scroll(page)

        except PlaywrightError as e:
            logger.error(f"[{self.name}] Retrieval stopped early: {e}")
        finally:
            await page.close()

        logger.info(f"[{self.name}] Collected {len(accounts)} accounts")
        return accounts
