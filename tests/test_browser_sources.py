"""Tests for the browser sources and pipeline against a fake Playwright session."""

import pytest
from playwright.async_api import Error as PlaywrightError

from core.errors import BrowserSessionError
from core.profiles import INTERACTIVE_BROWSER
from ingestion import browser
from ingestion.browser import BrowserSession, SuggestedAccountsSource, TimelineSource
from services.config import BrowserConfig, Config
from workflows.browser_briefing import BrowserBriefingPipeline

FEED_URL = "https://x.test/home"
NOTIFICATIONS_URL = "https://x.test/notifications"
ACCOUNTS_URL = "https://x.test/connect"


def tweet(tweet_id, text, likes="0", handle="someone"):
    return {
        "href": f"/{handle}/status/{tweet_id}",
        "text": text,
        "userName": f"{handle.title()}\n@{handle}",
        "likes": likes,
        "retweets": "0",
        "replies": "0",
        "views": "",
    }


def user_cell(handle, bio):
    return {"href": f"/{handle}", "text": f"{handle.title()}\n@{handle}\nFollow\n{bio}"}


class FakeElement:
    def __init__(self, raw=None, error=None):
        self.raw = raw
        self.error = error

    async def evaluate(self, script):
        if self.error:
            raise self.error
        return self.raw


class FakePage:
    def __init__(self, elements, goto_error=None):
        self.elements = elements
        self.goto_error = goto_error
        self.url = None
        self.closed = False

    async def goto(self, url, wait_until=None):
        if self.goto_error:
            raise self.goto_error
        self.url = url

    async def wait_for_selector(self, selector, timeout=None):
        return None

    async def query_selector_all(self, selector):
        return self.elements.get(self.url, [])

    async def close(self):
        self.closed = True


class FakeSession:
    def __init__(self, elements, goto_error=None):
        self.elements = elements
        self.goto_error = goto_error
        self.pages = []
        self.scrolls = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None

    async def new_page(self):
        page = FakePage(self.elements, self.goto_error)
        self.pages.append(page)
        return page

    async def scroll(self, page):
        self.scrolls += 1


class TestTimelineSource:
    """Test TimelineSource.fetch_items with a fake page."""

    @pytest.mark.asyncio
    async def test_unreadable_tweet_is_skipped(self):
        session = FakeSession({
            FEED_URL: [
                FakeElement(tweet("1", "first")),
                FakeElement(error=RuntimeError("detached node")),
                FakeElement(tweet("3", "third")),
            ],
        })
        source = TimelineSource(session, name="feed", url=FEED_URL, scroll_rounds=2)

        items = await source.fetch_items()

        # tweets stay in the DOM across scrolls and are collected once
        assert [i.id for i in items] == ["1", "3"]
        assert session.scrolls == 2
        assert session.pages[0].closed

    @pytest.mark.asyncio
    async def test_navigation_failure_returns_what_was_collected(self):
        session = FakeSession({}, goto_error=PlaywrightError("net::ERR_INTERNET_DISCONNECTED"))
        source = TimelineSource(session, name="feed", url=FEED_URL)

        assert await source.fetch_items() == []
        assert session.pages[0].closed


class TestSuggestedAccountsSource:
    """Test SuggestedAccountsSource.fetch_accounts with a fake page."""

    @pytest.mark.asyncio
    async def test_unreadable_cell_is_skipped(self):
        session = FakeSession({
            ACCOUNTS_URL: [
                FakeElement(user_cell("alice", "Startup founder")),
                FakeElement(error=RuntimeError("stale")),
                FakeElement(user_cell("ALICE", "same person, other casing")),
                FakeElement(user_cell("bob", "Python engineering")),
            ],
        })
        source = SuggestedAccountsSource(session, url=ACCOUNTS_URL, scroll_rounds=1)

        accounts = await source.fetch_accounts()

        assert [a.handle for a in accounts] == ["alice", "bob"]
        assert session.pages[0].closed


class TestBrowserSession:
    """Test BrowserSession launch failures."""

    @pytest.mark.asyncio
    async def test_launch_failure_raises_briefing_error(self, monkeypatch):
        stopped = []

        class FakeChromium:
            async def launch_persistent_context(self, user_data_dir, headless=True):
                raise PlaywrightError("Executable doesn't exist")

        class FakePlaywright:
            chromium = FakeChromium()

            async def stop(self):
                stopped.append(True)

        class FakeManager:
            async def start(self):
                return FakePlaywright()

        monkeypatch.setattr(browser, "async_playwright", FakeManager)

        with pytest.raises(BrowserSessionError, match="Executable doesn't exist"):
            async with BrowserSession(BrowserConfig()):
                pass

        assert stopped == [True]


class TestBrowserBriefingPipeline:
    """Test BrowserBriefingPipeline.run through the session factory hook."""

    @pytest.mark.asyncio
    async def test_run_builds_bounded_document(self):
        feed = [FakeElement(tweet(str(i), f"Python startup update {i}", likes=str(100 * i))) for i in range(1, 8)]
        feed.insert(2, FakeElement(error=RuntimeError("detached node")))
        notifications = [
            FakeElement(tweet("3", "duplicate of a feed tweet", likes="99K")),
            FakeElement(tweet("50", "Thoughts? on machine learning", likes="2K")),
        ]
        session = FakeSession({
            FEED_URL: feed,
            NOTIFICATIONS_URL: notifications,
            ACCOUNTS_URL: [
                FakeElement(user_cell("chef", "I cook pasta")),
                FakeElement(user_cell("vc", "Seed round investor")),
                FakeElement(user_cell("dev", "Open source maintainer")),
                FakeElement(user_cell("ml", "Machine learning researcher")),
            ],
        })
        config = Config(browser=BrowserConfig(
            scroll_rounds=2,
            feed_url=FEED_URL,
            notifications_url=NOTIFICATIONS_URL,
            accounts_url=ACCOUNTS_URL,
        ))
        pipeline = BrowserBriefingPipeline(config, session_factory=lambda browser_config: session)

        document = await pipeline.run()

        assert len(document.posts) == INTERACTIVE_BROWSER.post_limit
        assert document.posts[0].id == "50"
        # the feed copy of tweet 3 was kept
        assert all(p.text != "duplicate of a feed tweet" for p in document.posts)
        assert [a.handle for a in document.accounts_to_follow] == ["vc", "dev"]
        assert document.methodology.searches == ["Home timeline", "Notifications", "Who to follow"]
        assert all(page.closed for page in session.pages)
