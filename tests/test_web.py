"""Tests for the briefing page and JSON API."""

import pytest

from core.errors import StorageError
from core.schemas import AccountToFollow, BriefingDocument, BriefingPost
from storage.base import BriefingStore
from storage.file_store import FileStore
from web.app import create_app
from web.formatting import format_date, format_number, format_time


class BrokenStore(BriefingStore):
    name = "broken"

    async def put(self, value):
        raise StorageError("down")

    async def get(self):
        raise StorageError("down")


@pytest.fixture
def document():
    return BriefingDocument(
        date="2026-10-19",
        scraped_at="2026-10-19T13:05:07.250Z",
        posts=[
            BriefingPost(
                id="1",
                text="Is <script>alert(1)</script> a startup?",
                author_name="Ada",
                author_handle="ada",
                likes=12300,
                retweets=4,
                replies=2,
                views=0,
                why_interesting="Relevant topic · Good reply opportunity",
                url="https://x.com/ada/status/1",
            )
        ],
        accounts_to_follow=[
            AccountToFollow(handle="grace", name="Grace", bio="Compilers", followers=2_000_000,
                            why_follow="Posts about engineering", url="https://x.com/grace"),
        ],
    )


class TestBriefingPage:
    """Test the HTML page."""

    @pytest.mark.asyncio
    async def test_empty_state(self, tmp_path):
        client = create_app(FileStore(str(tmp_path))).test_client()
        response = await client.get("/")

        assert response.status_code == 200
        assert "No briefing yet" in await response.get_data(as_text=True)

    @pytest.mark.asyncio
    async def test_renders_briefing(self, tmp_path, document):
        store = FileStore(str(tmp_path))
        await store.save(document)

        response = await create_app(store).test_client().get("/")
        body = await response.get_data(as_text=True)

        assert response.status_code == 200
        assert "Monday, October 19, 2026" in body
        assert "1 Posts" in body
        assert "@ada" in body
        assert "12.3K" in body
        assert "2M" in body
        assert "Relevant topic · Good reply opportunity" in body
        assert "1:05 PM UTC" in body
        assert "Posts about engineering" in body

    @pytest.mark.asyncio
    async def test_escapes_tweet_text(self, tmp_path, document):
        store = FileStore(str(tmp_path))
        await store.save(document)

        body = await (await create_app(store).test_client().get("/")).get_data(as_text=True)

        assert "<script>alert(1)</script>" not in body
        assert "&lt;script&gt;" in body

    @pytest.mark.asyncio
    async def test_store_unavailable(self):
        response = await create_app(BrokenStore()).test_client().get("/")
        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_corrupt_stored_value(self, tmp_path):
        store = FileStore(str(tmp_path))
        await store.put('{"date": "2026-10-19", "posts": "not a list"')

        response = await create_app(store).test_client().get("/")

        assert response.status_code == 503
        assert "Briefing unavailable" in await response.get_data(as_text=True)


class TestBriefingApi:
    """Test the JSON endpoint."""

    @pytest.mark.asyncio
    async def test_not_found_before_first_run(self, tmp_path):
        response = await create_app(FileStore(str(tmp_path))).test_client().get("/api/briefing")

        assert response.status_code == 404
        assert await response.get_json() == {"error": "No briefing data"}

    @pytest.mark.asyncio
    async def test_returns_stored_json_verbatim(self, tmp_path, document):
        store = FileStore(str(tmp_path))
        await store.save(document)

        response = await create_app(store).test_client().get("/api/briefing")

        assert response.status_code == 200
        assert response.mimetype == "application/json"
        assert await response.get_data(as_text=True) == document.to_json()

    @pytest.mark.asyncio
    async def test_store_unavailable(self):
        response = await create_app(BrokenStore()).test_client().get("/api/briefing")
        assert response.status_code == 503


class TestFormatting:
    """Test display helpers."""

    @pytest.mark.parametrize("n, expected", [
        (0, "0"),
        (999, "999"),
        (1000, "1K"),
        (1234, "1.2K"),
        (12300, "12.3K"),
        (2_000_000, "2M"),
        (1_500_000, "1.5M"),
    ])
    def test_format_number(self, n, expected):
        assert format_number(n) == expected

    def test_format_date(self):
        assert format_date("2026-10-19") == "Monday, October 19, 2026"

    def test_format_date_passthrough(self):
        assert format_date("someday") == "someday"

    def test_format_time(self):
        assert format_time("2026-10-19T00:30:00.000Z") == "12:30 AM UTC"
        assert format_time("2026-10-19T13:05:07.250Z") == "1:05 PM UTC"
