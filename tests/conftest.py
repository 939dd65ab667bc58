"""
Shared fixtures for the briefing tests.
"""

from datetime import datetime, timezone

import pytest

from core.entities import CandidateItem


@pytest.fixture
def fixed_now():
    """A fixed UTC instant so date stamps are predictable."""
    return datetime(2026, 10, 19, 13, 5, 7, 250000, tzinfo=timezone.utc)


@pytest.fixture
def make_item():
    """Factory for candidate items with zeroed defaults."""
    def _make(id="", text="", likes=0, retweets=0, replies=0, views=0, handle="someone"):
        return CandidateItem(
            id=id,
            text=text,
            author_name=handle.title(),
            author_handle=handle,
            likes=likes,
            retweets=retweets,
            replies=replies,
            views=views,
        )
    return _make


@pytest.fixture
def sample_payload():
    """Payload in the shape the remote agent is asked to return."""
    return {
        "posts": [
            {
                "id": str(1000 + i),
                "text": f"Post number {i}",
                "authorName": f"Founder {i}",
                "authorHandle": f"founder{i}",
                "likes": 10 * i,
                "retweets": i,
                "replies": i,
                "views": 100 * i,
                "whyInteresting": f"Reason {i}",
                "url": f"https://x.com/founder{i}/status/{1000 + i}",
            }
            for i in range(12)
        ],
        "accountsToFollow": [
            {
                "handle": f"account{i}",
                "name": f"Account {i}",
                "bio": "Building things",
                "followers": 1000 + i,
                "following": 100,
                "whyFollow": "Followed by people you follow",
                "url": f"https://x.com/account{i}",
            }
            for i in range(5)
        ],
        "methodology": {
            "searches": ["query one", "query two"],
            "plainEnglish": "Searched around.",
        },
    }
