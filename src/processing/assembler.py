"""
Turns ranked items (or an external JSON payload) into the bounded
BriefingDocument that gets persisted.
"""
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.counts import parse_count
from core.entities import MAX_BIO_LENGTH, MAX_TEXT_LENGTH, ScoredItem
from core.profiles import BriefingProfile
from core.schemas import AccountToFollow, BriefingDocument, BriefingPost, Methodology
from core.scoring import FALLBACK_REASON

logger = logging.getLogger(__name__)

TWEET_URL = "https://x.com/{handle}/status/{id}"
PROFILE_URL = "https://x.com/{handle}"

DEFAULT_PLAIN_ENGLISH = "Searched X and SuperGrok for new accounts and YC founder tweets."


def stamp(now: Optional[datetime] = None) -> Tuple[str, str]:
    """
    Returns (date, scrapedAt) for the given instant, in UTC.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)

    scraped_at = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return now.strftime("%Y-%m-%d"), scraped_at


def post_url(handle: str, tweet_id: str) -> str:
    if tweet_id:
        return TWEET_URL.format(handle=handle, id=tweet_id)
    return PROFILE_URL.format(handle=handle)


def to_post(scored: ScoredItem) -> BriefingPost:
    item = scored.item
    handle = item.author_handle or "unknown"
    return BriefingPost(
        id=item.id,
        text=item.text,
        author_name=item.author_name or "Unknown",
        author_handle=handle,
        likes=item.likes,
        retweets=item.retweets,
        replies=item.replies,
        views=item.views,
        why_interesting=scored.reason,
        url=post_url(handle, item.id),
    )


def assemble_briefing(
    ranked: Sequence[ScoredItem],
    accounts: Sequence[AccountToFollow],
    profile: BriefingProfile,
    methodology: Optional[Methodology] = None,
    now: Optional[datetime] = None,
) -> BriefingDocument:
    """
    Bound already ranked items and accounts to the profile limits.
    """
    day, scraped_at = stamp(now)

    posts = [to_post(s) for s in ranked[:profile.post_limit]]

    return BriefingDocument(
        date=day,
        scraped_at=scraped_at,
        posts=posts,
        accounts_to_follow=list(accounts[:profile.account_limit]),
        methodology=methodology,
    )


# ----------------------------
# External payload coercion
# ----------------------------

def _coerce_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return 0
        return max(0, int(round(value)))
    if isinstance(value, str):
        return parse_count(value)
    return 0


def _coerce_str(value: Any, fallback: str = "") -> str:
    # Zero and NaN count as missing, like the other empty values
    if value is None or value is False or value == "" or value == 0 or value != value:
        return fallback
    return str(value)


def _coerce_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


def _post_from_payload(p: Dict[str, Any]) -> BriefingPost:
    return BriefingPost(
        id=_coerce_str(p.get("id")),
        text=_coerce_str(p.get("text"))[:MAX_TEXT_LENGTH],
        author_name=_coerce_str(p.get("authorName"), "Unknown"),
        author_handle=_coerce_str(p.get("authorHandle"), "unknown"),
        likes=_coerce_int(p.get("likes")),
        retweets=_coerce_int(p.get("retweets")),
        replies=_coerce_int(p.get("replies")),
        views=_coerce_int(p.get("views")),
        why_interesting=_coerce_str(p.get("whyInteresting"), FALLBACK_REASON),
        url=_coerce_str(p.get("url")),
    )


def _account_from_payload(a: Dict[str, Any]) -> AccountToFollow:
    return AccountToFollow(
        handle=_coerce_str(a.get("handle"), "unknown"),
        name=_coerce_str(a.get("name"), "Unknown"),
        bio=_coerce_str(a.get("bio"))[:MAX_BIO_LENGTH],
        followers=_coerce_int(a.get("followers")),
        following=_coerce_int(a.get("following")),
        why_follow=_coerce_str(a.get("whyFollow")),
        url=_coerce_str(a.get("url")),
    )


def _methodology_from_payload(value: Any, default_searches: Sequence[str]) -> Methodology:
    data = value if isinstance(value, dict) else {}

    searches = data.get("searches")
    if isinstance(searches, list) and searches:
        searches = [str(s) for s in searches]
    else:
        searches = list(default_searches)

    return Methodology(
        searches=searches,
        plain_english=_coerce_str(data.get("plainEnglish"), DEFAULT_PLAIN_ENGLISH),
    )


def assemble_from_payload(
    payload: Dict[str, Any],
    profile: BriefingProfile,
    default_searches: Sequence[str] = (),
    now: Optional[datetime] = None,
) -> BriefingDocument:
    """
    Build a BriefingDocument from an externally produced JSON object.

    Every field is coerced; arrays longer than the profile limits are
    truncated and shorter ones are passed through as they are.
    """
    day, scraped_at = stamp(now)

    raw_posts = _coerce_list(payload.get("posts"))
    raw_accounts = _coerce_list(payload.get("accountsToFollow"))

    if len(raw_posts) < profile.post_limit:
        logger.warning(f"Payload has {len(raw_posts)} posts, expected {profile.post_limit}")
    if len(raw_accounts) < profile.account_limit:
        logger.warning(
            f"Payload has {len(raw_accounts)} accounts, expected {profile.account_limit}"
        )

    return BriefingDocument(
        date=day,
        scraped_at=scraped_at,
        posts=[_post_from_payload(p) for p in raw_posts[:profile.post_limit]],
        accounts_to_follow=[
            _account_from_payload(a) for a in raw_accounts[:profile.account_limit]
        ],
        methodology=_methodology_from_payload(payload.get("methodology"), default_searches),
    )
