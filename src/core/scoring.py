"""
Heuristic scoring and ranking of candidate tweets
"""

from typing import Iterable, List

from core.entities import CandidateItem, ScoredItem

TOPIC_KEYWORDS = (
    # crypto
    "bitcoin",
    "ethereum",
    "crypto",
    "blockchain",
    "decentralized finance",
    "web3",
    "solana",
    "stablecoin",
    # ai
    "artificial intelligence",
    "machine learning",
    "llm",
    "gpt",
    "openai",
    "anthropic",
    "ai agent",
    "neural net",
    # startups and venture
    "startup",
    "founder",
    "fundraising",
    "seed round",
    "series a",
    "venture capital",
    "y combinator",
    "product market fit",
    "saas",
    # engineering
    "engineering",
    "open source",
    "typescript",
    "python",
    "kubernetes",
    "devtools",
)

REPLY_MARKERS = (
    "hot take",
    "unpopular opinion",
    "thoughts?",
    "debate",
    "disagree",
    "controversial",
    "thread",
    "who else",
    "am i wrong",
    "change my mind",
    "what do you think",
    "prove me wrong",
)

FALLBACK_REASON = "General interest"
REASON_SEPARATOR = " · "


def matched_topics(text: str) -> List[str]:
    """
    Vocabulary entries found in the text, in vocabulary order.
    """
    text = text.lower()
    return [k for k in TOPIC_KEYWORDS if k in text]


def topic_score(text: str) -> int:
    """
    Number of distinct vocabulary entries contained in the text.
    Repeated mentions of one entry count once.
    """
    return len(matched_topics(text))


def is_reply_opportunity(text: str) -> bool:
    if "?" in text:
        return True
    text = text.lower()
    return any(marker in text for marker in REPLY_MARKERS)


def engagement(item: CandidateItem) -> int:
    return item.likes + 2 * item.retweets + 3 * item.replies


def score_item(item: CandidateItem) -> ScoredItem:
    """
    Apply every additive heuristic to a single item.
    """
    score = 0
    labels: List[str] = []

    weighted = engagement(item)
    if weighted > 1000:
        score += 3
        labels.append("High engagement")
    elif weighted > 200:
        score += 2
        labels.append("Strong engagement")
    elif weighted > 50:
        score += 1

    topics = topic_score(item.text)
    if topics >= 2:
        score += 3
        labels.append("Highly relevant topics")
    elif topics >= 1:
        score += 2
        labels.append("Relevant topic")

    if is_reply_opportunity(item.text):
        score += 2
        labels.append("Good reply opportunity")

    # likes == 0 never earns the bonus
    if item.replies > 0 and item.likes > 0 and item.replies / item.likes > 0.3:
        score += 1
        labels.append("Active discussion")

    reason = REASON_SEPARATOR.join(labels) if labels else FALLBACK_REASON
    return ScoredItem(item=item, score=score, reason=reason)


def rank_items(items: Iterable[CandidateItem]) -> List[ScoredItem]:
    """
    Score all items and order them by descending score.
    Equal scores keep their encounter order.
    """
    scored = [score_item(item) for item in items]
    return sorted(scored, key=lambda s: s.score, reverse=True)
