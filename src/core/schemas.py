"""
Pydantic schemas for the persisted briefing document.
Field aliases are the published JSON names and must not change.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BriefingPost(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    text: str = ""
    author_name: str = Field("Unknown", alias="authorName")
    author_handle: str = Field("unknown", alias="authorHandle")
    likes: int = 0
    retweets: int = 0
    replies: int = 0
    views: int = 0
    why_interesting: str = Field("General interest", alias="whyInteresting")
    url: str = ""


class AccountToFollow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    handle: str = "unknown"
    name: str = "Unknown"
    bio: str = ""
    followers: int = 0
    following: int = 0
    why_follow: str = Field("", alias="whyFollow")
    url: str = ""


class Methodology(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    searches: List[str] = []
    plain_english: str = Field("", alias="plainEnglish")


class BriefingDocument(BaseModel):
    """
    The single live briefing stored under the ``latest`` key.
    """
    model_config = ConfigDict(populate_by_name=True)

    date: str
    scraped_at: str = Field(alias="scrapedAt")
    posts: List[BriefingPost] = []
    accounts_to_follow: List[AccountToFollow] = Field([], alias="accountsToFollow")
    methodology: Optional[Methodology] = None

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    @classmethod
    def from_json(cls, raw: str) -> "BriefingDocument":
        return cls.model_validate_json(raw)
