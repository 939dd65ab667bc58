from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_TEXT_LENGTH = 500
MAX_BIO_LENGTH = 280


class CandidateItem(BaseModel):
    """
    A retrieved post before scoring.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = ""
    text: str = ""
    author_name: str = Field("", alias="authorName")
    author_handle: str = Field("", alias="authorHandle")
    likes: int = Field(0, ge=0)
    retweets: int = Field(0, ge=0)
    replies: int = Field(0, ge=0)
    views: int = Field(0, ge=0)

    @field_validator("text")
    @classmethod
    def _truncate_text(cls, value: str) -> str:
        return value[:MAX_TEXT_LENGTH]


class AccountCandidate(BaseModel):
    """
    A retrieved account that might be worth following.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    handle: str
    name: str = ""
    bio: str = ""
    followers: int = Field(0, ge=0)
    following: int = Field(0, ge=0)

    @field_validator("bio")
    @classmethod
    def _truncate_bio(cls, value: str) -> str:
        return value[:MAX_BIO_LENGTH]


@dataclass(frozen=True)
class ScoredItem:
    """
    Candidate item with its ranking score and the labels that produced it.
    """
    item: CandidateItem
    score: int
    reason: str
