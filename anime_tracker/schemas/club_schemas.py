from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from anime_tracker.database import MAX_INT


class ClubCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=2000)
    creator_id: Optional[int] = Field(default=None, ge=1, le=MAX_INT)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class ClubOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    creator_id: Optional[int] = None
    created_at: datetime

    model_config = {
        "from_attributes": True
    }


class ClubListOut(BaseModel):
    clubs: List[ClubOut] = []


class ClubDetailOut(BaseModel):
    club: ClubOut


class ClubMemberOut(BaseModel):
    id: int
    club_id: int
    user_id: int
    username: str
    joined_at: datetime


class ClubMemberListOut(BaseModel):
    members: List[ClubMemberOut] = []


class DiscussionCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v


class DiscussionOut(BaseModel):
    id: int
    club_id: int
    user_id: Optional[int] = None
    author_username: Optional[str] = None
    title: str
    content: str
    created_at: datetime


class DiscussionListOut(BaseModel):
    discussions: List[DiscussionOut] = []
