from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from anime_tracker.database import MAX_INT
from anime_tracker.models.show_model import ShowType


class ShowCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    type: ShowType
    genre: Optional[str] = None
    release_year: Optional[int] = Field(default=None, ge=1800, le=3000)
    total_episodes: Optional[int] = Field(default=None, ge=0, le=MAX_INT)
    status: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v


class ShowOut(ShowCreate):
    id: int

    model_config = {
        "from_attributes": True
    }


class ShowListOut(BaseModel):
    shows: List[ShowOut] = []


class CreatedOut(BaseModel):
    id: int
