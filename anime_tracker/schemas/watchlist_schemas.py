from pydantic import BaseModel, Field
from typing import List, Optional

from anime_tracker.database import MAX_INT
from anime_tracker.models.show_model import ShowType
from anime_tracker.models.watchlist_model import WatchStatus, RATING_MIN, RATING_MAX


class WatchlistCreate(BaseModel):
    show_id: int = Field(ge=1, le=MAX_INT)
    status: WatchStatus


class WatchlistUpdate(BaseModel):
    # full replacement: omitted rating/notes are cleared
    status: WatchStatus
    progress: int = Field(ge=0, le=MAX_INT)
    rating: Optional[int] = Field(default=None, ge=RATING_MIN, le=RATING_MAX)
    notes: Optional[str] = Field(default=None, max_length=5000)


class WatchlistEntryOut(BaseModel):
    id: int
    user_id: int
    show_id: int
    status: WatchStatus
    progress: int
    rating: Optional[int] = None
    notes: Optional[str] = None

    # show summary from the join
    title: str
    type: ShowType
    genre: Optional[str] = None
    total_episodes: Optional[int] = None
    image_url: Optional[str] = None


class WatchlistOut(BaseModel):
    watchlist: List[WatchlistEntryOut] = []


class ChangesOut(BaseModel):
    changes: int
