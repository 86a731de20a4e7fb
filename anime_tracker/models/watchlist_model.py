import enum

from sqlalchemy import Column, Integer, String, Text, ForeignKey, CheckConstraint, Enum as SqlEnum
from sqlalchemy.orm import relationship

from anime_tracker.database import Base

RATING_MIN = 1
RATING_MAX = 10


class WatchStatus(str, enum.Enum):
    WATCHING = "watching"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    DROPPED = "dropped"
    PLAN_TO_WATCH = "plan_to_watch"


class WatchlistEntry(Base):
    __tablename__ = "watchlists"
    __table_args__ = (
        # no unique (user_id, show_id): re-watches are tracked as separate rows
        CheckConstraint("progress >= 0", name="ck_watchlists_progress_nonneg"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # ownership key; never updated after insert
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    show_id = Column(
        Integer,
        ForeignKey("shows.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status = Column(
        SqlEnum(
            WatchStatus,
            name="watch_status",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    progress = Column(Integer, nullable=False, default=0, server_default="0")
    rating = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    owner = relationship("User", back_populates="watchlist_entries")
    show = relationship("Show", back_populates="watchlist_entries")
