import enum

from sqlalchemy import Column, Integer, String, Enum as SqlEnum
from sqlalchemy.orm import relationship

from anime_tracker.database import Base


class ShowType(str, enum.Enum):
    ANIME = "anime"
    TV = "tv"


class Show(Base):
    __tablename__ = "shows"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    type = Column(
        SqlEnum(
            ShowType,
            name="show_type",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    genre = Column(String)
    release_year = Column(Integer)
    total_episodes = Column(Integer)
    status = Column(String)  # free text: ongoing, completed, ...
    image_url = Column(String)

    watchlist_entries = relationship("WatchlistEntry", back_populates="show", passive_deletes=True)
