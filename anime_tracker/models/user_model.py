from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship

from anime_tracker.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    watchlist_entries = relationship("WatchlistEntry", back_populates="owner", passive_deletes=True)
