"""
Folio Server - App User Rating Database Model
"""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from models.database.base import Base


class AppUserRating(Base):
    """
    Ratings table - a user's score and optional review of a series
    """
    __tablename__ = "app_user_ratings"

    rating_id = Column(Integer, primary_key=True, autoincrement=True)
    # 0-5, how good the user thinks the series is
    rating = Column(Integer, nullable=False, default=0)
    # Short summary the user can write when giving their review
    review = Column(String, nullable=True)
    tagline = Column(String, nullable=True)
    series_id = Column(Integer, ForeignKey("series.series_id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)

    series = relationship("Series", back_populates="ratings")
    user = relationship("User", back_populates="ratings")
