"""
Folio Server - External Recommendation Database Model

Recommendations pulled from external metadata providers.
"""

from sqlalchemy import Column, Integer, BigInteger, String, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship

from models.database.base import Base
from models.enums import ScrobbleProvider


class ExternalRecommendation(Base):
    """
    External recommendations table
    When series_id is NULL the recommendation points at a series that is
    not in any local library.
    """
    __tablename__ = "external_recommendations"

    recommendation_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    cover_url = Column(String, nullable=False)
    url = Column(String, nullable=False)
    summary = Column(String, nullable=True)
    ani_list_id = Column(Integer, nullable=True)
    mal_id = Column(BigInteger, nullable=True)
    provider = Column(SQLEnum(ScrobbleProvider), nullable=False, default=ScrobbleProvider.AniList)
    series_id = Column(Integer, ForeignKey("series.series_id"), nullable=True)

    series = relationship("Series", back_populates="recommendations")

    @property
    def is_external(self) -> bool:
        return self.series_id is None
