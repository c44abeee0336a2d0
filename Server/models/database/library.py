"""
Folio Server - Library Database Models

Libraries, the series they contain, and the volumes and chapters of a series.
"""

from sqlalchemy import Column, Integer, String, Float, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship

from models.database.base import Base
from models.enums import LibraryType


class Library(Base):
    """
    Libraries table - a named root folder of one media type
    """
    __tablename__ = "libraries"

    library_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, unique=True, nullable=False)
    type = Column(SQLEnum(LibraryType), nullable=False, default=LibraryType.Manga)
    folder_path = Column(String, nullable=False)

    series = relationship("Series", back_populates="library", cascade="all, delete-orphan")


class Series(Base):
    """
    Series table - a run of volumes inside a library
    """
    __tablename__ = "series"

    series_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    library_id = Column(Integer, ForeignKey("libraries.library_id"), nullable=False)

    library = relationship("Library", back_populates="series")
    volumes = relationship("Volume", back_populates="series", cascade="all, delete-orphan")
    ratings = relationship("AppUserRating", back_populates="series", cascade="all, delete-orphan")
    recommendations = relationship("ExternalRecommendation", back_populates="series")


class Volume(Base):
    """
    Volumes table
    A volume named "1-3" spans min_number 1 to max_number 3
    """
    __tablename__ = "volumes"

    volume_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    min_number = Column(Float, nullable=False, default=0.0)
    max_number = Column(Float, nullable=False, default=0.0)
    # Sum of the pages of every chapter
    pages = Column(Integer, nullable=False, default=0)
    cover_image = Column(String, nullable=True)
    series_id = Column(Integer, ForeignKey("series.series_id"), nullable=True)

    series = relationship("Series", back_populates="volumes")
    chapters = relationship("Chapter", back_populates="volume", cascade="all, delete-orphan")


class Chapter(Base):
    """
    Chapters table
    """
    __tablename__ = "chapters"

    chapter_id = Column(Integer, primary_key=True, autoincrement=True)
    range = Column(String, nullable=False)
    number = Column(Float, nullable=False, default=0.0)
    pages = Column(Integer, nullable=False, default=0)
    volume_id = Column(Integer, ForeignKey("volumes.volume_id"), nullable=True)

    volume = relationship("Volume", back_populates="chapters")
