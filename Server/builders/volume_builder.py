"""
Folio Server - Volume Builder

Fluent construction of Volume entities.

Usage:
    volume = (VolumeBuilder("1-3")
              .WithSeriesId(series.series_id)
              .WithChapter(chapter)
              .Build())
"""

from typing import List

from models.database import Volume, Chapter
from number_parser import MinNumberFromRange, MaxNumberFromRange


class VolumeBuilder:
    """Builds a Volume whose numbers are parsed from its name"""

    def __init__(self, volume_number: str):
        self._volume = Volume(
            name=volume_number,
            min_number=MinNumberFromRange(volume_number),
            max_number=MaxNumberFromRange(volume_number),
            pages=0,
            chapters=[]
        )

    def Build(self) -> Volume:
        return self._volume

    def WithName(self, name: str) -> "VolumeBuilder":
        self._volume.name = name
        return self

    def WithNumber(self, number: float) -> "VolumeBuilder":
        """Set the minimum number, raising the maximum if it would fall below it"""
        self._volume.min_number = number
        if self._volume.max_number < number:
            self._volume.max_number = number
        return self

    def WithMinNumber(self, number: float) -> "VolumeBuilder":
        self._volume.min_number = number
        return self

    def WithMaxNumber(self, number: float) -> "VolumeBuilder":
        self._volume.max_number = number
        return self

    def WithChapters(self, chapters: List[Chapter]) -> "VolumeBuilder":
        self._volume.chapters = chapters
        return self

    def WithChapter(self, chapter: Chapter) -> "VolumeBuilder":
        """Append a chapter and recompute the page count"""
        self._volume.chapters.append(chapter)
        self._volume.pages = sum(c.pages or 0 for c in self._volume.chapters)
        return self

    def WithSeriesId(self, series_id: int) -> "VolumeBuilder":
        self._volume.series_id = series_id
        return self

    def WithCoverImage(self, cover: str) -> "VolumeBuilder":
        self._volume.cover_image = cover
        return self
