"""
Folio Server - Library Type Enumeration
"""

from enum import Enum


class LibraryType(str, Enum):
    """Kind of media a library holds, which drives how its files are parsed"""
    Manga = "Manga"
    Comic = "Comic"
    Book = "Book"
    Image = "Image"
    LightNovel = "LightNovel"

    @property
    def description(self) -> str:
        """Human readable name shown in the library type picker"""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    LibraryType.Manga: "Manga",
    LibraryType.Comic: "Comic",
    LibraryType.Book: "Book",
    LibraryType.Image: "Image",
    LibraryType.LightNovel: "Light Novel",
}
