"""
Folio Server - Media Option Enumerations

Enumerations used by media-related server settings.
"""

from enum import Enum


class EncodeFormat(str, Enum):
    """Image format used when re-encoding covers, bookmarks and thumbnails"""
    PNG = "PNG"
    WEBP = "WEBP"
    AVIF = "AVIF"


class CoverImageSize(str, Enum):
    """Size preset for generated cover images"""
    Default = "Default"
    Medium = "Medium"
    Large = "Large"
    XLarge = "XLarge"


class LogLevel(str, Enum):
    """Logging verbosity levels selectable from the settings page"""
    Trace = "Trace"
    Debug = "Debug"
    Information = "Information"
    Warning = "Warning"
    Critical = "Critical"


class ScrobbleProvider(str, Enum):
    """External metadata provider a recommendation originated from"""
    AniList = "AniList"
    Mal = "Mal"
    GoogleBooks = "GoogleBooks"
    Cbr = "Cbr"
