"""
Folio Server - Localization

Translates server message keys into the calling user's language.
Locale files live in Server/i18n/<locale>.json and use {0}, {1}, ...
placeholders for arguments.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Optional

from managers.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
LOCALE_DIRECTORY = Path(__file__).parent / "i18n"


class LocalizationService:
    """
    Loads locale files on first use and caches them
    """

    def __init__(self, db_manager, locale_directory: Path = LOCALE_DIRECTORY):
        self.db_manager = db_manager
        self.locale_directory = Path(locale_directory)
        self._cache: Dict[str, Dict[str, str]] = {}
        self._lock = threading.Lock()

    def GetLocales(self) -> list:
        """Locale codes that have a translation file"""
        return sorted(p.stem for p in self.locale_directory.glob("*.json"))

    def _LoadLocale(self, locale: str) -> Dict[str, str]:
        with self._lock:
            if locale in self._cache:
                return self._cache[locale]

            locale_file = self.locale_directory / f"{locale}.json"
            if not locale_file.exists():
                logger.debug(f"No locale file for '{locale}'")
                messages = {}
            else:
                with open(locale_file, 'r', encoding='utf-8') as f:
                    messages = json.load(f)

            self._cache[locale] = messages
            return messages

    def GetUserLocale(self, user_id: Optional[int]) -> str:
        if user_id is None:
            return DEFAULT_LOCALE
        with UnitOfWork(self.db_manager) as uow:
            user = uow.users.GetUserById(user_id)
            return (user.locale if user and user.locale else DEFAULT_LOCALE)

    def Get(self, locale: str, key: str, *args) -> str:
        """
        Translate a key for a locale
        Falls back to English, then to the key itself.
        """
        template = self._LoadLocale(locale).get(key)
        if template is None and locale != DEFAULT_LOCALE:
            template = self._LoadLocale(DEFAULT_LOCALE).get(key)
        if template is None:
            logger.warning(f"Missing translation for '{key}'")
            return key

        try:
            return template.format(*args)
        except (IndexError, KeyError):
            logger.warning(f"Translation '{key}' expects different arguments than {args!r}")
            return template

    def Translate(self, user_id: Optional[int], key: str, *args) -> str:
        """Translate a key into the language of a user"""
        return self.Get(self.GetUserLocale(user_id), key, *args)
