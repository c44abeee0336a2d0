"""
Tests for server message translation
"""

from localization import LocalizationService


def test_available_locales(db_manager):
    service = LocalizationService(db_manager)
    assert {"en", "es"} <= set(service.GetLocales())


def test_get_formats_arguments(db_manager):
    service = LocalizationService(db_manager)
    assert service.Get("en", "ip-address-invalid", "1.2.3") == "IP Address '1.2.3' is invalid"


def test_unknown_locale_falls_back_to_english(db_manager):
    service = LocalizationService(db_manager)
    assert service.Get("fr", "total-logs") == "Total Logs must be between 1 and 30"


def test_unknown_key_returns_key(db_manager):
    service = LocalizationService(db_manager)
    assert service.Get("en", "no-such-key") == "no-such-key"


def test_translate_uses_user_locale(db_manager, tmp_path):
    locale_dir = tmp_path / "locale"
    locale_dir.mkdir()
    (locale_dir / "en.json").write_text('{"greeting": "Hello {0}"}', encoding="utf-8")

    service = LocalizationService(db_manager, locale_directory=locale_dir)

    # The seeded admin user has the default "en" locale
    assert service.Translate(1, "greeting", "admin") == "Hello admin"
    assert service.Translate(None, "greeting", "guest") == "Hello guest"
