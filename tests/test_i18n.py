"""
Tests for localized display strings.
"""

from lingua_drills.i18n import TRANSLATIONS, Translator


class TestTranslator:
    """Tests for Translator.t."""

    def test_english_lookup(self):
        assert Translator("en").t("check") == "Check"

    def test_chinese_lookup(self):
        assert Translator("zh").t("check") != "Check"

    def test_placeholders(self):
        t = Translator("en").t
        assert t("card_of", {"current": 2, "total": 10}) == "Card 2 of 10"
        assert t("you_got", {"score": 3}) == "You got 3 out of {total} correct"

    def test_unknown_key_returns_key(self):
        assert Translator("zh").t("no_such_key") == "no_such_key"

    def test_unsupported_language_falls_back(self):
        translator = Translator("fr")
        assert translator.language == "en"
        assert translator.t("listening") == "Listening..."

    def test_languages_share_keys(self):
        assert set(TRANSLATIONS["zh"]) == set(TRANSLATIONS["en"])
