"""
Logo Designer Backend — Response Localizer Tests
==================================================

What we test:
    ✅ Language tags normalize onto {"en", "ar"}
    ✅ ?lang wins over Accept-Language; q-values are honoured
    ✅ Bilingual fallback chains (ar → ar, en, generic; en → en, generic)
    ✅ Text direction, message catalog, date formatting
"""

from datetime import datetime, timedelta, timezone

import pytest

from logo_api.services.localizer import (
    format_localized_datetime,
    get_message,
    language_from_accept_header,
    normalize_language,
    resolve_localized,
    resolve_request_language,
    text_direction,
    to_iso8601,
)


class TestLanguageResolution:

    @pytest.mark.parametrize(
        "tag,expected",
        [("ar", "ar"), ("AR", "ar"), ("ar-SA", "ar"), ("en_GB", "en"),
         ("fr", "en"), ("", "en"), (None, "en")],
    )
    def test_normalize_language(self, tag, expected):
        assert normalize_language(tag) == expected

    def test_accept_language_prefers_highest_quality(self):
        assert language_from_accept_header("en;q=0.4, ar;q=0.9") == "ar"

    def test_accept_language_skips_unsupported(self):
        assert language_from_accept_header("fr-FR, de;q=0.8, ar;q=0.5") == "ar"

    def test_accept_language_without_match(self):
        assert language_from_accept_header("fr, de") is None
        assert language_from_accept_header(None) is None

    def test_accept_language_refuses_zero_quality(self):
        assert language_from_accept_header("ar;q=0") is None

    def test_query_parameter_wins(self):
        assert resolve_request_language("ar", "en") == "ar"

    def test_unsupported_query_falls_back_to_header(self):
        assert resolve_request_language("fr", "ar") == "ar"

    def test_default_language_when_nothing_matches(self):
        assert resolve_request_language(None, None) == "en"


class TestResolveLocalized:

    def test_arabic_falls_back_to_english(self):
        assert resolve_localized("ar", en="Foo", ar=None, generic="Bar") == "Foo"

    def test_generic_used_for_either_language(self):
        assert resolve_localized("ar", en=None, ar=None, generic="Bar") == "Bar"
        assert resolve_localized("en", en=None, ar=None, generic="Bar") == "Bar"

    def test_arabic_preferred_for_arabic(self):
        assert resolve_localized("ar", en="Foo", ar="فو", generic="Bar") == "فو"

    def test_english_never_uses_arabic(self):
        assert resolve_localized("en", en=None, ar="فو", generic=None) is None

    def test_unknown_language_behaves_like_english(self):
        assert resolve_localized("fr", en="Foo", ar="فو", generic="Bar") == "Foo"

    def test_empty_strings_are_skipped(self):
        assert resolve_localized("ar", en="Foo", ar="  ", generic="Bar") == "Foo"


class TestMessagesAndDirection:

    def test_direction(self):
        assert text_direction("ar") == "rtl"
        assert text_direction("en") == "ltr"
        assert text_direction("fr") == "ltr"

    def test_messages_are_localized(self):
        assert get_message("en", "logoNotFound") == "Logo not found"
        assert get_message("ar", "logoNotFound") == "الشعار غير موجود"

    def test_message_parameters(self):
        assert "30" in get_message("en", "rateLimited", retry_after=30)

    def test_unknown_language_uses_default_catalog(self):
        assert get_message("fr", "serverError") == "Internal server error"


class TestDates:

    def test_iso8601_has_milliseconds_and_z(self):
        moment = datetime(2025, 10, 15, 21, 3, 7, 250000, tzinfo=timezone.utc)
        assert to_iso8601(moment) == "2025-10-15T21:03:07.250Z"

    def test_iso8601_converts_to_utc(self):
        moment = datetime(2025, 10, 16, 0, 3, 7, tzinfo=timezone(timedelta(hours=3)))
        assert to_iso8601(moment) == "2025-10-15T21:03:07.000Z"

    def test_naive_timestamps_are_utc(self):
        assert to_iso8601(datetime(2025, 1, 2, 3, 4, 5)) == "2025-01-02T03:04:05.000Z"

    def test_none_stays_none(self):
        assert to_iso8601(None) is None
        assert format_localized_datetime(None, "en") is None

    def test_english_format(self):
        moment = datetime(2025, 10, 15, 21, 3, tzinfo=timezone.utc)
        assert format_localized_datetime(moment, "en") == "October 15, 2025 at 09:03 PM"

    def test_arabic_format_uses_arabic_indic_digits(self):
        moment = datetime(2025, 10, 15, 21, 3, tzinfo=timezone.utc)
        assert format_localized_datetime(moment, "ar") == "١٥ أكتوبر ٢٠٢٥، ٠٩:٠٣ م"
