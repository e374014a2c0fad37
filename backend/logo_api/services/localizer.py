"""
Logo Designer Backend — Response Localizer
============================================

What:  Pure functions that pick language-appropriate text for responses.
Why:   Mobile clients render either English (LTR) or Arabic (RTL). Every
       response, success or failure, single document or list, has to make the
       same choice for the same language.
How:   Bilingual fields are stored as independent columns (`title_en`,
       `title_ar`, plus an untagged `title`). `resolve_localized()` walks a
       fixed fallback chain; `text_direction()` is a pure function of the
       language; `get_message()` reads a small message catalog.
Who:   Used by the localization middleware, the document assembler and the
       global exception handlers.

Fallback chains (first non-empty value wins):
    ar           → ar, en, generic
    anything else → en, generic
"""

from datetime import datetime, timezone
from typing import Iterable, Optional, Union

from logo_api.config import SUPPORTED_LANGUAGES, settings

ARABIC = "ar"
ENGLISH = "en"

MESSAGES = {
    ENGLISH: {
        "requestCompleted": "Request completed successfully",
        "logoFetched": "Logo fetched successfully",
        "logoFetchedLegacy": "Logo fetched in legacy format successfully",
        "logosFetched": "Logos fetched successfully",
        "logosFetchedLegacy": "Logos fetched in legacy format successfully",
        "noLogos": "No logos available",
        "logoNotFound": "Logo not found",
        "invalidLogoId": "Invalid logo ID format",
        "legacyNotSupported": "This logo does not support legacy format",
        "validationError": "Validation error",
        "rateLimited": "Too many requests. Please wait {retry_after} seconds before retrying.",
        "serverError": "Internal server error",
        "logoCreatedOn": "Logo created on {date}",
    },
    ARABIC: {
        "requestCompleted": "تم تنفيذ الطلب بنجاح",
        "logoFetched": "تم جلب الشعار بنجاح",
        "logoFetchedLegacy": "تم جلب الشعار بالتنسيق القديم بنجاح",
        "logosFetched": "تم جلب الشعارات بنجاح",
        "logosFetchedLegacy": "تم جلب الشعارات بالتنسيق القديم بنجاح",
        "noLogos": "لا توجد شعارات متاحة",
        "logoNotFound": "الشعار غير موجود",
        "invalidLogoId": "معرف الشعار غير صحيح",
        "legacyNotSupported": "هذا الشعار لا يدعم التنسيق القديم",
        "validationError": "خطأ في التحقق من البيانات",
        "rateLimited": "عدد كبير جدًا من الطلبات. يرجى الانتظار {retry_after} ثانية قبل إعادة المحاولة.",
        "serverError": "خطأ في الخادم",
        "logoCreatedOn": "تم إنشاء الشعار في {date}",
    },
}

_MONTHS = {
    ENGLISH: (
        "January", "February", "March", "April", "May", "June", "July",
        "August", "September", "October", "November", "December",
    ),
    ARABIC: (
        "يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو", "يوليو",
        "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر",
    ),
}
_MERIDIEM = {ENGLISH: ("AM", "PM"), ARABIC: ("ص", "م")}
_ARABIC_INDIC_DIGITS = str.maketrans("0123456789", "٠١٢٣٤٥٦٧٨٩")


def normalize_language(tag: Optional[str]) -> str:
    """
    Map a language tag onto the closed set of supported languages.

    Region subtags are ignored ("ar-SA" → "ar"). Absent or unrecognized tags
    resolve to the configured default.
    """
    if not tag:
        return settings.default_language
    primary = tag.strip().lower().replace("_", "-").split("-")[0]
    if primary in SUPPORTED_LANGUAGES:
        return primary
    return settings.default_language


def language_from_accept_header(header: Optional[str]) -> Optional[str]:
    """
    Pick the best supported language from an Accept-Language header.

    Entries are ranked by their q-value (default 1.0, header order breaks
    ties); entries with q=0 are refused. Returns None when nothing matches.
    """
    if not header:
        return None

    candidates = []
    for position, part in enumerate(header.split(",")):
        pieces = [p.strip() for p in part.split(";")]
        tag = pieces[0].lower()
        if not tag or tag == "*":
            continue
        quality = 1.0
        for param in pieces[1:]:
            if param.startswith("q="):
                try:
                    quality = float(param[2:])
                except ValueError:
                    quality = 0.0
        if quality <= 0:
            continue
        candidates.append((-quality, position, tag.split("-")[0]))

    for _, _, primary in sorted(candidates):
        if primary in SUPPORTED_LANGUAGES:
            return primary
    return None


def resolve_request_language(
    query_lang: Optional[str], accept_language: Optional[str]
) -> str:
    """
    Resolve a request's language: `?lang=` wins, then Accept-Language,
    then the configured default.
    """
    if query_lang:
        primary = query_lang.strip().lower().split("-")[0]
        if primary in SUPPORTED_LANGUAGES:
            return primary
    from_header = language_from_accept_header(accept_language)
    if from_header:
        return from_header
    return settings.default_language


def text_direction(lang: str) -> str:
    """Arabic reads right-to-left; every other language left-to-right."""
    return "rtl" if lang == ARABIC else "ltr"


def _first_present(values: Iterable[Optional[str]]) -> Optional[str]:
    for value in values:
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def resolve_localized(
    lang: str,
    en: Optional[str] = None,
    ar: Optional[str] = None,
    generic: Optional[str] = None,
) -> Optional[str]:
    """
    Select the display value of one bilingual field.

    Example:
        >>> resolve_localized("ar", en="Foo", ar=None, generic="Bar")
        'Foo'
        >>> resolve_localized("en", en=None, ar=None, generic="Bar")
        'Bar'
    """
    if lang == ARABIC:
        return _first_present((ar, en, generic))
    return _first_present((en, generic))


def get_message(lang: str, key: str, **params) -> str:
    """
    Look up a localized message, falling back to the default language and
    finally to the key itself. `{name}` placeholders are filled from params.
    """
    catalog = MESSAGES.get(lang) or MESSAGES[settings.default_language]
    template = catalog.get(key) or MESSAGES[ENGLISH].get(key, key)
    if params:
        return template.format(**params)
    return template


def _as_utc(value: Union[datetime, str, None]) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if value.tzinfo is None:
        # Naive timestamps come from TIMESTAMP columns and are stored in UTC
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_localized_datetime(
    value: Union[datetime, str, None], lang: str
) -> Optional[str]:
    """
    Human-readable UTC timestamp for display in the client.

        en: "October 15, 2025 at 09:03 PM"
        ar: "١٥ أكتوبر ٢٠٢٥، ٠٩:٠٣ م"
    """
    moment = _as_utc(value)
    if moment is None:
        return None

    lang = lang if lang in _MONTHS else ENGLISH
    hour12 = moment.hour % 12 or 12
    meridiem = _MERIDIEM[lang][0 if moment.hour < 12 else 1]
    month = _MONTHS[lang][moment.month - 1]

    if lang == ARABIC:
        text = f"{moment.day} {month} {moment.year:04d}، {hour12:02d}:{moment.minute:02d} {meridiem}"
        return text.translate(_ARABIC_INDIC_DIGITS)
    return f"{month} {moment.day}, {moment.year:04d} at {hour12:02d}:{moment.minute:02d} {meridiem}"


def to_iso8601(value: Union[datetime, str, None]) -> Optional[str]:
    """UTC ISO-8601 with millisecond precision and a trailing Z."""
    moment = _as_utc(value)
    if moment is None:
        return None
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"
