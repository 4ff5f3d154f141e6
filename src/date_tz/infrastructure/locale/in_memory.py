from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence

BUILTIN_MONTH_NAMES: Dict[str, Sequence[str]] = {
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    "it": (
        "gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
        "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre",
    ),
    "fr": (
        "janvier", "février", "mars", "avril", "mai", "juin",
        "juillet", "août", "septembre", "octobre", "novembre", "décembre",
    ),
    "de": (
        "Januar", "Februar", "März", "April", "Mai", "Juni",
        "Juli", "August", "September", "Oktober", "November", "Dezember",
    ),
    "es": (
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ),
}


class InMemoryMonthNames:
    """Month names per locale, looked up by exact locale then language prefix."""

    def __init__(self, names: Optional[Mapping[str, Sequence[str]]] = None) -> None:
        source = BUILTIN_MONTH_NAMES if names is None else names
        self._by_locale: Dict[str, Sequence[str]] = {}
        for locale, months in source.items():
            if len(months) != 12:
                raise ValueError(f"Locale {locale} must define 12 month names, got {len(months)}")
            self._by_locale[self._normalize(locale)] = tuple(months)

    @staticmethod
    def _normalize(locale: str) -> str:
        return locale.replace("-", "_").lower()

    def month_name(self, month_index: int, locale: str) -> str:
        normalized = self._normalize(locale)
        months = self._by_locale.get(normalized) or self._by_locale.get(normalized.split("_")[0])
        if months is None:
            raise LookupError(f"No month names for locale {locale}")
        return months[month_index]

    def upsert(self, locale: str, months: Sequence[str]) -> None:
        if len(months) != 12:
            raise ValueError(f"Locale {locale} must define 12 month names, got {len(months)}")
        self._by_locale[self._normalize(locale)] = tuple(months)
