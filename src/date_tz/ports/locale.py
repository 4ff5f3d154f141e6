from typing import Protocol


class MonthNamePort(Protocol):
    """Locale-aware month names."""

    def month_name(self, month_index: int, locale: str) -> str:
        """Return the name of the zero-based ``month_index``; raise ``LookupError`` for unknown locales."""
        ...
