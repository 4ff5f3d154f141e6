from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Dict, Optional

from date_tz.ports.locale import MonthNamePort

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "YYYY-MM-DD HH:mm:ss"

ENGLISH_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Literals first, then longest tokens before their prefixes.
TOKEN_PATTERN = re.compile(r"\[[^\]]*\]|YYYY|yyyy|YY|yy|MM|LM|DD|HH|hh|mm|ss|aa|AA|tz")


def month_name(month_index: int, locale: Optional[str], provider: Optional[MonthNamePort]) -> str:
    """Name of the zero-based month, capitalized, falling back to English."""
    fallback = ENGLISH_MONTH_NAMES[month_index]
    if provider is None:
        return fallback
    try:
        name = provider.month_name(month_index, locale or "en")
    except Exception as e:
        logger.debug("Month name lookup failed for locale %r: %s", locale, e)
        return fallback
    if not name:
        return fallback
    return name[0].upper() + name[1:]


def token_values(
    local: datetime,
    zone: str,
    locale: Optional[str] = None,
    month_names: Optional[MonthNamePort] = None,
) -> Dict[str, str]:
    year = f"{local.year:04d}"
    hour12 = local.hour % 12 or 12
    is_pm = local.hour >= 12
    return {
        "YYYY": year,
        "yyyy": year,
        "YY": year[-2:],
        "yy": year[-2:],
        "MM": f"{local.month:02d}",
        "LM": month_name(local.month - 1, locale, month_names),
        "DD": f"{local.day:02d}",
        "HH": f"{local.hour:02d}",
        "hh": f"{hour12:02d}",
        "mm": f"{local.minute:02d}",
        "ss": f"{local.second:02d}",
        "aa": "pm" if is_pm else "am",
        "AA": "PM" if is_pm else "AM",
        "tz": zone,
    }


def render(
    local: datetime,
    zone: str,
    pattern: str = DEFAULT_FORMAT,
    locale: Optional[str] = None,
    month_names: Optional[MonthNamePort] = None,
) -> str:
    """Substitutes pattern tokens with fields of the local wall-clock view.

    ``local`` is the UTC instant already shifted by the zone offset; its
    tzinfo, if any, is ignored. Bracketed spans are copied without the
    brackets and without substitution.
    """
    values = token_values(local, zone, locale, month_names)

    def substitute(match: re.Match) -> str:
        token = match.group(0)
        if token.startswith("[") and token.endswith("]"):
            return token[1:-1]
        return values.get(token, token)

    return TOKEN_PATTERN.sub(substitute, pattern)
