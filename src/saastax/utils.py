"""
saastax.utils
~~~~~~~~~~~~~
Number helpers shared by the calculation core and its front-ends.

* ``clamp_to_zero``   - normalise any value to a finite, non-negative float
* ``parse_amount``    - lenient parsing of user-typed amounts ("70000 €", "1,5")
* ``format_currency`` - whole-unit currency strings for ``de`` (EUR) / ``en`` (USD)
* ``format_percent``  - one-decimal percentages in the locale's style
"""

from __future__ import annotations

import logging
import math
import numbers
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from .exceptions import UnsupportedLocaleError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

SUPPORTED_LOCALES: tuple[str, ...] = ("de", "en")

# Everything except digits and the two decimal/grouping marks is noise
_AMOUNT_NOISE = re.compile(r"[^\d.,]")


def normalize_locale(locale: Any) -> str:
    """Return ``"de"`` or ``"en"``; raise ``UnsupportedLocaleError`` otherwise."""
    normalised = str(locale).strip().lower() if locale is not None else ""
    if normalised not in SUPPORTED_LOCALES:
        raise UnsupportedLocaleError(locale)
    return normalised


# ---------------------------------------------------------------------------
# Clamping / parsing
# ---------------------------------------------------------------------------

def clamp_to_zero(value: Any) -> float:
    """
    Coerce ``value`` to a float that is finite and >= 0.

    NaN, ±inf, negative numbers and anything that is not a real number
    (``None``, strings, ...) all become ``0.0``.
    """
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        return 0.0
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return 0.0 if number < 0 else number


def parse_amount(value: Any) -> float:
    """
    Parse an amount typed into a form field.

    Numbers go straight through ``clamp_to_zero``. Strings keep only digits,
    ``.`` and ``,``; the first comma is read as the decimal mark. Whatever
    cannot be parsed comes back as ``0.0``.
    """
    if value is None:
        return 0.0
    if not isinstance(value, str):
        return clamp_to_zero(value)

    cleaned = _AMOUNT_NOISE.sub("", value).replace(",", ".", 1)
    match = re.match(r"\d*\.?\d*", cleaned)
    candidate = match.group(0) if match else ""
    if candidate in ("", "."):
        logger.debug("Could not parse amount from %r", value)
        return 0.0
    return clamp_to_zero(float(candidate))


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def _round_whole(amount: float) -> int:
    try:
        return int(Decimal(repr(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return 0


def _group(number: int, separator: str) -> str:
    return f"{number:,}".replace(",", separator)


def format_currency(amount: float, locale: str = "de") -> str:
    """
    Format ``amount`` as a whole-unit currency string.

    ``de`` → ``"70.000 €"``, ``en`` → ``"$70,000"``. Non-finite amounts
    render as zero.
    """
    locale = normalize_locale(locale)
    is_number = isinstance(amount, (numbers.Real, Decimal)) and not isinstance(amount, bool)
    value = float(amount) if is_number else 0.0
    rounded = _round_whole(value) if math.isfinite(value) else 0
    sign = "-" if rounded < 0 else ""

    if locale == "de":
        return f"{sign}{_group(abs(rounded), '.')} €"
    return f"{sign}${_group(abs(rounded), ',')}"


def format_percent(rate: float, locale: str = "de") -> str:
    """Render a ratio (``0.3456``) as ``"34,6 %"`` (de) or ``"34.6%"`` (en)."""
    locale = normalize_locale(locale)
    text = f"{clamp_to_zero(rate) * 100:.1f}"
    if locale == "de":
        return f"{text.replace('.', ',')} %"
    return f"{text}%"
