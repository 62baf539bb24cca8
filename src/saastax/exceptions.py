"""
saastax.exceptions
~~~~~~~~~~~~~~~~~~
Exception hierarchy for the saastax library.

The calculation core never raises: invalid amounts are normalised to zero.
These exceptions cover the surrounding layers (locales, CLI, web API).
"""

from __future__ import annotations


class SaasTaxError(Exception):
    """Base exception for all saastax errors."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
        self.message = message

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by {type(self.cause).__name__}: {self.cause})"
        return self.message


class UnsupportedLocaleError(SaasTaxError, ValueError):
    """
    Raised when a locale other than ``"de"`` or ``"en"`` is requested.

    Attributes:
        locale: The locale string as it was passed in.
    """

    def __init__(self, locale: object, *, cause: BaseException | None = None) -> None:
        super().__init__(f"Unsupported locale: {locale!r} (expected 'de' or 'en').", cause=cause)
        self.locale = locale
