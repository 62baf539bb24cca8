"""
saastax.tax.income_tax
~~~~~~~~~~~~~~~~~~~~~~
Einkommensteuer - progressive German income tax tariff (§ 32a EStG shape).

Five brackets on the taxable income (zu versteuerndes Einkommen, zvE):

    zvE <= 12 348            0
    12 348 < zvE <= 17 799   (914.51·y + 1 400)·y,            y = (zvE − 12 348) / 10 000
    17 799 < zvE <= 69 878   (173.1·z + 2 397)·z + 1 034.87,  z = (zvE − 17 799) / 10 000
    69 878 < zvE <= 277 825  0.42·zvE − 11 135.63
    zvE > 277 825            0.45·zvE − 19 470.38

Keep the constants exactly as written. The tariff joins at 12 348 and
277 825 exactly; at 17 799 and 69 878 the published coefficients leave a
gap of a few cents, which is part of the tariff and must not be smoothed.
"""

from __future__ import annotations

from ..utils import clamp_to_zero

BASIC_ALLOWANCE = 12_348          # Grundfreibetrag
ZONE_2_LIMIT = 17_799
ZONE_3_LIMIT = 69_878
TOP_RATE_THRESHOLD = 277_825      # Reichensteuer


def income_tax(taxable_income: float) -> float:
    """Annual income tax for ``taxable_income``. Never negative."""
    income = clamp_to_zero(taxable_income)

    if income <= BASIC_ALLOWANCE:
        return 0.0

    if income <= ZONE_2_LIMIT:
        y = (income - BASIC_ALLOWANCE) / 10_000
        return clamp_to_zero((914.51 * y + 1_400) * y)

    if income <= ZONE_3_LIMIT:
        z = (income - ZONE_2_LIMIT) / 10_000
        return clamp_to_zero((173.1 * z + 2_397) * z + 1_034.87)

    if income <= TOP_RATE_THRESHOLD:
        return clamp_to_zero(0.42 * income - 11_135.63)

    return clamp_to_zero(0.45 * income - 19_470.38)


clamped_income_tax = income_tax


def average_income_tax_rate(taxable_income: float) -> float:
    """Income tax as a share of ``taxable_income`` (0 for no income)."""
    income = clamp_to_zero(taxable_income)
    if income <= 0:
        return 0.0
    return income_tax(income) / income
