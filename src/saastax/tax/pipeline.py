"""
saastax.tax.pipeline
~~~~~~~~~~~~~~~~~~~~
Deduction pipeline - what is left of a year's gross SaaS revenue.

Step order
----------
    1. revenue               anchor, nothing deducted
    2. vat                   Umsatzsteuer 19 % of the gross
    3. app-store             store commission 15 % (optional)
    4. payment-service       payment processor fee (optional)
    5. business-tax          Gewerbesteuer 7,6 % above a 24 500 allowance
    6. income-tax            Einkommensteuer, progressive tariff
    7. solidarity-surcharge  5,5 % of the income tax
    8. health-insurance      16,6 % of the post-VAT value, monthly base capped
    9. care-insurance        4,2 % of the post-VAT value

Each step deducts from the running remainder (``rest``). Steps 2–6 also use
that remainder as their base; step 7 is based on the income tax amount and
steps 8–9 on the remainder frozen right after VAT (``after_vat``).

Usage::

    from saastax.tax.pipeline import Options, compute_deduction_pipeline

    result = compute_deduction_pipeline(70_000, Options(subscribers=584))
    print(result.summary("en"))
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from ..translations import get_translations, step_label
from ..utils import clamp_to_zero, format_currency, format_percent
from .income_tax import average_income_tax_rate, income_tax

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Rates and limits
# ---------------------------------------------------------------------------

VAT_RATE = 0.19
APP_STORE_RATE = 0.15
PAYMENT_SERVICE_RATE = 0.015
PAYMENT_SERVICE_FEE_PER_CHARGE = 0.25
CHARGES_PER_SUBSCRIBER_PER_YEAR = 12
BUSINESS_TAX_RATE = 0.076
BUSINESS_TAX_ALLOWANCE = 24_500
SOLIDARITY_RATE = 0.055
HEALTH_INSURANCE_RATE = 0.166
CARE_INSURANCE_RATE = 0.042
# Beitragsbemessungsgrenze / Mindestbemessungsgrundlage, per month
HEALTH_INSURANCE_MAX_MONTHLY = 5_512.5
HEALTH_INSURANCE_MIN_MONTHLY = 1_248.33

STEP_IDS: tuple[str, ...] = (
    "revenue",
    "vat",
    "app-store",
    "payment-service",
    "business-tax",
    "income-tax",
    "solidarity-surcharge",
    "health-insurance",
    "care-insurance",
)

_NO_RATE = "–"


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Options:
    """
    Switches for the optional deductions.

    ``subscribers`` is the number of paying subscribers; each one is charged
    monthly, so it drives the per-charge part of the payment service fee.
    """

    exclude_app_store_provision: bool = False
    exclude_payment_service:     bool = False
    subscribers:                 int = 0

    def __post_init__(self) -> None:
        count = clamp_to_zero(self.subscribers)
        object.__setattr__(self, "subscribers", int(math.floor(count)))
        object.__setattr__(self, "exclude_app_store_provision", bool(self.exclude_app_store_provision))
        object.__setattr__(self, "exclude_payment_service", bool(self.exclude_payment_service))

    def to_dict(self) -> dict:
        return {
            "exclude_app_store_provision": self.exclude_app_store_provision,
            "exclude_payment_service":     self.exclude_payment_service,
            "subscribers":                 self.subscribers,
        }


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DeductionStep:
    """One line of the ledger. ``label`` is a translation key."""

    id:         str
    label:      str
    base:       float
    rate_label: str
    amount:     float
    rest:       float

    def to_dict(self) -> dict:
        return {
            "id":         self.id,
            "label":      self.label,
            "base":       self.base,
            "rate_label": self.rate_label,
            "amount":     self.amount,
            "rest":       self.rest,
        }


@dataclass(frozen=True)
class DeductionResult:
    """
    Full breakdown for one revenue figure.

    ``steps`` is empty when the (clamped) revenue is zero; otherwise it holds
    one entry per id in ``STEP_IDS``, in that order.
    """

    revenue:        float
    steps:          tuple[DeductionStep, ...] = field(default_factory=tuple)
    total_taxes:    float = 0.0
    net_income:     float = 0.0
    effective_rate: float = 0.0

    def step(self, step_id: str) -> Optional[DeductionStep]:
        for s in self.steps:
            if s.id == step_id:
                return s
        return None

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "revenue":        self.revenue,
            "steps":          [s.to_dict() for s in self.steps],
            "total_taxes":    self.total_taxes,
            "net_income":     self.net_income,
            "effective_rate": self.effective_rate,
        }

    def to_json(self, path: str | Path | None = None) -> str:
        raw = json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        if path:
            Path(path).write_text(raw, encoding="utf-8")
        return raw

    def summary(self, locale: str = "de") -> str:
        t = get_translations(locale)
        W = 78
        div = "─" * W
        hdiv = "═" * W

        lines = [
            "=" * W,
            f"  {t['calculation']['title']}",
            "=" * W,
        ]

        if not self.steps:
            lines += [f"  {t['calculation']['enter_revenue']}", "=" * W]
            return "\n".join(lines)

        c = t["calculation"]
        lines += [
            f"  {c['step']:<26} {c['basis']:>12}  {c['rate_amount']:<22} {c['rest']:>12}",
            div,
        ]
        for s in self.steps:
            amount = format_currency(s.amount, locale) if s.amount > 0 else _NO_RATE
            rate = f"{s.rate_label} {amount}"
            lines.append(
                f"  {step_label(s.label, locale):<26} "
                f"{format_currency(s.base, locale):>12}  "
                f"{rate:<22} "
                f"{format_currency(s.rest, locale):>12}"
            )

        sm = t["summary"]
        lines += [
            hdiv,
            f"  {sm['net_after_deductions']:<50} {format_currency(self.net_income, locale):>14}",
            f"  {sm['total_charges']:<50} {format_currency(self.total_taxes, locale):>14}",
            f"  {c['effective_rate']:<50} {format_percent(self.effective_rate, locale):>14}",
            hdiv,
            f"  {sm['disclaimer']}",
            "=" * W,
        ]
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

@dataclass
class PipelineContext:
    """Running state while the steps are built."""

    rest:      float
    after_vat: float = 0.0
    steps:     List[DeductionStep] = field(default_factory=list)

    def push(
        self,
        step_id: str,
        label: str,
        base: float,
        rate_label: str,
        amount: float,
        rest: float | None = None,
    ) -> DeductionStep:
        """Append a step; ``rest`` defaults to the running remainder minus ``amount``."""
        new_rest = self.rest - amount if rest is None else rest
        step = DeductionStep(
            id=step_id,
            label=label,
            base=base,
            rate_label=rate_label,
            amount=amount,
            rest=new_rest,
        )
        self.steps.append(step)
        self.rest = new_rest
        return step


def _payment_service_fee(base: float, subscribers: int) -> float:
    fee = base * PAYMENT_SERVICE_RATE
    fee += subscribers * CHARGES_PER_SUBSCRIBER_PER_YEAR * PAYMENT_SERVICE_FEE_PER_CHARGE
    return min(fee, base)


def compute_deduction_pipeline(revenue: Any, options: Options | None = None) -> DeductionResult:
    """
    Run all deduction steps for an annual gross ``revenue``.

    Invalid revenue (negative, NaN, ±inf, not a number) counts as zero and
    yields an empty result. Never raises for numeric input.
    """
    options = options or Options()
    safe_revenue = clamp_to_zero(revenue)

    if safe_revenue <= 0:
        return DeductionResult(revenue=0.0)

    logger.debug("Deduction pipeline: revenue=%.2f options=%s", safe_revenue, options)

    ctx = PipelineContext(rest=safe_revenue)

    ctx.push("revenue", "revenue", safe_revenue, _NO_RATE, 0.0, rest=safe_revenue)

    vat_base = ctx.rest
    ctx.push("vat", "vat", vat_base, "19%", vat_base * VAT_RATE)
    ctx.after_vat = ctx.rest

    store_base = clamp_to_zero(ctx.rest)
    if options.exclude_app_store_provision:
        ctx.push("app-store", "app_store_provision", store_base, "0%", 0.0)
    else:
        ctx.push("app-store", "app_store_provision", store_base, "15%", store_base * APP_STORE_RATE)

    payment_base = clamp_to_zero(ctx.rest)
    if options.exclude_payment_service:
        ctx.push("payment-service", "payment_service_provision", payment_base, "0%", 0.0)
    else:
        ctx.push(
            "payment-service",
            "payment_service_provision",
            payment_base,
            f"1.5% + {PAYMENT_SERVICE_FEE_PER_CHARGE:.2f}/tx",
            _payment_service_fee(payment_base, options.subscribers),
        )

    business_base = clamp_to_zero(ctx.rest)
    business_taxable = clamp_to_zero(business_base - BUSINESS_TAX_ALLOWANCE)
    ctx.push("business-tax", "business_tax", business_base, "7.6%", business_taxable * BUSINESS_TAX_RATE)

    income_base = clamp_to_zero(ctx.rest)
    income_tax_amount = income_tax(income_base)
    if income_base > 0:
        income_rate_label = f"~{average_income_tax_rate(income_base) * 100:.1f}%"
    else:
        income_rate_label = "progressive"
    ctx.push("income-tax", "income_tax", income_base, income_rate_label, income_tax_amount)

    soli_base = income_tax_amount
    ctx.push("solidarity-surcharge", "solidarity_surcharge", soli_base, "5.5%", soli_base * SOLIDARITY_RATE)

    health_base = ctx.after_vat
    health_monthly = max(
        HEALTH_INSURANCE_MIN_MONTHLY,
        min(HEALTH_INSURANCE_MAX_MONTHLY, health_base / 12),
    )
    health_amount = health_monthly * HEALTH_INSURANCE_RATE * 12
    ctx.push("health-insurance", "health_insurance", health_base, "16.6%", health_amount)

    care_base = ctx.after_vat
    ctx.push("care-insurance", "care_insurance", care_base, "4.2%", care_base * CARE_INSURANCE_RATE)

    total_taxes = sum(s.amount for s in ctx.steps)
    result = DeductionResult(
        revenue=safe_revenue,
        steps=tuple(ctx.steps),
        total_taxes=total_taxes,
        net_income=ctx.rest,
        effective_rate=total_taxes / safe_revenue,
    )
    logger.debug(
        "Deduction pipeline: total_taxes=%.2f net_income=%.2f effective_rate=%.4f",
        result.total_taxes, result.net_income, result.effective_rate,
    )
    return result
