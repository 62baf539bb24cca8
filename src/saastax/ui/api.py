"""
saastax.ui.api
~~~~~~~~~~~~~~
FastAPI backend for the saastax web UI.

Stateless: every request recomputes the scenario from its query parameters.

Endpoints
---------
GET /health                      - Liveness
GET /config                      - Default calculator inputs + supported locales
GET /calculate?revenue=70000     - Deduction ledger, planning and formatted strings
GET /income-tax?income=45000     - Income tax and average rate for a taxable income
GET /translations/{locale}       - Display strings for ``de`` / ``en``
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from saastax.config import Config
from saastax.exceptions import UnsupportedLocaleError
from saastax.planning import plan_scenario
from saastax.tax.income_tax import average_income_tax_rate, income_tax
from saastax.translations import get_translations, step_label
from saastax.utils import SUPPORTED_LOCALES, clamp_to_zero, format_currency, format_percent

logger = logging.getLogger(__name__)

_cfg = Config()

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="saastax API",
    description=(
        "REST API for the saastax library - a rough breakdown of German taxes "
        "and contributions on SaaS revenue."
    ),
    version="0.1.0",
    license_info={"name": "MIT"},
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _checked_locale(locale: str, status_code: int = 422) -> str:
    try:
        get_translations(locale)
    except UnsupportedLocaleError as exc:
        raise HTTPException(status_code=status_code, detail=str(exc)) from exc
    return locale.strip().lower()


# ---------------------------------------------------------------------------
# Meta routes
# ---------------------------------------------------------------------------

@app.get("/health", tags=["meta"])
def health():
    return {"status": "ok"}


@app.get("/config", tags=["meta"])
def get_config():
    """Return the default calculator inputs."""
    d = _cfg.get_scenario_defaults()
    return {
        "locale":                      d.locale,
        "monthly_price":               d.monthly_price,
        "monthly_living_cost":         d.monthly_living_cost,
        "include_app_store_provision": d.include_app_store_provision,
        "include_payment_service":     d.include_payment_service,
        "supported_locales":           list(SUPPORTED_LOCALES),
    }


# ---------------------------------------------------------------------------
# Calculation routes
# ---------------------------------------------------------------------------

@app.get("/calculate", tags=["tax"])
def calculate(
    revenue:             float = Query(..., description="Yearly gross revenue"),
    monthly_price:       Optional[float] = Query(default=None, ge=0),
    monthly_living_cost: Optional[float] = Query(default=None, ge=0),
    app_store:           Optional[bool] = Query(default=None, description="Deduct app store commission"),
    payment_service:     Optional[bool] = Query(default=None, description="Deduct payment service fee"),
    locale:              Optional[str] = Query(default=None, enum=list(SUPPORTED_LOCALES)),
):
    """
    Compute the full scenario for one revenue figure.

    Negative or non-finite revenue is treated as zero and returns an empty
    ledger, never an error. Unset parameters fall back to the configuration.
    """
    d = _cfg.get_scenario_defaults()
    locale = _checked_locale(locale or d.locale)

    report = plan_scenario(
        revenue,
        monthly_price=d.monthly_price if monthly_price is None else monthly_price,
        monthly_living_cost=d.monthly_living_cost if monthly_living_cost is None else monthly_living_cost,
        include_app_store_provision=d.include_app_store_provision if app_store is None else app_store,
        include_payment_service=d.include_payment_service if payment_service is None else payment_service,
    )
    result = report.result
    logger.debug("calculate: revenue=%s locale=%s -> net_income=%.2f", revenue, locale, result.net_income)

    response = report.to_dict()
    response["locale"] = locale
    response["formatted"] = {
        "steps": [
            {
                "id":     s.id,
                "label":  step_label(s.label, locale),
                "base":   format_currency(s.base, locale),
                "amount": format_currency(s.amount, locale),
                "rest":   format_currency(s.rest, locale),
            }
            for s in result.steps
        ],
        "total_taxes":    format_currency(result.total_taxes, locale),
        "net_income":     format_currency(result.net_income, locale),
        "effective_rate": format_percent(result.effective_rate, locale),
    }
    return response


@app.get("/income-tax", tags=["tax"])
def get_income_tax(
    income: float = Query(..., description="Taxable income (zvE)"),
):
    """Income tax and average rate for a taxable income."""
    income = clamp_to_zero(income)
    return {
        "income":       income,
        "income_tax":   income_tax(income),
        "average_rate": average_income_tax_rate(income),
    }


@app.get("/translations/{locale}", tags=["meta"])
def get_locale_strings(locale: str):
    """Display strings for one locale."""
    return get_translations(_checked_locale(locale, 404))
