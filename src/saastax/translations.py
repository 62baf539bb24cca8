"""
saastax.translations
~~~~~~~~~~~~~~~~~~~~
German and English display strings.

Deduction steps carry a locale-independent ``label`` key (e.g.
``"business_tax"``); front-ends resolve it here. Single source of truth for
the CLI summary and the web API.
"""

from __future__ import annotations

from typing import Any, Dict

from .utils import normalize_locale

TRANSLATIONS: Dict[str, Dict[str, Any]] = {
    "de": {
        "title": "Deutscher SaaS Steuerrechner",
        "subtitle": (
            "Grobe Beispielrechnung für einen einfachen SaaS-Umsatz in Deutschland "
            "– ohne Garantie auf Vollständigkeit oder Richtigkeit."
        ),
        "calculation": {
            "title": "Berechnung",
            "effective_rate": "Effektive Gesamtlast:",
            "step": "Schritt",
            "basis": "Basis",
            "rate_amount": "Prozent / Betrag",
            "rest": "Rest",
            "enter_revenue": "Gib deinen Jahresumsatz ein",
        },
        "summary": {
            "title": "Zusammenfassung",
            "net_after_deductions": "Netto nach allen Abzügen",
            "total_charges": "Gesamte Abgaben (Steuern, Beiträge, Provision)",
            "disclaimer": (
                "Alle Werte dienen nur der groben Orientierung für ein einfaches "
                "SaaS-Szenario und ersetzen keine individuelle Steuerberatung."
            ),
        },
        "planning": {
            "subscribers_needed": "Benötigte Abonnenten:",
            "users": "Nutzer",
            "monthly_living_costs": "Monatliche Lebenshaltungskosten:",
            "monthly_net_income": "Nettoeinkommen pro Monat:",
            "will_make_it": "You're gonna make it!",
            "wont_make_it": "You're not gonna make it",
            "surplus": "Du hast {amount} mehr pro Monat als benötigt.",
            "shortfall": "Dir fehlen {amount} pro Monat.",
        },
        "steps": {
            "revenue": "Umsatz",
            "vat": "Umsatzsteuer 19 %",
            "app_store_provision": "App Store Provision",
            "payment_service_provision": "Zahlungsdienstleister",
            "business_tax": "Gewerbesteuer",
            "income_tax": "Einkommensteuer",
            "solidarity_surcharge": "Solidaritätszuschlag",
            "health_insurance": "Krankenversicherung",
            "care_insurance": "Pflegeversicherung",
        },
    },
    "en": {
        "title": "German SaaS Tax Calculator",
        "subtitle": (
            "Rough example calculation for a simple SaaS revenue in Germany "
            "– no guarantee of completeness or accuracy."
        ),
        "calculation": {
            "title": "Calculation",
            "effective_rate": "Effective Total Rate:",
            "step": "Step",
            "basis": "Basis",
            "rate_amount": "Rate / Amount",
            "rest": "Remaining",
            "enter_revenue": "Enter your yearly revenue",
        },
        "summary": {
            "title": "Summary",
            "net_after_deductions": "Net after all deductions",
            "total_charges": "Total charges (taxes, contributions, commission)",
            "disclaimer": (
                "All values are for rough orientation only for a simple SaaS "
                "scenario and do not replace individual tax advice."
            ),
        },
        "planning": {
            "subscribers_needed": "Subscribers Needed:",
            "users": "Users",
            "monthly_living_costs": "Monthly living costs:",
            "monthly_net_income": "Net income per month:",
            "will_make_it": "You're gonna make it!",
            "wont_make_it": "You're not gonna make it",
            "surplus": "You have {amount} more per month than needed.",
            "shortfall": "You need {amount} more per month.",
        },
        "steps": {
            "revenue": "Revenue",
            "vat": "VAT 19 %",
            "app_store_provision": "App Store Commission",
            "payment_service_provision": "Payment Service Fee",
            "business_tax": "Business Tax",
            "income_tax": "Income Tax",
            "solidarity_surcharge": "Solidarity Surcharge",
            "health_insurance": "Health Insurance",
            "care_insurance": "Care Insurance",
        },
    },
}


def get_translations(locale: str) -> Dict[str, Any]:
    """Return the string table for ``locale`` (case-insensitive)."""
    return TRANSLATIONS[normalize_locale(locale)]


def step_label(label_key: str, locale: str) -> str:
    """Resolve a step label key; unknown keys are returned unchanged."""
    return get_translations(locale)["steps"].get(label_key, label_key)
