# app/services/status_rules.py
"""
Normalization rules applied to incoming payloads before they are stored.

- Reservation status: free-form / alias input → canonical value, or None
  when unrecognized (the caller then leaves the field untouched).
- Contract second driver: an all-blank record is stored as NULL.
"""

from typing import Optional

RESERVATION_STATUSES = ("en_cours", "validee", "annulee", "fin_de_periode")

STATUS_ALIASES = {
    "en_cours": ("en_cours", "ongoing", "in_progress", "in progress", "encours"),
    "validee": ("validee", "validated", "confirmed", "confirmé", "confirm", "valide"),
    "annulee": ("annulee", "cancelled", "cancel", "annule", "canceled"),
    "fin_de_periode": ("fin_de_periode", "ended", "finished", "complete", "completed"),
}

_ALIAS_LOOKUP = {alias: canonical for canonical, aliases in STATUS_ALIASES.items() for alias in aliases}

SECOND_DRIVER_FIELDS = (
    "nom",
    "nationalite",
    "date_naissance",
    "adresse",
    "telephone",
    "adresse_etranger",
    "permis_numero",
    "permis_delivre_le",
    "passeport_cin",
    "passeport_delivre_le",
)


def normalize_status(value) -> Optional[str]:
    """Canonical reservation status for `value`, or None if it isn't recognized."""
    if value is None:
        return None
    key = str(value).strip().lower()
    if key in RESERVATION_STATUSES:
        return key
    return _ALIAS_LOOKUP.get(key)


def _is_blank(value) -> bool:
    return value is None or str(value).strip() == ""


def is_second_driver_empty(second_driver) -> bool:
    """True when there is no second driver or all ten identity fields are blank."""
    if not second_driver:
        return True
    if not isinstance(second_driver, dict):
        second_driver = dict(second_driver)
    return all(_is_blank(second_driver.get(field)) for field in SECOND_DRIVER_FIELDS)


def clean_second_driver(second_driver) -> Optional[dict]:
    """Value to persist: None for an empty record, the record otherwise."""
    if is_second_driver_empty(second_driver):
        return None
    return dict(second_driver)
