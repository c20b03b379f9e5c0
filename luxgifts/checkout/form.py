"""Checkout form validation. Problems come back as a field -> message dict."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping

SHIPPING_FIELDS = ("firstName", "lastName", "email", "address", "city", "state", "zipCode", "country", "phone")
ADDRESS_FIELDS = ("firstName", "lastName", "address", "city", "state", "zipCode", "country", "phone")
CARD_METHODS = ("card", "credit_card")

_FIELD_LABELS = {
    "firstName": "First name",
    "lastName": "Last name",
    "email": "Email",
    "address": "Address",
    "city": "City",
    "state": "State",
    "zipCode": "ZIP code",
    "country": "Country",
    "phone": "Phone",
}

_EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
_CARD_NUMBER_RE = re.compile(r"^\d{16}$")
_EXPIRY_RE = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$")
_CVV_RE = re.compile(r"^\d{3,4}$")


def _blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def validate_checkout_form(form: Mapping[str, Any]) -> Dict[str, str]:
    """
    Validate the shipping and payment fields of the checkout form.

    Returns:
        Mapping of field name to message; empty when the form can be submitted
    """
    errors: Dict[str, str] = {}

    for field in SHIPPING_FIELDS:
        if _blank(form.get(field)):
            errors[field] = f"{_FIELD_LABELS[field]} is required"

    email = form.get("email")
    if "email" not in errors and not _EMAIL_RE.search(str(email)):
        errors["email"] = "Please enter a valid email address"

    if _blank(form.get("paymentMethod")):
        errors["paymentMethod"] = "Please select a payment method"
    elif form.get("paymentMethod") in CARD_METHODS:
        errors.update(_validate_card(form))

    return errors


def _validate_card(form: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    number = re.sub(r"[\s-]", "", str(form.get("cardNumber") or ""))
    if not _CARD_NUMBER_RE.match(number):
        errors["cardNumber"] = "Card number must be 16 digits"
    if _blank(form.get("cardName")):
        errors["cardName"] = "Cardholder name is required"
    if not _EXPIRY_RE.match(str(form.get("expiryDate") or "").strip()):
        errors["expiryDate"] = "Expiry date must be in MM/YY format"
    if not _CVV_RE.match(str(form.get("cvv") or "").strip()):
        errors["cvv"] = "CVV must be 3 or 4 digits"
    return errors


def shipping_address(form: Mapping[str, Any]) -> Dict[str, Any]:
    return {field: str(form.get(field) or "").strip() for field in ADDRESS_FIELDS}


def card_details(form: Mapping[str, Any]) -> Dict[str, str]:
    return {
        "cardNumber": re.sub(r"[\s-]", "", str(form.get("cardNumber") or "")),
        "cardName": str(form.get("cardName") or "").strip(),
        "expiryDate": str(form.get("expiryDate") or "").strip(),
        "cvv": str(form.get("cvv") or "").strip(),
    }
