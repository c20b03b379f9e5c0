"""
Redaction of payment and identity fields before payloads reach the log.
"""

from typing import Any, Dict

_SENSITIVE_KEYS = (
    'cardnumber', 'card_number', 'cvv', 'expiry', 'password', 'token',
    'secret', 'signature', 'phone', 'email',
)


def redact_sensitive_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of ``data`` with card, credential and contact fields masked.
    Nested dicts and lists of dicts are walked.
    """
    redacted = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in _SENSITIVE_KEYS):
            redacted[key] = '[REDACTED]'
        elif isinstance(value, dict):
            redacted[key] = redact_sensitive_data(value)
        elif isinstance(value, list):
            redacted[key] = [
                redact_sensitive_data(item) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            redacted[key] = value
    return redacted
