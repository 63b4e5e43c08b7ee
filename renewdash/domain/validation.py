"""Field-level checks applied to form drafts before submission."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Literal, Mapping, Optional

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[0-9+\-\s()]+$")

RuleKind = Literal["text", "choice", "email", "phone", "number"]

INVALID_EMAIL = "Format email tidak valid"
INVALID_PHONE = "Format nomor WhatsApp tidak valid"


@dataclass(frozen=True)
class FieldRule:
    """Validation rule for one draft field.

    ``required_message`` is reported when a required field is blank; a
    ``choice`` field is blank when it holds ``None``, ``""`` or ``0``.
    """
    name: str
    kind: RuleKind = "text"
    required: bool = False
    required_message: str = ""
    min_length: int = 0
    min_length_message: str = ""
    format_message: str = ""


def is_blank(value: Any, kind: RuleKind = "text") -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if kind == "choice" and value == 0:
        return True
    return False


def check_field(rule: FieldRule, value: Any) -> Optional[str]:
    """Return the error message for ``value`` or ``None`` when it passes."""
    if is_blank(value, rule.kind):
        if rule.required:
            return rule.required_message or f"{rule.name} wajib diisi"
        return None
    text = str(value).strip()
    if rule.kind == "email" and not EMAIL_RE.match(text):
        return rule.format_message or INVALID_EMAIL
    if rule.kind == "phone" and not PHONE_RE.match(text):
        return rule.format_message or INVALID_PHONE
    if rule.kind == "number":
        try:
            number = float(value)
        except (TypeError, ValueError):
            return rule.format_message or f"{rule.name} harus berupa angka"
        if number < 0:
            return rule.format_message or f"{rule.name} tidak boleh negatif"
    if rule.min_length and len(text) < rule.min_length:
        return rule.min_length_message or f"{rule.name} minimal {rule.min_length} karakter"
    return None


def validate(rules: Iterable[FieldRule], draft: Mapping[str, Any]) -> Dict[str, str]:
    """Evaluate ``rules`` against ``draft`` and return a field -> message map."""
    errors: Dict[str, str] = {}
    for rule in rules:
        message = check_field(rule, draft.get(rule.name))
        if message:
            errors[rule.name] = message
    return errors


__all__ = [
    "EMAIL_RE",
    "FieldRule",
    "INVALID_EMAIL",
    "INVALID_PHONE",
    "PHONE_RE",
    "check_field",
    "is_blank",
    "validate",
]
