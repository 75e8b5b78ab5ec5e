"""Validation of request bodies against the rules declared on their fields."""

from __future__ import annotations

import re
from collections.abc import Sized
from dataclasses import fields, is_dataclass
from typing import Any

from notesapi.exceptions import validation_error

_UUID = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")

_MESSAGES = {
    "required": "'{}' is required",
    "min": "'{}' should be greater in length",
    "uuid": "'{}' should be an uuid",
}


def _message(tag: str, field_name: str) -> str:
    template = _MESSAGES.get(tag)
    if template is None:
        return f"unmapped error for field {field_name}"
    return template.format(field_name)


def _is_zero(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def _passes(tag: str, param: str | None, value: Any) -> bool:
    if tag == "required":
        return not _is_zero(value)
    if tag == "min":
        limit = int(param or 0)
        if isinstance(value, Sized):
            return len(value) >= limit
        if isinstance(value, (int, float)):
            return value >= limit
        return value is not None
    if tag == "uuid":
        return isinstance(value, str) and _UUID.match(value) is not None
    raise ValueError(f"undefined validation tag {tag!r}")


def _failed_tag(rules: str, value: Any) -> str | None:
    for rule in rules.split(","):
        tag, _, param = rule.partition("=")
        if not _passes(tag, param or None, value):
            return tag
    return None


def validate(request: Any) -> None:
    """Check *request* against its field rules.

    Raises a validation error listing one message per failing field, in
    field order. Raises TypeError when *request* is not a dataclass instance.
    """
    if not is_dataclass(request) or isinstance(request, type):
        raise TypeError(f"cannot validate {type(request).__name__}")
    messages = []
    for spec in fields(request):
        rules = spec.metadata.get("validate")
        if not rules:
            continue
        tag = _failed_tag(rules, getattr(request, spec.name))
        if tag is not None:
            messages.append(_message(tag, spec.metadata.get("json", spec.name)))
    if messages:
        raise validation_error(*messages)