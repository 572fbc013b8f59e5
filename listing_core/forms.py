"""Validation for the search and filter forms."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re
from typing import Any, Dict, List, Mapping, Sequence

from markupsafe import Markup, escape

LOGGER = logging.getLogger(__name__)

_NUMERIC_PATTERN = re.compile(r"^[+-]?(?:\d*\.)?\d+$")

FIELD_LABELS = {
    "property_id": "Property ID",
    "name": "Property name",
    "minPrice": "Minimum price",
    "maxPrice": "Maximum price",
}


@dataclass(frozen=True)
class FieldError:
    """A single message attached to one form field."""

    field: str
    message: str
    value: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message, "value": self.value}


@dataclass
class ValidatedForm:
    """Trimmed form values together with any validation errors."""

    values: Dict[str, str] = field(default_factory=dict)
    errors: List[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def get(self, name: str, default: str = "") -> str:
        return self.values.get(name, default)

    def escaped(self, name: str) -> Markup:
        """HTML-escaped value of ``name`` for echoing back into a page."""

        return escape(self.values.get(name, ""))

    def as_float(self, name: str) -> float:
        return float(self.values[name])

    def error_messages(self) -> List[str]:
        return [error.message for error in self.errors]


def is_numeric(value: str) -> bool:
    return bool(_NUMERIC_PATTERN.match(value))


def _clean(form_data: Mapping[str, Any], name: str) -> str:
    raw = form_data.get(name)
    if raw is None:
        return ""
    return str(raw).strip()


def _validate(
    form_data: Mapping[str, Any],
    required: Sequence[str],
    numeric: Sequence[str] = (),
) -> ValidatedForm:
    form = ValidatedForm()
    for name in required:
        value = _clean(form_data, name)
        form.values[name] = value
        label = FIELD_LABELS.get(name, name)
        if not value:
            form.errors.append(FieldError(name, f"{label} is required"))
        elif name in numeric and not is_numeric(value):
            form.errors.append(FieldError(name, f"{label} must be a number", value))
    if form.errors:
        LOGGER.warning("Rejected form input: %s", "; ".join(form.error_messages()))
    return form


def validate_id_form(form_data: Mapping[str, Any]) -> ValidatedForm:
    return _validate(form_data, required=["property_id"], numeric=["property_id"])


def validate_name_form(form_data: Mapping[str, Any]) -> ValidatedForm:
    return _validate(form_data, required=["name"])


def validate_price_form(form_data: Mapping[str, Any]) -> ValidatedForm:
    """Validate the ``minPrice``/``maxPrice`` pair.

    Both bounds are required and must be plain decimal numbers. A minimum
    above the maximum is accepted; it simply matches nothing.
    """

    return _validate(form_data, required=["minPrice", "maxPrice"], numeric=["minPrice", "maxPrice"])

