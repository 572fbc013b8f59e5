"""Template rendering helpers shared by the Flask views."""
from __future__ import annotations

from typing import Any, Dict

from flask import Flask, render_template

VIEW_TEMPLATES: Dict[str, str] = {
    "index": "index.html",
    "all_data": "all_data.html",
    "listing_detail": "listing_detail.html",
    "search_id_form": "search_id_form.html",
    "search_name_form": "search_name_form.html",
    "search_name_result": "search_name_result.html",
    "view_data": "view_data.html",
    "view_data_clean": "view_data_clean.html",
    "price_form": "price_form.html",
    "price_result": "price_result.html",
    "error": "error.html",
}

_EMPTY_FEE_STYLE = "background-color:#ffe8e8; font-weight:bold;"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def format_service_fee(fee: Any) -> Any:
    """Show blank service fees as ``0``."""

    if _is_blank(fee):
        return "0"
    return fee


def highlight_if_empty(fee: Any) -> str:
    if _is_blank(fee):
        return _EMPTY_FEE_STYLE
    return ""


def format_amount(value: float) -> str:
    """Render ``100.0`` as ``100`` and ``99.5`` as ``99.5``."""

    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def register_template_helpers(app: Flask) -> None:
    app.add_template_filter(format_service_fee)
    app.add_template_filter(highlight_if_empty)
    app.add_template_filter(format_amount)


def render_view(view: str, **payload: Any) -> str:
    """Render the template registered for ``view`` with ``payload``."""

    try:
        template = VIEW_TEMPLATES[view]
    except KeyError:
        raise ValueError(f"Unknown view: {view}") from None
    payload.setdefault("title", "")
    return render_template(template, **payload)
