"""Flask based web interface for browsing the listing dataset."""
from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, current_app, request
from markupsafe import Markup

from listing_core import AppSettings, Dataset, DatasetLoadError, ListingQuery, load_dataset, load_settings
from listing_core.forms import validate_id_form, validate_name_form, validate_price_form
from listing_core.rendering import format_amount, register_template_helpers, render_view
from listing_core.summary import summarise_prices

LOGGER = logging.getLogger(__name__)


def _query() -> ListingQuery:
    return current_app.extensions["listing_query"]


def _settings() -> AppSettings:
    return current_app.config["LISTING_SETTINGS"]


def index() -> str:
    return render_view("index", title="Airbnb Data Viewer")


def all_data() -> str:
    listings = _query().preview(_settings().preview_limit)
    return render_view(
        "all_data",
        title=f"First {_settings().preview_limit} Airbnb Listings",
        listings=listings,
    )


def _parse_position(index: str) -> Optional[int]:
    if not (index.isascii() and index.isdigit()):
        return None
    try:
        return int(index)
    except ValueError:
        # digit strings beyond the interpreter's int conversion limit
        return None


def listing_by_index(index: str) -> str:
    record = None
    position = _parse_position(index)
    if position is not None:
        record = _query().by_index(position)
    if record is None:
        return render_view(
            "listing_detail",
            title="Property Detail",
            message="No property found at that position",
        )
    return render_view("listing_detail", title="Property Detail", listing=record)


def search_id_form() -> str:
    return render_view("search_id_form", title="Search by Invoice ID")


def search_id_submit() -> str:
    form = validate_id_form(request.form)
    if not form.is_valid:
        return render_view(
            "search_id_form",
            title="Search by Invoice ID",
            errors=form.errors,
            values=form.values,
        )

    result = _query().execute("by_id", listing_id=form.get("property_id"))
    if not result.found:
        return render_view(
            "listing_detail",
            title="Search Result",
            message="No property found with that ID",
        )
    return render_view("listing_detail", title="Search Result", listing=result.record)


def search_name_form() -> str:
    return render_view("search_name_form", title="Search by Property Name")


def search_name_submit() -> str:
    form = validate_name_form(request.form)
    if not form.is_valid:
        return render_view(
            "search_name_form",
            title="Search by Property Name",
            errors=form.errors,
            values=form.values,
        )

    result = _query().execute("by_name", query=form.get("name"))
    if not result.found:
        return render_view(
            "search_name_result",
            title="Search Result",
            message=Markup('No properties found containing "{}"').format(form.escaped("name")),
        )
    return render_view(
        "search_name_result",
        title="Search Results",
        listings=result.records,
        query=form.get("name"),
    )


def view_data() -> str:
    dataset = _query().dataset
    return render_view(
        "view_data",
        title="All Airbnb Data",
        listings=dataset.listings,
        summary=summarise_prices(dataset),
    )


def view_data_clean() -> str:
    return render_view(
        "view_data_clean",
        title="All Airbnb Data(cleaned)",
        listings=_query().dataset.listings,
    )


def price_form() -> str:
    return render_view("price_form", title="Search by Price Range")


def price_submit() -> str:
    form = validate_price_form(request.form)
    if not form.is_valid:
        return render_view(
            "price_form",
            title="Search by Price Range",
            errors=form.errors,
            values=form.values,
        )

    minimum = form.as_float("minPrice")
    maximum = form.as_float("maxPrice")
    result = _query().execute("by_price_range", minimum=minimum, maximum=maximum)
    bounds = f"${format_amount(minimum)} and ${format_amount(maximum)}"
    if not result.found:
        return render_view(
            "price_result",
            title="Search Result",
            message=f"No listings found between {bounds}",
        )
    return render_view(
        "price_result",
        title=f"Listings between {bounds}",
        listings=result.records,
        summary=summarise_prices(result.records),
    )


def wrong_route(error: Exception):
    return render_view("error", title="Error", message="Wrong Route"), 404


def create_app(dataset: Dataset, settings: Optional[AppSettings] = None) -> Flask:
    """Build the Flask application around an already loaded dataset."""

    settings = settings or load_settings()
    app = Flask(__name__)
    app.config["LISTING_SETTINGS"] = settings
    app.extensions["listing_query"] = ListingQuery(dataset)
    register_template_helpers(app)

    app.add_url_rule("/", "index", index)
    app.add_url_rule("/allData", "all_data", all_data)
    app.add_url_rule("/allData/invoiceID/<index>", "listing_by_index", listing_by_index)
    app.add_url_rule("/search/invoiceID", "search_id_form", search_id_form, methods=["GET"])
    app.add_url_rule("/search/invoiceID", "search_id_submit", search_id_submit, methods=["POST"])
    app.add_url_rule("/search/name", "search_name_form", search_name_form, methods=["GET"])
    app.add_url_rule("/search/name", "search_name_submit", search_name_submit, methods=["POST"])
    app.add_url_rule("/viewData", "view_data", view_data)
    app.add_url_rule("/viewData/clean/", "view_data_clean", view_data_clean)
    app.add_url_rule("/viewData/price", "price_form", price_form, methods=["GET"])
    app.add_url_rule("/viewData/price", "price_submit", price_submit, methods=["POST"])

    # unmatched paths and unsupported methods both get the same page
    app.register_error_handler(404, wrong_route)
    app.register_error_handler(405, wrong_route)
    return app


def main() -> None:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)
    try:
        dataset = load_dataset(settings.data_path)
    except DatasetLoadError as exc:
        LOGGER.error("Cannot start without listing data: %s", exc)
        raise SystemExit(1) from exc

    app = create_app(dataset, settings)
    LOGGER.info("Server running at http://%s:%s", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
