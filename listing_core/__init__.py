"""Listing core package: dataset loading, queries and form handling."""
from .config import AppSettings, load_settings
from .loader import DatasetLoadError, load_dataset
from .models import Dataset, Listing, QueryResult
from .query import ListingQuery, parse_price
from .summary import summarise_prices

__all__ = [
    "AppSettings",
    "Dataset",
    "DatasetLoadError",
    "Listing",
    "ListingQuery",
    "QueryResult",
    "load_dataset",
    "load_settings",
    "parse_price",
    "summarise_prices",
]
