"""Price statistics for listing collections."""
from __future__ import annotations

from typing import Dict, Iterable

import pandas as pd

from .models import Listing
from .query import parse_price


def prices_to_series(listings: Iterable[Listing]) -> pd.Series:
    """Convert listing prices into a float :class:`~pandas.Series`.

    Unparseable prices become ``NaN``.
    """

    values = [parse_price(listing.price) for listing in listings]
    return pd.Series(values, dtype="float64")


def summarise_prices(listings: Iterable[Listing]) -> Dict[str, float]:
    """Return simple statistics across all listings with a usable price."""

    prices = prices_to_series(listings).dropna()
    if prices.empty:
        return {"count": 0, "average_price": 0.0, "min_price": 0.0, "max_price": 0.0}

    return {
        "count": int(prices.count()),
        "average_price": float(prices.mean()),
        "min_price": float(prices.min()),
        "max_price": float(prices.max()),
    }
