"""In-memory query operations over the loaded dataset."""
from __future__ import annotations

import logging
import math
import re
from typing import Any, Callable, Dict, List, Optional

from .models import Dataset, Listing, QueryResult

LOGGER = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


def parse_price(value: Any) -> Optional[float]:
    """Return the numeric value of a price such as ``"$120.00"``.

    Only the leading number is read, so ``"$1,060"`` is ``1.0`` and
    ``"$75abc"`` is ``75.0``. ``None`` means no leading number was found;
    such listings never match a price range.
    """

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip()
        if cleaned.startswith("$"):
            cleaned = cleaned[1:].strip()
        match = _LEADING_NUMBER.match(cleaned)
        if match is None:
            return None
        if match.end() < len(cleaned):
            LOGGER.debug("Price %r has trailing text, using %s", value, match.group())
        number = float(match.group())
    else:
        return None
    if math.isnan(number):
        return None
    return number


class ListingQuery:
    """Read-only lookups over a :class:`Dataset`."""

    def __init__(self, dataset: Dataset) -> None:
        self.dataset = dataset
        self._operations: Dict[str, Callable[..., Any]] = {
            "preview": self.preview,
            "by_index": self.by_index,
            "by_id": self.by_id,
            "by_name": self.by_name,
            "by_price_range": self.by_price_range,
        }

    def preview(self, limit: int) -> List[Listing]:
        if limit <= 0:
            return []
        return list(self.dataset.listings[:limit])

    def by_index(self, index: int) -> Optional[Listing]:
        # negative positions are out of range, not counted from the end
        if 0 <= index < len(self.dataset):
            return self.dataset.listings[index]
        return None

    def by_id(self, listing_id: str) -> Optional[Listing]:
        """Return the first listing whose id equals ``listing_id`` exactly.

        Ids are not guaranteed unique; the earliest record wins.
        """

        for listing in self.dataset:
            if isinstance(listing.id, str) and listing.id == listing_id:
                return listing
        return None

    def by_name(self, query: str) -> List[Listing]:
        needle = query.casefold()
        matches = [
            listing
            for listing in self.dataset
            if listing.name and needle in listing.name.casefold()
        ]
        LOGGER.debug("Name query %r matched %d listings", query, len(matches))
        return matches

    def by_price_range(self, minimum: float, maximum: float) -> List[Listing]:
        """Listings whose parsed price lies in ``[minimum, maximum]``."""

        matches: List[Listing] = []
        for listing in self.dataset:
            price = parse_price(listing.price)
            if price is None:
                continue
            if minimum <= price <= maximum:
                matches.append(listing)
        LOGGER.debug("Price range %s-%s matched %d listings", minimum, maximum, len(matches))
        return matches

    def execute(self, operation: str, **params: Any) -> QueryResult:
        """Run ``operation`` by name and wrap the outcome in a :class:`QueryResult`."""

        try:
            handler = self._operations[operation]
        except KeyError:
            raise ValueError(f"Unknown query operation: {operation}") from None
        outcome = handler(**params)
        if isinstance(outcome, list):
            return QueryResult.many(operation, outcome)
        return QueryResult.single(operation, outcome)
