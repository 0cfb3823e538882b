"""Presentation-time filtering and sorting of an assembled offer list.

A pure view transform: all filters are applied first, then one sort.
Nothing is regenerated and the input list is never modified.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from utils import hour_of, parse_duration

STOP_FILTERS = ("all", "nonstop", "1stop")
SORT_MODES = ("recommended", "cheapest", "fastest")

# [start, end) hours of day
DEPARTURE_BUCKETS = {
    "early-morning": (0, 6),
    "morning": (6, 12),
    "afternoon": (12, 18),
    "evening": (18, 24),
}

# Price ceiling the CLI applies unless told otherwise
DEFAULT_MAX_PRICE = 50000


@dataclass
class FilterOptions:
    sort_by: str = "recommended"
    stops: str = "all"
    airlines: List[str] = field(default_factory=list)
    max_price: Optional[int] = None
    departure_time: Optional[str] = None


def matches_stops(offer, stops):
    if stops == "nonstop":
        return offer.stops == 0
    if stops == "1stop":
        return offer.stops == 1
    return True


def matches_airlines(offer, airlines):
    return not airlines or offer.airline in airlines


def matches_departure_time(offer, bucket):
    window = DEPARTURE_BUCKETS.get(bucket)
    if not window:
        return True
    start, end = window
    return start <= hour_of(offer.departure_time) < end


def matches_price(offer, max_price):
    return max_price is None or offer.price <= max_price


def filter_offers(offers, stops="all", airlines=None, departure_time=None,
                  max_price=None):
    """Offers passing every filter, in their original order."""
    return [
        offer for offer in offers
        if matches_stops(offer, stops)
        and matches_airlines(offer, airlines)
        and matches_departure_time(offer, departure_time)
        and matches_price(offer, max_price)
    ]


def recommended_score(offer):
    return offer.price * 0.7 + offer.stops * 100


def _duration_key(offer):
    minutes = parse_duration(offer.duration)
    return float("inf") if minutes is None else minutes


def sort_offers(offers, sort_by):
    """Stable sort by mode; an unknown mode keeps the received order."""
    if sort_by == "cheapest":
        return sorted(offers, key=lambda o: o.price)
    if sort_by == "fastest":
        return sorted(offers, key=_duration_key)
    if sort_by == "recommended":
        return sorted(offers, key=recommended_score)
    return list(offers)


def apply_filters(offers, options):
    """Filter then sort according to a FilterOptions."""
    filtered = filter_offers(
        offers,
        stops=options.stops,
        airlines=options.airlines,
        departure_time=options.departure_time,
        max_price=options.max_price,
    )
    return sort_offers(filtered, options.sort_by)
