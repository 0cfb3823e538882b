"""Synthetic flight offers for routes with no live inventory.

Offers are assembled from the airport directory, the route profile, a
generated departure schedule and a weighted carrier draw. Every random
step takes an injectable ``random.Random`` so a seeded run reproduces the
same offer set.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional, Tuple

import config
import live_traffic
from airports import resolve
from errors import UnresolvedAirport
from fares import calculate_price, select_airline
from routes import RouteClass, classify
from schedule import generate_time_slots
from utils import add_minutes_to_time, days_crossed, format_duration, parse_duration

logger = logging.getLogger(__name__)

MIN_DURATION_MINUTES = 60
CRUISE_KM_PER_MINUTE = 15
INDIRECT_STOP_PROBABILITY = 0.3
ON_TIME_RANGE = (75, 95)

CABIN_CLASSES = ("Economy", "Premium Economy", "Business", "First")

AMENITIES = {
    "basic": ("Complimentary snacks", "Water", "Entertainment system"),
    "premium": ("Complimentary meal", "Beverages", "WiFi",
                "Entertainment system", "Extra legroom"),
    "luxury": ("Gourmet dining", "Premium beverages", "WiFi",
               "Lie-flat seats", "Priority boarding", "Lounge access"),
}

# Full-service domestic carriers get the premium tier
PREMIUM_DOMESTIC_CARRIERS = frozenset({"Vistara", "Air India"})

AIRCRAFT = {
    "regional": ("ATR 72", "Embraer E190", "Bombardier Q400"),
    "domestic": ("Airbus A320", "Airbus A321", "Boeing 737-800", "Boeing 737 MAX"),
    "international": ("Airbus A330", "Boeing 787", "Airbus A350", "Boeing 777"),
    "long_haul": ("Boeing 777-300ER", "Airbus A350-900", "Boeing 787-9", "Airbus A380"),
}

TERMINALS = {
    "DEL": {"6E": "T1", "SG": "T1", "AI": "T3", "UK": "T3", "EK": "T3"},
    "BOM": {"6E": "T1", "SG": "T1", "AI": "T2", "UK": "T2", "EK": "T2"},
    "BLR": {"6E": "T1", "SG": "T1", "AI": "T1", "UK": "T1", "EK": "T1"},
}
DEFAULT_TERMINAL = "T1"


@dataclass(frozen=True)
class Baggage:
    checked_bag: str
    carry_on: str
    additional_fee: str


DOMESTIC_BAGGAGE = Baggage(checked_bag="15kg", carry_on="7kg", additional_fee="Yes")
INTERNATIONAL_BAGGAGE = Baggage(checked_bag="23kg", carry_on="7kg", additional_fee="No")


@dataclass(frozen=True)
class Endpoint:
    airport: str
    time: str
    date: str
    terminal: str


@dataclass(frozen=True)
class FlightOffer:
    id: str
    airline: str
    flight_number: str
    departure: Endpoint
    arrival: Endpoint
    duration: str
    stops: int
    price: int
    currency: str
    aircraft: str
    amenities: Tuple[str, ...]
    baggage: Baggage
    on_time_performance: int
    route_class: str
    cabin_classes: Tuple[str, ...] = CABIN_CLASSES
    live_data: bool = False
    live_tracking: Optional[live_traffic.LiveTracking] = None

    @property
    def departure_time(self):
        return self.departure.time

    @property
    def duration_minutes(self):
        return parse_duration(self.duration)


@dataclass
class TripResults:
    outbound: list
    inbound: Optional[list] = field(default=None)


# ── Per-offer attributes ─────────────────────────────────────────────

def calculate_duration(profile, rng):
    """Block time in minutes: cruise + taxi + up to ±15 min noise, floor 60."""
    base = math.floor(profile.distance_km / CRUISE_KM_PER_MINUTE)
    taxi = 45 if profile.route_class == RouteClass.LONG_HAUL else 30
    variation = rng.randrange(-15, 15)
    return max(MIN_DURATION_MINUTES, base + taxi + variation)


def get_amenities(airline, profile):
    if profile.route_class == RouteClass.LONG_HAUL:
        return AMENITIES["luxury"]
    if profile.route_class == RouteClass.INTERNATIONAL:
        return AMENITIES["premium"]
    if airline.name in PREMIUM_DOMESTIC_CARRIERS:
        return AMENITIES["premium"]
    return AMENITIES["basic"]


def get_baggage(profile):
    return INTERNATIONAL_BAGGAGE if profile.is_international else DOMESTIC_BAGGAGE


def select_aircraft(profile, rng):
    pool = AIRCRAFT.get(profile.route_class.value, AIRCRAFT["domestic"])
    return rng.choice(pool)


def get_terminal(iata, airline_code):
    return TERMINALS.get(iata, {}).get(airline_code, DEFAULT_TERMINAL)


def _stops(profile, rng):
    if profile.direct_route:
        return 0
    return 1 if rng.random() < INDIRECT_STOP_PROBABILITY else 0


# ── Assembly ─────────────────────────────────────────────────────────

def assemble_offers(query, origin, destination, profile, slots, rng=None):
    """One complete FlightOffer per slot, returned cheapest first."""
    rng = rng or random.Random()
    departure_date = query.departure_date.isoformat()
    offers = []

    for index, slot in enumerate(slots):
        airline = select_airline(profile.route_class, rng)
        duration = calculate_duration(profile, rng)
        block = duration + slot.delay_minutes
        arrival_date = query.departure_date + timedelta(
            days=days_crossed(slot.departure, block))

        offers.append(FlightOffer(
            id=f"{origin.iata}-{destination.iata}-{index}",
            airline=airline.name,
            flight_number=f"{airline.code}{rng.randint(100, 999)}",
            departure=Endpoint(
                airport=origin.iata,
                time=slot.departure,
                date=departure_date,
                terminal=get_terminal(origin.iata, airline.code),
            ),
            arrival=Endpoint(
                airport=destination.iata,
                time=add_minutes_to_time(slot.departure, block),
                date=arrival_date.isoformat(),
                terminal=get_terminal(destination.iata, airline.code),
            ),
            duration=format_duration(duration),
            stops=_stops(profile, rng),
            price=calculate_price(profile.route_class, airline,
                                  slot.price_multiplier, rng),
            currency=config.CURRENCY,
            aircraft=select_aircraft(profile, rng),
            amenities=get_amenities(airline, profile),
            baggage=get_baggage(profile),
            on_time_performance=rng.randint(*ON_TIME_RANGE),
            route_class=profile.route_class.value,
        ))

    offers.sort(key=lambda o: o.price)
    return offers


# ── Engine entry points ──────────────────────────────────────────────

def _resolve_endpoints(origin_code, destination_code):
    origin = resolve(origin_code)
    if not origin:
        raise UnresolvedAirport(origin_code, "origin")
    destination = resolve(destination_code)
    if not destination:
        raise UnresolvedAirport(destination_code, "destination")
    return origin, destination


def search_flights(query, rng=None, live_client=live_traffic.FROM_CONFIG):
    """Fare-ascending synthetic offers for a validated SearchQuery.

    Raises UnresolvedAirport when either code is not in the directory.
    Live traffic, when available, decorates the first few offers and
    never changes which offers are returned or their order.
    """
    rng = rng or random.Random()
    origin, destination = _resolve_endpoints(query.origin, query.destination)

    profile = classify(origin.iata, destination.iata)
    logger.info(f"search_flights: {origin.iata}->{destination.iata}, "
                f"{query.departure_date}, {profile.flight_count} flights, "
                f"{profile.route_class.value} route")

    slots = generate_time_slots(profile.flight_count, profile.route_class, rng)
    offers = assemble_offers(query, origin, destination, profile, slots, rng)
    return live_traffic.decorate_with_live_traffic(offers, origin, live_client)


def search_trip(query, rng=None, live_client=live_traffic.FROM_CONFIG):
    """Outbound offers plus, for round trips, an independent return set."""
    rng = rng or random.Random()
    outbound = search_flights(query, rng, live_client)
    if not query.is_round_trip:
        return TripResults(outbound=outbound)

    return_query = query.model_copy(update={
        "origin": query.destination,
        "destination": query.origin,
        "departure_date": query.return_date,
        "return_date": None,
        "trip_type": "oneWay",
    })
    inbound = search_flights(return_query, rng, live_client)
    return TripResults(outbound=outbound, inbound=inbound)
