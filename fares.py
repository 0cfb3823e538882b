"""Carrier selection and fare calculation."""

import math
import random
from dataclasses import dataclass

from routes import INTERNATIONAL_CLASSES, RouteClass
from utils import weighted_choice


@dataclass(frozen=True)
class AirlineProfile:
    name: str
    code: str
    market_share: float


# Pool order matters: the cumulative walk returns the first carrier reached.
DOMESTIC_AIRLINES = (
    AirlineProfile("IndiGo", "6E", 0.60),
    AirlineProfile("SpiceJet", "SG", 0.15),
    AirlineProfile("Air India", "AI", 0.12),
    AirlineProfile("Vistara", "UK", 0.08),
    AirlineProfile("GoFirst", "G8", 0.05),
)

INTERNATIONAL_AIRLINES = (
    AirlineProfile("Air India", "AI", 0.20),
    AirlineProfile("IndiGo", "6E", 0.15),
    AirlineProfile("Emirates", "EK", 0.15),
    AirlineProfile("Qatar Airways", "QR", 0.10),
    AirlineProfile("Singapore Airlines", "SQ", 0.08),
    AirlineProfile("Lufthansa", "LH", 0.07),
    AirlineProfile("British Airways", "BA", 0.06),
    AirlineProfile("Thai Airways", "TG", 0.05),
    AirlineProfile("Etihad Airways", "EY", 0.04),
    AirlineProfile("Turkish Airlines", "TK", 0.10),
)

# Base fare range [min, max) per route class
BASE_FARES = {
    RouteClass.TRUNK: (4000, 15000),
    RouteClass.MAJOR: (3500, 12000),
    RouteClass.REGIONAL: (3000, 8000),
    RouteClass.INTERNATIONAL: (15000, 45000),
    RouteClass.LONG_HAUL: (35000, 120000),
}
FALLBACK_FARE_RANGE = (5000, 25000)

AIRLINE_MULTIPLIERS = {
    "IndiGo": 1.0,
    "SpiceJet": 0.9,
    "Air India": 1.1,
    "Vistara": 1.3,
    "GoFirst": 0.85,
    "Emirates": 1.4,
    "Qatar Airways": 1.35,
    "Singapore Airlines": 1.5,
    "Lufthansa": 1.3,
    "British Airways": 1.25,
    "Thai Airways": 1.1,
    "Turkish Airlines": 1.05,
}


def _route_class(value):
    try:
        return RouteClass(value)
    except ValueError:
        return None


def airline_pool(route_class):
    if _route_class(route_class) in INTERNATIONAL_CLASSES:
        return INTERNATIONAL_AIRLINES
    return DOMESTIC_AIRLINES


def select_airline(route_class, rng=None):
    """Market-share weighted carrier for the route class."""
    pool = airline_pool(route_class)
    return weighted_choice([(a, a.market_share) for a in pool], rng)


def calculate_price(route_class, airline, price_multiplier, rng=None):
    """Whole-unit fare: base draw x carrier multiplier x slot multiplier."""
    rng = rng or random.Random()
    low, high = BASE_FARES.get(_route_class(route_class), FALLBACK_FARE_RANGE)
    base = rng.randrange(low, high)
    multiplier = AIRLINE_MULTIPLIERS.get(airline.name, 1.0)
    return math.floor(base * multiplier * price_multiplier)
