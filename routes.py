"""Route classification: override table first, distance heuristics otherwise."""

import logging
import math
from dataclasses import dataclass
from enum import Enum

from airports import resolve
from utils import haversine_km

logger = logging.getLogger(__name__)

FALLBACK_DISTANCE_KM = 2000
LONG_HAUL_KM = 5000
DIRECT_MAX_KM = 3000


class RouteClass(str, Enum):
    TRUNK = "trunk"
    MAJOR = "major"
    REGIONAL = "regional"
    INTERNATIONAL = "international"
    LONG_HAUL = "long_haul"


INTERNATIONAL_CLASSES = frozenset({RouteClass.INTERNATIONAL, RouteClass.LONG_HAUL})


@dataclass(frozen=True)
class RouteProfile:
    flight_count: int
    route_class: RouteClass
    direct_route: bool
    popularity: str
    distance_km: int

    @property
    def is_international(self):
        return self.route_class in INTERNATIONAL_CLASSES


def _profile(count, route_class, direct, popularity, distance):
    return RouteProfile(count, RouteClass(route_class), direct, popularity, distance)


# Authored routes, looked up in either direction
ROUTE_OVERRIDES = {
    # Indian trunk routes
    ("DEL", "BOM"): _profile(18, "trunk", True, "very_high", 1150),
    ("DEL", "BLR"): _profile(15, "trunk", True, "high", 1750),
    # Major domestic
    ("BOM", "BLR"): _profile(12, "major", True, "high", 850),
    ("DEL", "MAA"): _profile(10, "major", True, "medium", 1750),
    ("DEL", "CCU"): _profile(8, "major", True, "medium", 1300),
    # Regional
    ("DEL", "PNQ"): _profile(6, "regional", True, "medium", 1100),
    ("BOM", "GOI"): _profile(8, "regional", True, "medium", 450),
    ("BLR", "COK"): _profile(6, "regional", True, "medium", 450),
    ("DEL", "JAI"): _profile(5, "regional", True, "low", 250),
    ("DEL", "DED"): _profile(4, "regional", True, "low", 250),
    # International
    ("DEL", "DXB"): _profile(8, "international", True, "high", 2200),
    ("BOM", "DXB"): _profile(6, "international", True, "medium", 1900),
    ("DEL", "SIN"): _profile(4, "international", True, "medium", 4100),
    # Long haul
    ("DEL", "LHR"): _profile(3, "long_haul", True, "medium", 6700),
    ("BOM", "LHR"): _profile(2, "long_haul", True, "low", 7200),
    ("DEL", "JFK"): _profile(2, "long_haul", False, "low", 11000),
}

DOMESTIC_AIRPORTS = frozenset({
    "DEL", "BOM", "BLR", "MAA", "CCU", "HYD", "COK", "GOI", "PNQ", "AMD",
    "JAI", "IXC", "LKO", "PAT", "TRV", "IXB", "GAU", "BBI", "VNS", "IXZ",
    "DED", "PGH", "DHM", "KUU", "SLV",
})


def is_domestic_route(origin, destination):
    return origin in DOMESTIC_AIRPORTS and destination in DOMESTIC_AIRPORTS


def estimate_distance(origin, destination):
    """Whole kilometres between two airports; 2000 if either is unknown."""
    o = resolve(origin)
    d = resolve(destination)
    if not o or not d:
        return FALLBACK_DISTANCE_KM
    return math.floor(haversine_km(o.lat, o.lon, d.lat, d.lon))


def classify(origin, destination):
    """RouteProfile for an unordered airport pair. Never fails."""
    origin = (origin or "").strip().upper()
    destination = (destination or "").strip().upper()

    profile = (ROUTE_OVERRIDES.get((origin, destination)) or
               ROUTE_OVERRIDES.get((destination, origin)))
    if profile:
        return profile

    domestic = is_domestic_route(origin, destination)
    distance = estimate_distance(origin, destination)
    if domestic:
        route_class = RouteClass.REGIONAL
    elif distance > LONG_HAUL_KM:
        route_class = RouteClass.LONG_HAUL
    else:
        route_class = RouteClass.INTERNATIONAL

    profile = RouteProfile(
        flight_count=6 if domestic else 4,
        route_class=route_class,
        direct_route=domestic or distance < DIRECT_MAX_KM,
        popularity="low",
        distance_km=distance,
    )
    logger.info(f"classify: {origin}-{destination} not authored, derived "
                f"{route_class.value} at {distance}km")
    return profile
