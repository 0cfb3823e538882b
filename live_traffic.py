"""Live air traffic from the OpenSky Network, used to decorate offers.

Strictly best effort: any timeout, HTTP error or malformed payload leaves
the offers exactly as generated.
"""

import logging
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

import requests

import config
from errors import MalformedExternalResponse

logger = logging.getLogger(__name__)

BOUNDING_BOX_DEGREES = 1.0
MAX_STATES = 10
MIN_AIRBORNE_ALTITUDE_M = 1000
MAX_DECORATED = 3

# Sentinel: build the client from config at call time
FROM_CONFIG = object()


@dataclass(frozen=True)
class TrackedFlight:
    callsign: Optional[str]
    altitude: float
    velocity: Optional[float]
    latitude: Optional[float]
    longitude: Optional[float]


@dataclass(frozen=True)
class LiveTracking:
    altitude: float
    velocity: Optional[float]
    last_update: str


def bounding_box(airport, radius=BOUNDING_BOX_DEGREES):
    return {
        "lamin": airport.lat - radius,
        "lamax": airport.lat + radius,
        "lomin": airport.lon - radius,
        "lomax": airport.lon + radius,
    }


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_state(state):
    """Raise MalformedExternalResponse unless the vector has usable field types."""
    if not isinstance(state, (list, tuple)) or len(state) < 14:
        raise MalformedExternalResponse("OpenSky: short state vector")
    if state[1] is not None and not isinstance(state[1], str):
        raise MalformedExternalResponse("OpenSky: callsign is not a string")
    # longitude, latitude, velocity, geometric altitude
    for index in (5, 6, 9, 13):
        if state[index] is not None and not _is_number(state[index]):
            raise MalformedExternalResponse(f"OpenSky: state field {index} is not numeric")


def parse_states(payload):
    """Airborne flights from an OpenSky /states/all payload.

    Only the first 10 state vectors are considered; of those, flights on
    the ground or at or below 1000 m are dropped. A vector with missing or
    wrongly typed fields rejects the whole payload.
    """
    if not isinstance(payload, dict):
        raise MalformedExternalResponse("OpenSky: payload is not an object")
    states = payload.get("states") or []
    if not isinstance(states, list):
        raise MalformedExternalResponse("OpenSky: 'states' is not a list")

    flights = []
    for state in states[:MAX_STATES]:
        _check_state(state)
        altitude = state[13]
        if state[8] or altitude is None or altitude <= MIN_AIRBORNE_ALTITUDE_M:
            continue
        flights.append(TrackedFlight(
            callsign=(state[1] or "").strip() or None,
            altitude=altitude,
            velocity=state[9],
            latitude=state[6],
            longitude=state[5],
        ))
    return flights


class OpenSkyClient:
    """Anonymous OpenSky REST client with a bounded timeout and 5xx retries."""

    def __init__(self, base_url, timeout=None, retries=None, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = config.EXTERNAL_TIMEOUT if timeout is None else timeout
        self.retries = config.EXTERNAL_RETRIES if retries is None else retries
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls):
        """Client from environment settings, or None when tracking is off."""
        if not config.LIVE_TRACKING:
            return None
        return cls(config.OPENSKY_BASE_URL)

    def _get(self, path, params):
        url = f"{self.base_url}{path}"
        for attempt in range(self.retries + 1):
            resp = self.session.get(url, params=params, timeout=self.timeout)
            if resp.status_code < 500 or attempt == self.retries:
                resp.raise_for_status()
                return resp.json()

            wait = 0.5 * (attempt + 1)
            logger.warning(f"OpenSky {resp.status_code} on GET {path}, "
                           f"retry {attempt + 1}/{self.retries} in {wait}s")
            time.sleep(wait)

    def live_flights(self, airport):
        """Airborne flights within ±1° of an airport."""
        return parse_states(self._get("/states/all", bounding_box(airport)))


def decorate_offers(offers, tracked, now=None):
    """Attach live tracking to the first min(3, len(tracked)) offers.

    Returns a new list of the same offers in the same order.
    """
    now = now or datetime.now(timezone.utc)
    decorated = list(offers)
    for i in range(min(MAX_DECORATED, len(tracked), len(offers))):
        decorated[i] = replace(
            offers[i],
            live_data=True,
            live_tracking=LiveTracking(
                altitude=tracked[i].altitude,
                velocity=tracked[i].velocity,
                last_update=now.isoformat(),
            ),
        )
    return decorated


def decorate_with_live_traffic(offers, airport, client=FROM_CONFIG):
    """Best-effort live decoration around the departure airport."""
    if client is FROM_CONFIG:
        client = OpenSkyClient.from_config()
    if client is None or not offers:
        return offers

    try:
        tracked = client.live_flights(airport)
    except (requests.RequestException, MalformedExternalResponse,
            TypeError, ValueError) as e:
        logger.warning(f"decorate_with_live_traffic: OpenSky data unavailable "
                       f"for {airport.iata}, using generated data only: {e}")
        return offers

    logger.info(f"decorate_with_live_traffic: {len(tracked)} live flights "
                f"near {airport.iata}")
    return decorate_offers(offers, tracked)
