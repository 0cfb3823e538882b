"""Airport suggestions: external lookup first, local directory always as fallback."""

import logging

import requests

from airports import AirportRecord, MIN_QUERY_LENGTH, resolve, search_airports
from amadeus_client import AmadeusClient
from errors import MalformedExternalResponse
from utils import capitalize_words, remove_duplicates

logger = logging.getLogger(__name__)

MAX_EXTERNAL_RESULTS = 10

_FROM_CONFIG = object()


def _text(value):
    """Stripped string, or "" for anything that is not a string."""
    return value.strip() if isinstance(value, str) else ""


def _to_record(location):
    """Convert one Amadeus location into an AirportRecord, or None if unusable.

    Both an IATA code and a city name are required. Codes already in the
    directory map to the canonical directory record.
    """
    if not isinstance(location, dict):
        return None
    address = location.get("address")
    if not isinstance(address, dict):
        return None
    iata = _text(location.get("iataCode")).upper()
    city = _text(address.get("cityName"))
    if not iata or not city:
        return None

    known = resolve(iata)
    if known:
        return known

    geo = location.get("geoCode")
    if not isinstance(geo, dict):
        geo = {}
    try:
        lat = float(geo.get("latitude", 0.0))
        lon = float(geo.get("longitude", 0.0))
    except (TypeError, ValueError):
        lat = lon = 0.0
    return AirportRecord(
        iata=iata,
        icao=_text(location.get("icaoCode")),
        name=capitalize_words((_text(location.get("name")) or iata).lower()),
        city=capitalize_words(city.lower()),
        country=_text(address.get("countryName")) or _text(address.get("countryCode")),
        lat=lat,
        lon=lon,
    )


def normalize_external_results(locations):
    """Validated, de-duplicated records from a raw external result list."""
    records = [r for r in (_to_record(loc) for loc in locations) if r]
    records = remove_duplicates(records, key=lambda r: r.iata)
    return records[:MAX_EXTERNAL_RESULTS]


def get_airport_suggestions(query, client=_FROM_CONFIG):
    """Airport suggestions for a free-text query.

    The external client (Amadeus, when configured) is consulted first. Any
    network error, malformed payload or empty result falls through to the
    local directory search, which is never skipped.
    """
    query = (query or "").strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    if client is _FROM_CONFIG:
        client = AmadeusClient.from_config()

    if client is not None:
        try:
            records = normalize_external_results(client.airport_city_search(query))
            if records:
                return records
            logger.info(f"get_airport_suggestions: no usable external results for '{query}'")
        except (requests.RequestException, MalformedExternalResponse,
                KeyError, TypeError, ValueError) as e:
            logger.warning(f"get_airport_suggestions: external lookup failed for "
                           f"'{query}', using local directory: {e}")

    return search_airports(query)
