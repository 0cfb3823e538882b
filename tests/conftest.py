import random
from datetime import date, timedelta

import pytest

import config
from flight_generator import (
    AMENITIES, CABIN_CLASSES, DOMESTIC_BAGGAGE, Endpoint, FlightOffer,
)
from query import SearchQuery


@pytest.fixture(autouse=True)
def offline_config(monkeypatch):
    """Keep every test off the network regardless of the local .env."""
    monkeypatch.setattr(config, "LIVE_TRACKING", False)
    monkeypatch.setattr(config, "AMADEUS_CLIENT_ID", "")
    monkeypatch.setattr(config, "AMADEUS_CLIENT_SECRET", "")
    monkeypatch.setattr(config, "CURRENCY", "INR")


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def tomorrow():
    return date.today() + timedelta(days=1)


@pytest.fixture
def one_way_query(tomorrow):
    """DEL -> DED, one adult, tomorrow."""
    return SearchQuery(origin="DEL", destination="DED", departure_date=tomorrow)


@pytest.fixture
def round_trip_query(tomorrow):
    return SearchQuery(
        origin="DEL",
        destination="DED",
        departure_date=tomorrow,
        return_date=tomorrow + timedelta(days=4),
        trip_type="roundTrip",
        adults=2,
        children=1,
    )


@pytest.fixture
def make_offer():
    """Factory for hand-built offers used by the filter tests."""

    def _make(id="X-Y-0", airline="IndiGo", price=5000, stops=0,
              departure_time="09:00", duration="1h 30m"):
        return FlightOffer(
            id=id,
            airline=airline,
            flight_number="6E123",
            departure=Endpoint("DEL", departure_time, "2030-01-01", "T1"),
            arrival=Endpoint("BOM", "10:30", "2030-01-01", "T1"),
            duration=duration,
            stops=stops,
            price=price,
            currency="INR",
            aircraft="Airbus A320",
            amenities=AMENITIES["basic"],
            baggage=DOMESTIC_BAGGAGE,
            on_time_performance=90,
            route_class="trunk",
            cabin_classes=CABIN_CLASSES,
        )

    return _make


@pytest.fixture
def sample_offers(make_offer):
    """Six offers spanning stops, airlines, buckets and prices."""
    return [
        make_offer(id="o0", airline="IndiGo", price=3200, stops=0,
                   departure_time="05:45", duration="2h 10m"),
        make_offer(id="o1", airline="SpiceJet", price=4100, stops=1,
                   departure_time="07:15", duration="4h 5m"),
        make_offer(id="o2", airline="Air India", price=4100, stops=0,
                   departure_time="12:00", duration="2h 0m"),
        make_offer(id="o3", airline="Vistara", price=5600, stops=0,
                   departure_time="17:59", duration="10h 5m"),
        make_offer(id="o4", airline="IndiGo", price=6100, stops=1,
                   departure_time="18:00", duration="3h 0m"),
        make_offer(id="o5", airline="GoFirst", price=9000, stops=0,
                   departure_time="23:30", duration="1h 55m"),
    ]
