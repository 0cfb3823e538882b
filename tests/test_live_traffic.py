from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests

import config
from airports import resolve
from errors import MalformedExternalResponse
from live_traffic import (
    OpenSkyClient, TrackedFlight, bounding_box, decorate_offers,
    decorate_with_live_traffic, parse_states,
)


def state(callsign="AIC101 ", on_ground=False, altitude=9500.0):
    """A 17-field OpenSky state vector."""
    return ["800abc", callsign, "India", 1700000000, 1700000000,
            77.2, 28.6, 9400.0, on_ground, 230.5, 90.0, 0.0, None,
            altitude, "1234", False, 0]


def response(status, payload=None):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status}")
    return resp


class TestParseStates:
    def test_airborne_flight(self):
        flight, = parse_states({"time": 1, "states": [state()]})
        assert flight == TrackedFlight("AIC101", 9500.0, 230.5, 28.6, 77.2)

    def test_drops_grounded_and_low_flights(self):
        payload = {"states": [
            state(on_ground=True),
            state(altitude=None),
            state(altitude=1000.0),
            state(altitude=1000.5),
        ]}
        assert [f.altitude for f in parse_states(payload)] == [1000.5]

    def test_only_first_ten_considered(self):
        payload = {"states": [state(altitude=500.0)] * 10 + [state()]}
        assert parse_states(payload) == []

    def test_no_states(self):
        assert parse_states({"time": 1, "states": None}) == []

    def test_blank_callsign(self):
        flight, = parse_states({"states": [state(callsign="   ")]})
        assert flight.callsign is None

    @pytest.mark.parametrize("payload", [
        "not json object",
        {"states": "nope"},
        {"states": [["too", "short"]]},
        {"states": [state(callsign=12345)]},
        {"states": [state(altitude="9500")]},
        {"states": [state(altitude=True)]},
    ])
    def test_malformed(self, payload):
        with pytest.raises(MalformedExternalResponse):
            parse_states(payload)


class TestBoundingBox:
    def test_one_degree_each_way(self):
        box = bounding_box(resolve("DED"))
        assert box["lamin"] == pytest.approx(29.1897)
        assert box["lamax"] == pytest.approx(31.1897)
        assert box["lomin"] == pytest.approx(77.1806)
        assert box["lomax"] == pytest.approx(79.1806)


class TestOpenSkyClient:
    def test_malformed_state_raises(self):
        session = MagicMock()
        session.get.return_value = response(200, {"states": [state(callsign=12345)]})
        client = OpenSkyClient("https://opensky.test/api", retries=0, session=session)

        with pytest.raises(MalformedExternalResponse):
            client.live_flights(resolve("DEL"))

    def test_live_flights(self):
        session = MagicMock()
        session.get.return_value = response(200, {"states": [state()]})
        client = OpenSkyClient("https://opensky.test/api/", timeout=2, retries=0,
                               session=session)

        flights = client.live_flights(resolve("DEL"))

        assert len(flights) == 1
        url = session.get.call_args.args[0]
        kwargs = session.get.call_args.kwargs
        assert url == "https://opensky.test/api/states/all"
        assert kwargs["params"] == bounding_box(resolve("DEL"))
        assert kwargs["timeout"] == 2

    @patch("live_traffic.time.sleep")
    def test_retries_server_errors(self, sleep):
        session = MagicMock()
        session.get.side_effect = [response(503), response(200, {"states": []})]
        client = OpenSkyClient("https://opensky.test/api", retries=2, session=session)

        assert client.live_flights(resolve("DEL")) == []
        assert session.get.call_count == 2
        sleep.assert_called_once_with(0.5)

    @patch("live_traffic.time.sleep")
    def test_gives_up_after_retries(self, sleep):
        session = MagicMock()
        session.get.return_value = response(502)
        client = OpenSkyClient("https://opensky.test/api", retries=1, session=session)

        with pytest.raises(requests.HTTPError):
            client.live_flights(resolve("DEL"))
        assert session.get.call_count == 2

    def test_client_errors_not_retried(self):
        session = MagicMock()
        session.get.return_value = response(429)
        client = OpenSkyClient("https://opensky.test/api", retries=3, session=session)

        with pytest.raises(requests.HTTPError):
            client.live_flights(resolve("DEL"))
        assert session.get.call_count == 1

    def test_disabled_by_config(self):
        assert OpenSkyClient.from_config() is None

    def test_enabled_by_config(self, monkeypatch):
        monkeypatch.setattr(config, "LIVE_TRACKING", True)
        client = OpenSkyClient.from_config()
        assert client.base_url == config.OPENSKY_BASE_URL.rstrip("/")


class TestDecorateOffers:
    NOW = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)

    def tracked(self, n):
        return [TrackedFlight(f"T{i}", 8000.0 + i, 200.0, 0.0, 0.0) for i in range(n)]

    def test_decorates_at_most_three(self, sample_offers):
        decorated = decorate_offers(sample_offers, self.tracked(6), now=self.NOW)
        assert [o.live_data for o in decorated] == [True] * 3 + [False] * 3
        assert decorated[2].live_tracking.altitude == 8002.0
        assert decorated[0].live_tracking.last_update == self.NOW.isoformat()

    def test_fewer_tracked_than_offers(self, sample_offers):
        decorated = decorate_offers(sample_offers, self.tracked(1), now=self.NOW)
        assert sum(o.live_data for o in decorated) == 1

    def test_same_offers_same_order(self, sample_offers):
        decorated = decorate_offers(sample_offers, self.tracked(3), now=self.NOW)
        assert [o.id for o in decorated] == [o.id for o in sample_offers]
        assert [o.price for o in decorated] == [o.price for o in sample_offers]

    def test_input_not_modified(self, sample_offers):
        decorate_offers(sample_offers, self.tracked(3), now=self.NOW)
        assert not any(o.live_data for o in sample_offers)

    def test_nothing_tracked(self, sample_offers):
        assert decorate_offers(sample_offers, [], now=self.NOW) == sample_offers


class TestDecorateWithLiveTraffic:
    def test_no_client(self, sample_offers):
        assert decorate_with_live_traffic(sample_offers, resolve("DEL"), client=None) \
            is sample_offers

    def test_tracking_off_in_config(self, sample_offers):
        assert decorate_with_live_traffic(sample_offers, resolve("DEL")) is sample_offers

    @pytest.mark.parametrize("error", [
        requests.ConnectionError("down"),
        requests.Timeout("slow"),
        MalformedExternalResponse("garbage"),
        ValueError("bad json"),
    ])
    def test_feed_failure_falls_back(self, sample_offers, error):
        client = MagicMock()
        client.live_flights.side_effect = error
        assert decorate_with_live_traffic(sample_offers, resolve("DEL"), client) \
            is sample_offers

    def test_no_offers_skips_lookup(self):
        client = MagicMock()
        assert decorate_with_live_traffic([], resolve("DEL"), client) == []
        client.live_flights.assert_not_called()
