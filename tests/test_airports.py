from airports import (
    AIRPORTS, MAJOR_HUBS, MAX_RESULTS, nearest_airports, resolve,
    score_airports, search_airports,
)


def codes(records):
    return [r.iata for r in records]


class TestDirectory:
    def test_codes_are_unique_keys(self):
        assert all(code == record.iata for code, record in AIRPORTS.items())

    def test_hubs_are_in_directory(self):
        assert MAJOR_HUBS <= set(AIRPORTS)


class TestResolve:
    def test_exact_code(self):
        assert resolve("DED").city == "Dehradun"

    def test_case_and_whitespace_insensitive(self):
        assert resolve(" del ").iata == "DEL"

    def test_unknown_code(self):
        assert resolve("ZZZ") is None

    def test_empty_code(self):
        assert resolve("") is None
        assert resolve(None) is None


class TestSearchAirports:
    def test_short_query_returns_nothing(self):
        assert search_airports("d") == []
        assert search_airports("  ") == []
        assert search_airports(None) == []

    def test_exact_code_ranks_first(self):
        """An exact IATA hit outranks any partial match."""
        assert search_airports("DED")[0].iata == "DED"

    def test_del_ranks_above_cities_containing_del(self):
        results = search_airports("del")
        assert results[0].iata == "DEL"
        others = [r for r in results[1:] if "del" in r.city.lower()]
        assert all(codes(results).index(r.iata) > 0 for r in others)

    def test_city_name_finds_airport(self):
        results = search_airports("dehradun")
        assert results[0].iata == "DED"
        assert results[0].city == "Dehradun"

    def test_alias_surfaces_serving_airport(self):
        """Haridwar has no airport; Jolly Grant is offered under the town name."""
        results = search_airports("Haridwar")
        assert results[0].iata == "DED"
        assert set(codes(results[1:])) <= MAJOR_HUBS
        assert results[0].city == "Haridwar"
        assert results[0].name == "Jolly Grant Airport"

    def test_multi_airport_alias(self):
        results = search_airports("manali")
        assert codes(results[:2]) == ["KUU", "SLV"]
        assert {r.city for r in results[:2]} == {"Manali"}
        assert "KUU" not in codes(results[2:])

    def test_alias_does_not_change_directory(self):
        search_airports("rishikesh")
        assert resolve("DED").city == "Dehradun"

    def test_airport_listed_once(self):
        """Alias and field match on the same airport collapse to one entry."""
        assert codes(search_airports("dehradun")).count("DED") == 1

    def test_results_capped(self):
        assert len(search_airports("in")) == MAX_RESULTS

    def test_ties_keep_directory_order(self):
        """Country-only matches tie; hubs first, then directory order."""
        assert codes(search_airports("india")) == [
            "DEL", "BOM", "BLR", "MAA", "CCU", "HYD", "COK", "AMD", "PNQ", "GOI",
            "DED", "PGH",
        ]

    def test_no_match_lists_hubs(self):
        """Hubs score their bonus on any query, so they fill an empty result."""
        results = search_airports("xqzw")
        assert len(results) == MAX_RESULTS
        assert set(codes(results)) <= MAJOR_HUBS
        assert codes(results)[:3] == ["DEL", "BOM", "BLR"]


class TestScoreAirports:
    def test_alias_hits_come_first_unsorted(self):
        matches = score_airports("dehradun")
        assert matches[0].display_city == "Dehradun"
        assert matches[0].score == 950

    def test_exact_city_score(self):
        """City exact/prefix/contains plus name prefix/contains, no hub bonus."""
        match = next(m for m in score_airports("pantnagar") if m.airport.iata == "PGH")
        assert match.score == 900 + 100 + 80 + 50 + 30

    def test_hub_bonus(self):
        match = next(m for m in score_airports("mumbai") if m.airport.iata == "BOM")
        assert match.score == 900 + 100 + 50 + 10

    def test_hub_scores_without_match(self):
        match = next(m for m in score_airports("xqzw") if m.airport.iata == "JFK")
        assert match.score == 10
        assert all(m.airport.iata in MAJOR_HUBS for m in score_airports("xqzw"))


class TestNearestAirports:
    def test_haridwar_is_closest_to_jolly_grant(self):
        (airport, km), = nearest_airports(29.9457, 78.1642, limit=1)
        assert airport.iata == "DED"
        assert km < 50

    def test_sorted_by_distance(self):
        distances = [km for _, km in nearest_airports(19.0, 73.0, limit=5)]
        assert distances == sorted(distances)
        assert len(distances) == 5
