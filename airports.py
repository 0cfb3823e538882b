"""Airport directory and ranked local search.

The directory is a fixed reference set loaded once at import and never
mutated. Search scores every record against a free-text query and also
resolves city aliases (towns without their own airport) to the nearest
serviced airport.
"""

from dataclasses import dataclass, replace
from typing import Optional

from utils import capitalize_words, haversine_km, remove_duplicates

MAX_RESULTS = 12
MIN_QUERY_LENGTH = 2
ALIAS_SCORE = 950


@dataclass(frozen=True)
class AirportRecord:
    iata: str
    icao: str
    name: str
    city: str
    country: str
    lat: float
    lon: float


@dataclass(frozen=True)
class DirectoryMatch:
    """A scored search hit. display_city is set when matched via an alias."""

    airport: AirportRecord
    score: int
    display_city: Optional[str] = None

    def to_record(self):
        if self.display_city:
            return replace(self.airport, city=self.display_city)
        return self.airport


# ── Airport database ──────────────────────────────────────────────────

_AIRPORT_ROWS = [
    # ── India - Major International Airports ──
    ("DEL", "VIDP", "Indira Gandhi International Airport", "Delhi", "India", 28.5562, 77.1),
    ("BOM", "VABB", "Chhatrapati Shivaji Maharaj International Airport", "Mumbai", "India", 19.0896, 72.8656),
    ("BLR", "VOBL", "Kempegowda International Airport", "Bangalore", "India", 13.1986, 77.7066),
    ("MAA", "VOMM", "Chennai International Airport", "Chennai", "India", 12.9941, 80.1709),
    ("CCU", "VECC", "Netaji Subhas Chandra Bose International Airport", "Kolkata", "India", 22.6547, 88.4467),
    ("HYD", "VOHS", "Rajiv Gandhi International Airport", "Hyderabad", "India", 17.2403, 78.4294),
    ("COK", "VOCI", "Cochin International Airport", "Kochi", "India", 10.152, 76.4019),
    ("AMD", "VAAH", "Sardar Vallabhbhai Patel International Airport", "Ahmedabad", "India", 23.0726, 72.6177),
    ("PNQ", "VAPO", "Pune Airport", "Pune", "India", 18.5822, 73.9197),
    ("GOI", "VOGO", "Goa Airport (Dabolim)", "Goa", "India", 15.3808, 73.8314),

    # ── India - Uttarakhand (including Dehradun) ──
    ("DED", "VIDN", "Jolly Grant Airport", "Dehradun", "India", 30.1897, 78.1806),
    ("PGH", "VIPG", "Pantnagar Airport", "Pantnagar", "India", 29.0336, 79.4737),

    # ── India - Uttar Pradesh ──
    ("LKO", "VILK", "Chaudhary Charan Singh International Airport", "Lucknow", "India", 26.7606, 80.8893),
    ("VNS", "VIBN", "Lal Bahadur Shastri Airport", "Varanasi", "India", 25.452, 82.8596),
    ("IXD", "VIAL", "Allahabad Airport", "Prayagraj", "India", 25.4404, 81.7339),
    ("KNU", "VIKA", "Kanpur Airport", "Kanpur", "India", 26.4041, 80.4115),
    ("GWL", "VIGW", "Gwalior Airport", "Gwalior", "India", 26.2936, 78.2277),
    ("AGR", "VIAG", "Kheria Airport", "Agra", "India", 27.1579, 77.9611),
    ("GOR", "VIGO", "Gorakhpur Airport", "Gorakhpur", "India", 26.7396, 83.4497),

    # ── India - Rajasthan ──
    ("JAI", "VIJP", "Jaipur International Airport", "Jaipur", "India", 26.8247, 75.8122),
    ("UDR", "VAUD", "Maharana Pratap Airport", "Udaipur", "India", 24.6177, 73.8961),
    ("JDH", "VIJO", "Jodhpur Airport", "Jodhpur", "India", 26.2511, 73.0489),
    ("BKB", "VEBK", "Nal Airport", "Bikaner", "India", 28.0707, 73.2052),

    # ── India - Gujarat ──
    ("STV", "VASU", "Surat Airport", "Surat", "India", 21.114, 72.7417),
    ("RAJ", "VARK", "Rajkot Airport", "Rajkot", "India", 22.3092, 70.7795),
    ("BHJ", "VABJ", "Bhuj Airport", "Bhuj", "India", 23.2878, 69.6702),
    ("JGA", "VIJG", "Jamnagar Airport", "Jamnagar", "India", 22.4655, 70.0126),

    # ── India - Himachal Pradesh ──
    ("DHM", "VIGG", "Gaggal Airport", "Dharamshala", "India", 32.1651, 76.2634),
    ("KUU", "VIKU", "Kullu-Manali Airport", "Kullu", "India", 31.8767, 77.1544),
    ("SLV", "VISM", "Shimla Airport", "Shimla", "India", 31.0816, 77.0674),

    # ── India - Punjab & Haryana ──
    ("IXC", "VICG", "Chandigarh Airport", "Chandigarh", "India", 30.6735, 76.7884),
    ("ATQ", "VIAT", "Amritsar Airport", "Amritsar", "India", 31.7096, 74.7973),

    # ── India - Jammu & Kashmir ──
    ("IXJ", "VOJS", "Jammu Airport", "Jammu", "India", 32.689, 74.8374),
    ("SXR", "VISR", "Sheikh ul-Alam Airport", "Srinagar", "India", 34.0854, 74.7742),
    ("LEH", "VILH", "Kushok Bakula Rimpochee Airport", "Leh", "India", 34.1358, 77.5465),

    # ── India - Bihar & Jharkhand ──
    ("PAT", "VEPT", "Jay Prakash Narayan International Airport", "Patna", "India", 25.5913, 85.088),
    ("RNC", "VERC", "Birsa Munda Airport", "Ranchi", "India", 23.3142, 85.3217),
    ("IXW", "VEJS", "Sonari Airport", "Jamshedpur", "India", 22.8133, 86.1522),

    # ── India - West Bengal & Northeast ──
    ("IXB", "VEBD", "Bagdogra Airport", "Siliguri", "India", 26.6812, 88.3285),
    ("GAU", "VEGT", "Lokpriya Gopinath Bordoloi International Airport", "Guwahati", "India", 26.1061, 91.5859),
    ("IXA", "VEAT", "Agartala Airport", "Agartala", "India", 23.887, 91.2403),
    ("IXS", "VASK", "Silchar Airport", "Silchar", "India", 24.9129, 92.9787),
    ("DIB", "VEMN", "Dibrugarh Airport", "Dibrugarh", "India", 27.4836, 95.0169),
    ("JRH", "VEJS", "Jorhat Airport", "Jorhat", "India", 26.7315, 94.1755),
    ("IMF", "VEIM", "Imphal Airport", "Imphal", "India", 24.7597, 93.8967),
    ("AJL", "VELR", "Lengpui Airport", "Aizawl", "India", 23.8407, 92.6197),

    # ── India - Madhya Pradesh & Chhattisgarh ──
    ("BHO", "VABP", "Raja Bhoj Airport", "Bhopal", "India", 23.2875, 77.3374),
    ("IDR", "VAID", "Devi Ahilya Bai Holkar Airport", "Indore", "India", 22.7218, 75.8011),
    ("JLR", "VAJL", "Jabalpur Airport", "Jabalpur", "India", 23.1778, 80.0522),
    ("RPR", "VARP", "Swami Vivekananda Airport", "Raipur", "India", 21.18, 81.7388),
    ("JGB", "VAJB", "Jagdalpur Airport", "Jagdalpur", "India", 19.0717, 82.0344),

    # ── India - Maharashtra ──
    ("NAG", "VANP", "Dr. Babasaheb Ambedkar International Airport", "Nagpur", "India", 21.0925, 79.0475),
    ("IXU", "VEAU", "Aurangabad Airport", "Aurangabad", "India", 19.8627, 75.3981),
    ("KLH", "VAKP", "Kolhapur Airport", "Kolhapur", "India", 16.6647, 74.2894),

    # ── India - Odisha ──
    ("BBI", "VEBS", "Biju Patnaik International Airport", "Bhubaneswar", "India", 20.244, 85.8178),
    ("JRG", "VEJH", "Veer Surendra Sai Airport", "Jharsuguda", "India", 21.9133, 84.0503),

    # ── India - Karnataka ──
    ("IXG", "VOBG", "Belgaum Airport", "Belgaum", "India", 15.8593, 74.6183),
    ("HBX", "VOHB", "Hubli Airport", "Hubli", "India", 15.3617, 75.0849),
    ("MYQ", "VOMY", "Mysore Airport", "Mysore", "India", 12.2302, 76.6497),

    # ── India - Tamil Nadu ──
    ("TRZ", "VOTR", "Tiruchirappalli International Airport", "Tiruchirappalli", "India", 10.7654, 78.7094),
    ("CJB", "VOCB", "Coimbatore International Airport", "Coimbatore", "India", 11.0297, 77.0434),
    ("MDU", "VOMD", "Madurai Airport", "Madurai", "India", 9.8349, 78.0934),
    ("TRV", "VOTV", "Trivandrum International Airport", "Trivandrum", "India", 8.4821, 76.92),
    ("TCR", "VOTR", "Tuticorin Airport", "Tuticorin", "India", 8.7239, 78.0269),
    ("SXV", "VOSM", "Salem Airport", "Salem", "India", 11.7833, 78.0656),

    # ── India - Kerala ──
    ("CNN", "VOCN", "Kannur International Airport", "Kannur", "India", 11.9502, 75.5533),
    ("CCJ", "VOCC", "Calicut International Airport", "Kozhikode", "India", 11.1362, 75.9553),

    # ── India - Andhra Pradesh & Telangana ──
    ("VGA", "VOVZ", "Vijayawada Airport", "Vijayawada", "India", 16.5304, 80.7968),
    ("VTZ", "VOVT", "Vishakhapatnam Airport", "Vishakhapatnam", "India", 17.7211, 83.2245),
    ("TIR", "VOTP", "Tirupati Airport", "Tirupati", "India", 13.6327, 79.5433),

    # ── India - Andaman & Nicobar Islands ──
    ("IXZ", "VABP", "Veer Savarkar International Airport", "Port Blair", "India", 11.641, 92.7296),

    # ── International - Major Global Hubs ──
    ("DXB", "OMDB", "Dubai International Airport", "Dubai", "UAE", 25.2532, 55.3657),
    ("DOH", "OTHH", "Hamad International Airport", "Doha", "Qatar", 25.2733, 51.6081),
    ("AUH", "OMAA", "Abu Dhabi International Airport", "Abu Dhabi", "UAE", 24.433, 54.6512),
    ("SIN", "WSSS", "Singapore Changi Airport", "Singapore", "Singapore", 1.3644, 103.9915),
    ("HKG", "VHHH", "Hong Kong International Airport", "Hong Kong", "Hong Kong", 22.308, 113.9185),
    ("BKK", "VTBS", "Suvarnabhumi Airport", "Bangkok", "Thailand", 14.0682, 100.6077),
    ("KUL", "WMKK", "Kuala Lumpur International Airport", "Kuala Lumpur", "Malaysia", 2.7456, 101.7072),
    ("ICN", "RKSI", "Seoul Incheon International Airport", "Seoul", "South Korea", 37.4602, 126.4407),
    ("NRT", "RJAA", "Tokyo Narita International Airport", "Tokyo", "Japan", 35.772, 140.3929),
    ("HND", "RJTT", "Tokyo Haneda Airport", "Tokyo", "Japan", 35.5494, 139.7798),

    # ── Europe - Major Hubs ──
    ("LHR", "EGLL", "London Heathrow Airport", "London", "UK", 51.47, -0.4543),
    ("LGW", "EGKK", "London Gatwick Airport", "London", "UK", 51.1481, -0.1903),
    ("CDG", "LFPG", "Charles de Gaulle Airport", "Paris", "France", 49.0097, 2.5479),
    ("FRA", "EDDF", "Frankfurt Airport", "Frankfurt", "Germany", 50.0379, 8.5622),
    ("AMS", "EHAM", "Amsterdam Airport Schiphol", "Amsterdam", "Netherlands", 52.3105, 4.7683),
    ("IST", "LTFM", "Istanbul Airport", "Istanbul", "Turkey", 41.2619, 28.7419),

    # ── North America - Major Hubs ──
    ("JFK", "KJFK", "John F. Kennedy International Airport", "New York", "USA", 40.6413, -73.7781),
    ("LGA", "KLGA", "LaGuardia Airport", "New York", "USA", 40.7769, -73.874),
    ("LAX", "KLAX", "Los Angeles International Airport", "Los Angeles", "USA", 33.9425, -118.4081),
    ("ORD", "KORD", "Chicago O'Hare International Airport", "Chicago", "USA", 41.9742, -87.9073),
    ("ATL", "KATL", "Hartsfield-Jackson Atlanta International Airport", "Atlanta", "USA", 33.6407, -84.4277),
    ("DFW", "KDFW", "Dallas/Fort Worth International Airport", "Dallas", "USA", 32.8998, -97.0403),
    ("SFO", "KSFO", "San Francisco International Airport", "San Francisco", "USA", 37.6213, -122.379),

    # ── Australia & Others ──
    ("SYD", "YSSY", "Sydney Kingsford Smith Airport", "Sydney", "Australia", -33.9399, 151.1753),
    ("MEL", "YMML", "Melbourne Airport", "Melbourne", "Australia", -37.669, 144.841),
    ("YYZ", "CYYZ", "Toronto Pearson International Airport", "Toronto", "Canada", 43.6777, -79.6248),
]

AIRPORTS = {row[0]: AirportRecord(*row) for row in _AIRPORT_ROWS}

# Towns served by a nearby airport
CITY_ALIASES = {
    "dehradun": ["DED"],
    "haridwar": ["DED"],
    "rishikesh": ["DED"],
    "mussoorie": ["DED"],
    "jim corbett": ["DED"],
    "corbett": ["DED"],
    "nainital": ["PGH"],
    "haldwani": ["PGH"],
    "almora": ["PGH"],
    "shimla": ["SLV"],
    "manali": ["KUU", "SLV"],
    "dharamshala": ["DHM"],
    "mcleodganj": ["DHM"],
    "dalhousie": ["DHM"],
    "kasauli": ["IXC"],
    "rajkot": ["RAJ"],
    "jamnagar": ["JGA"],
    "dwarka": ["JGA"],
    "somnath": ["JGA"],
    "mount abu": ["UDR"],
    "chittorgarh": ["UDR"],
    "pushkar": ["JAI"],
    "ajmer": ["JAI"],
    "ranthambore": ["JAI"],
}

MAJOR_HUBS = frozenset({
    # India
    "DEL", "BOM", "BLR", "MAA", "CCU", "HYD", "COK", "AMD", "PNQ", "GOI",
    # Middle East
    "DXB", "DOH", "AUH",
    # Europe
    "LHR", "CDG", "FRA", "AMS", "IST",
    # US
    "JFK", "LAX", "ORD", "ATL", "DFW", "SFO",
    # Asia
    "SIN", "HKG", "ICN", "NRT", "BKK",
    # Australia
    "SYD", "MEL",
})


def resolve(code):
    """Return the AirportRecord for an IATA code, or None if not found."""
    if not code:
        return None
    return AIRPORTS.get(code.strip().upper())


def _score(airport, query):
    """Relevance of one record for a lowercased query; 0 means excluded.

    Hubs always carry their bonus, so they pad out sparse result lists.
    """
    iata = airport.iata.lower()
    city = airport.city.lower()
    name = airport.name.lower()
    score = 0

    # Exact matches
    if iata == query:
        score += 1000
    if city == query:
        score += 900

    # Prefix matches
    if city.startswith(query):
        score += 100
    if name.startswith(query):
        score += 80
    if iata.startswith(query):
        score += 70

    # Substring matches
    if query in city:
        score += 50
    if query in name:
        score += 30
    if query in airport.country.lower():
        score += 20

    if airport.iata in MAJOR_HUBS:
        score += 10
    return score


def score_airports(query):
    """Alias hits plus every directory record with a positive score.

    Returned unsorted: alias hits first, then records in directory order.
    """
    query_lower = (query or "").strip().lower()
    if len(query_lower) < MIN_QUERY_LENGTH:
        return []

    matches = []
    for code in CITY_ALIASES.get(query_lower, []):
        airport = AIRPORTS.get(code)
        if airport:
            matches.append(DirectoryMatch(
                airport, ALIAS_SCORE, display_city=capitalize_words(query_lower)
            ))

    for airport in AIRPORTS.values():
        score = _score(airport, query_lower)
        if score > 0:
            matches.append(DirectoryMatch(airport, score))
    return matches


def search_airports(query):
    """Ranked local search over the directory, at most 12 records.

    Ties keep directory order. An airport reached both through an alias and
    through its own fields is listed once, at its better score.
    """
    ranked = sorted(score_airports(query), key=lambda m: m.score, reverse=True)
    ranked = remove_duplicates(ranked, key=lambda m: m.airport.iata)
    return [m.to_record() for m in ranked[:MAX_RESULTS]]


def nearest_airports(lat, lon, limit=5):
    """Directory records closest to a coordinate, as (record, km) pairs."""
    distances = [
        (airport, haversine_km(lat, lon, airport.lat, airport.lon))
        for airport in AIRPORTS.values()
    ]
    distances.sort(key=lambda pair: pair[1])
    return distances[:limit]
