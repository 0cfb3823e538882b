"""Shared helpers: distance, time-of-day arithmetic, sampling."""

import math
import random
import re

EARTH_RADIUS_KM = 6371
MINUTES_PER_DAY = 1440


def haversine_km(lat1, lon1, lat2, lon2):
    """Great-circle distance in kilometres."""
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (math.sin(dlat / 2) ** 2 +
         math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) *
         math.sin(dlon / 2) ** 2)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def time_to_minutes(time_str):
    """'HH:MM' -> minutes since midnight."""
    hours, mins = time_str.split(":")
    return int(hours) * 60 + int(mins)


def minutes_to_time(total_minutes):
    """Minutes since midnight (any integer) -> 'HH:MM', wrapped to one day."""
    total_minutes %= MINUTES_PER_DAY
    hours, mins = divmod(total_minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def add_minutes_to_time(time_str, minutes):
    """Shift a time of day by minutes, wrapping across midnight both ways."""
    return minutes_to_time(time_to_minutes(time_str) + minutes)


def days_crossed(time_str, minutes):
    """Number of midnights passed when adding minutes to a time of day."""
    return (time_to_minutes(time_str) + minutes) // MINUTES_PER_DAY


def format_duration(minutes):
    """Minutes -> '2h 5m'."""
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m"


def parse_duration(duration):
    """'2h 5m' -> 125. Bare integers pass through; anything else is None."""
    if isinstance(duration, int):
        return duration
    match = re.match(r"\s*(\d+)h\s*(\d+)m", duration or "")
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def hour_of(time_str):
    """Hour component of 'HH:MM'."""
    return int(time_str.split(":")[0])


def remove_duplicates(items, key):
    """Keep the first item seen for each key(item), preserving order."""
    seen = set()
    unique = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        unique.append(item)
    return unique


def capitalize_words(text):
    """'mount abu' -> 'Mount Abu'."""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), text)


def weighted_choice(weighted_items, rng=None):
    """Pick from [(item, weight), ...] by walking cumulative weights.

    One uniform draw in [0, 1); the first item whose running total reaches
    the draw wins. Rounding shortfalls fall back to the first item.
    """
    if not weighted_items:
        raise ValueError("weighted_choice needs at least one item")
    rng = rng or random
    draw = rng.random()
    cumulative = 0.0
    for item, weight in weighted_items:
        cumulative += weight
        if draw <= cumulative:
            return item
    return weighted_items[0][0]
