"""Departure schedule generation from per-class anchor times."""

import random
from dataclasses import dataclass

from routes import RouteClass
from utils import add_minutes_to_time

# Anchor departures (local time) per route class
TIME_PATTERNS = {
    RouteClass.TRUNK: ["06:00", "07:30", "09:00", "10:30", "12:00", "13:30",
                       "15:00", "16:30", "18:00", "19:30", "21:00", "22:00"],
    RouteClass.MAJOR: ["06:30", "08:00", "10:00", "12:30", "14:30", "16:00",
                       "18:30", "20:00", "21:30"],
    RouteClass.REGIONAL: ["07:00", "09:30", "12:00", "15:30", "18:00", "20:30"],
    RouteClass.INTERNATIONAL: ["02:00", "08:00", "14:00", "22:00"],
    RouteClass.LONG_HAUL: ["01:00", "10:00", "22:00"],
}

JITTER_MINUTES = 30
MAX_DELAY_MINUTES = 30
PRICE_MULTIPLIER_RANGE = (0.8, 1.2)


@dataclass(frozen=True)
class TimeSlot:
    departure: str
    delay_minutes: int
    price_multiplier: float


def generate_time_slots(flight_count, route_class, rng=None):
    """flight_count slots sorted by departure time.

    Slot i starts from anchor i mod len(anchors), jittered by up to
    ±30 minutes. Unknown classes use the regional anchors.
    """
    rng = rng or random.Random()
    try:
        pattern = TIME_PATTERNS[RouteClass(route_class)]
    except ValueError:
        pattern = TIME_PATTERNS[RouteClass.REGIONAL]

    low, high = PRICE_MULTIPLIER_RANGE
    slots = []
    for i in range(flight_count):
        offset = rng.randrange(-JITTER_MINUTES, JITTER_MINUTES)
        slots.append(TimeSlot(
            departure=add_minutes_to_time(pattern[i % len(pattern)], offset),
            delay_minutes=rng.randrange(MAX_DELAY_MINUTES),
            price_multiplier=low + rng.random() * (high - low),
        ))

    slots.sort(key=lambda s: s.departure)
    return slots
