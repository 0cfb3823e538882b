"""Configuration loader for the skyfare flight search engine."""

import logging
import os
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Amadeus Self-Service (optional airport suggestions)
AMADEUS_CLIENT_ID = os.getenv("AMADEUS_CLIENT_ID", "")
AMADEUS_CLIENT_SECRET = os.getenv("AMADEUS_CLIENT_SECRET", "")
AMADEUS_BASE_URL = os.getenv("AMADEUS_BASE_URL", "https://test.api.amadeus.com")

# OpenSky Network (optional live traffic)
OPENSKY_BASE_URL = os.getenv("OPENSKY_BASE_URL", "https://opensky-network.org/api")
LIVE_TRACKING = os.getenv("LIVE_TRACKING", "true").lower() in ("true", "1", "yes")

# External calls
EXTERNAL_TIMEOUT = float(os.getenv("EXTERNAL_TIMEOUT", "5"))
EXTERNAL_RETRIES = int(os.getenv("EXTERNAL_RETRIES", "2"))

# Offers
CURRENCY = os.getenv("CURRENCY", "INR")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def amadeus_configured():
    """True when both Amadeus credentials are present."""
    return bool(AMADEUS_CLIENT_ID and AMADEUS_CLIENT_SECRET)


def validate():
    """Report optional configuration that is missing."""
    missing = []
    if not AMADEUS_CLIENT_ID:
        missing.append("AMADEUS_CLIENT_ID")
    if not AMADEUS_CLIENT_SECRET:
        missing.append("AMADEUS_CLIENT_SECRET")
    if missing:
        logger.warning(f"Missing config: {', '.join(missing)}")
        logger.warning("Airport suggestions will use the local directory only.")
    return missing
