"""Amadeus Self-Service client for airport keyword suggestions."""

import time
import logging
import requests

import config
from errors import MalformedExternalResponse

logger = logging.getLogger(__name__)


class AmadeusClient:
    """Amadeus location lookups with OAuth2 token refresh and bounded retries."""

    def __init__(self, client_id, client_secret, base_url,
                 timeout=None, retries=None, session=None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = config.EXTERNAL_TIMEOUT if timeout is None else timeout
        self.retries = config.EXTERNAL_RETRIES if retries is None else retries
        self.session = session or requests.Session()
        self.token = None
        self.token_expiry = 0

    @classmethod
    def from_config(cls):
        """Build a client from environment settings, or None if unconfigured."""
        if not config.amadeus_configured():
            return None
        return cls(config.AMADEUS_CLIENT_ID, config.AMADEUS_CLIENT_SECRET,
                   config.AMADEUS_BASE_URL)

    def _ensure_token(self):
        """Refresh bearer token if expired (tokens last 30 minutes)."""
        if self.token and time.time() < self.token_expiry - 60:
            return
        resp = self.session.post(
            f"{self.base_url}/v1/security/oauth2/token",
            data={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
            timeout=self.timeout,
        )
        resp.raise_for_status()
        data = resp.json()
        self.token = data["access_token"]
        self.token_expiry = time.time() + data["expires_in"]
        logger.info("Amadeus token refreshed")

    def _get(self, path, params=None):
        """Authenticated GET, retrying 5xx responses with linear backoff."""
        self._ensure_token()
        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {self.token}"}

        for attempt in range(self.retries + 1):
            resp = self.session.get(url, headers=headers, params=params or {},
                                    timeout=self.timeout)
            if resp.status_code < 500 or attempt == self.retries:
                if resp.status_code >= 400:
                    logger.error(f"Amadeus {resp.status_code} on GET {path}: "
                                 f"{resp.text[:300]}")
                resp.raise_for_status()
                return resp.json()

            wait = 0.5 * (attempt + 1)
            logger.warning(f"Amadeus {resp.status_code} on GET {path}, "
                           f"retry {attempt + 1}/{self.retries} in {wait}s")
            time.sleep(wait)

    def airport_city_search(self, keyword, limit=10):
        """Keyword search for airports.

        GET /v1/reference-data/locations
        Returns the raw location list; raises requests.RequestException on
        network or HTTP failure.
        """
        data = self._get("/v1/reference-data/locations", {
            "subType": "AIRPORT",
            "keyword": keyword,
            "page[limit]": limit,
        })
        if not isinstance(data, dict) or not isinstance(data.get("data", []), list):
            raise MalformedExternalResponse("Amadeus locations: unexpected payload")
        return data.get("data", [])
