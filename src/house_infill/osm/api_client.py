"""
Overpass API client

Posts one query and retries on timeouts, dropped connections and the
"busy" status codes Overpass returns under load.
"""

import time
from typing import Any, Dict, Optional

import requests
from loguru import logger

from ..config import APIConfig, get_config

RETRY_STATUS = (429, 504)


class OverpassAPIClient:
    """Client for the Overpass interpreter endpoint"""

    def __init__(self, api_config: Optional[APIConfig] = None):
        self.api = api_config or get_config().api

    def query(self, query: str) -> Dict[str, Any]:
        """
        Run an Overpass QL query

        Raises:
            RuntimeError: on a non-retryable HTTP error, or once every
                attempt has failed
        """
        attempts = self.api.max_retries
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                response = requests.post(
                    self.api.overpass_url,
                    data={"data": query},
                    headers={"User-Agent": self.api.user_agent},
                    timeout=self.api.request_timeout + self.api.overpass_timeout,
                )
                response.raise_for_status()
                return response.json()
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                if status not in RETRY_STATUS:
                    raise RuntimeError(f"Overpass API HTTP error {status} after {attempt} attempts") from e
                last_error = e
            except requests.exceptions.RequestException as e:
                last_error = e

            if attempt < attempts:
                wait_time = self.api.retry_delay * attempt
                logger.warning(f"Overpass request failed ({last_error}), attempt {attempt}/{attempts}; "
                               f"retrying in {wait_time}s")
                time.sleep(wait_time)

        raise RuntimeError(f"Overpass API request failed after {attempts} attempts: {last_error}")
