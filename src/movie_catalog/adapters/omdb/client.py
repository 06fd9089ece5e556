import logging
from typing import Any, Optional

import certifi  # Provides Mozilla's CA bundle for SSL certificate verification
import requests
from pydantic import ValidationError as SettingsValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from movie_catalog.exceptions import (
    ExternalFailure,
    ExternalTimeout,
    InvalidCredential,
    MissingCredentialError,
)
from movie_catalog.settings import OMDbSettings, Settings, get_settings

logger = logging.getLogger(__name__)


def resolve_omdb_settings(cfg: Settings) -> OMDbSettings:
    """
    Return the OMDb settings, reading OMDB_* variables when the app settings
    carry none. A missing or blank API key is a startup error.
    """
    omdb = cfg.omdb
    if omdb is None:
        try:
            omdb = OMDbSettings()
        except SettingsValidationError as e:
            raise MissingCredentialError("OMDB_API_KEY environment variable is required") from e

    if not omdb.api_key.get_secret_value().strip():
        raise MissingCredentialError("OMDB_API_KEY environment variable is required")
    return omdb


class OMDb_APIClient:
    def __init__(self,
                omdb: Optional[OMDbSettings] = None,
                verify_ssl: Optional[bool] = None,
                status_forcelist: tuple = (429, 500, 502, 503, 504)):
        """
        Initializes a requests.Session with:
            - JSON accept header
            - HTTPAdapter whose retry budget comes from OMDB_MAX_RETRIES (0 by default)

        The API key is sent as the ``apikey`` query parameter on each request,
        which is how OMDb authenticates.
        """
        cfg = get_settings()
        self.omdb: OMDbSettings = omdb or resolve_omdb_settings(cfg)
        if not self.omdb.api_key.get_secret_value().strip():
            raise MissingCredentialError("OMDB_API_KEY environment variable is required")

        verify = cfg.verify_ssl if verify_ssl is None else verify_ssl
        self.verify = certifi.where() if verify else False

        self.session = requests.Session()
        retry_strategy = Retry(
            total=self.omdb.max_retries,
            connect=self.omdb.max_retries,
            read=self.omdb.max_retries,
            backoff_factor=0.5,
            status_forcelist=status_forcelist,
            allowed_methods=frozenset(["GET"]),
            raise_on_status=False
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        self.session.headers.update({
            "Accept": "application/json",
        })
        logger.info("OMDb client initialized")

    def _handle_response(self, resp: requests.Response) -> Any:
        """
        Handle API response with proper error checking and JSON parsing.

        Args:
            resp: HTTP response object

        Returns:
            Parsed JSON data

        Raises:
            InvalidCredential: For HTTP 401
            ExternalFailure: For other 4xx/5xx codes or a body that is not JSON
        """
        if resp.status_code == 401:
            logger.error(f"OMDb rejected the API key (HTTP 401): {resp.text[:200]}")
            raise InvalidCredential()

        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"HTTP {resp.status_code} error from OMDb: {resp.text[:200]}")
            raise ExternalFailure(f"OMDb API returned HTTP {resp.status_code}") from e

        if not resp.content:
            logger.warning("Empty response received from OMDb")
            return {}

        try:
            return resp.json()
        except ValueError as e:
            logger.error(f"Invalid JSON response from OMDb: {resp.text[:200]}...")
            raise ExternalFailure("OMDb API returned an invalid response") from e

    def get(self, params: Optional[dict] = None) -> Any:
        """
        Perform a GET request against the OMDb base URL, returning parsed JSON.

        Network problems (connection refused, DNS, timeouts) surface as
        ExternalTimeout; the request never waits longer than the configured
        timeout.
        """
        query = dict(params or {})
        query["apikey"] = self.omdb.api_key.get_secret_value()
        url = str(self.omdb.api_base_url)

        try:
            resp = self.session.get(
                url,
                params=query,
                timeout=self.omdb.timeout_seconds,
                verify=self.verify,
            )
        except (requests.Timeout, requests.ConnectionError) as e:
            logger.error(f"OMDb API unreachable: {e}")
            raise ExternalTimeout() from e
        except requests.RequestException as e:
            logger.error(f"OMDb API request failed: {e}")
            raise ExternalFailure() from e

        return self._handle_response(resp)

    def close(self) -> None:
        self.session.close()
