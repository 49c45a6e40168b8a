"""
Fetcher for current weather from wttr.in.
"""

import json
import threading
from typing import Any
from urllib.parse import quote

import requests

from weatherbar import __version__
from weatherbar.exceptions import FetchTimeoutError
from weatherbar.exceptions import HTTPStatusError
from weatherbar.exceptions import NetworkError
from weatherbar.exceptions import ParseError
from weatherbar.models.current_condition import CurrentCondition
from weatherbar.utils.logging_utils import EnhancedLoggerMixin


class _InFlightRequest:
    """State shared between a fetch and the worker thread running it."""

    def __init__(self):
        self.aborted = threading.Event()
        self.response: requests.Response | None = None
        self.body: bytes | None = None
        self.error: Exception | None = None


class WttrService(EnhancedLoggerMixin):
    """Performs the single upstream call and validates its shape."""

    service_type: str = "wttr"
    DEFAULT_BASE_URL: str = "https://wttr.in"
    CHUNK_SIZE: int = 8192

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        language: str = "zh-cn",
        session: requests.Session | None = None
    ):
        """Initialize service.
        
        Args:
            base_url: wttr.in compatible endpoint
            language: Language of the condition description
            session: Optional preconfigured session
        """
        super().__init__()
        self.base_url = base_url.rstrip('/')
        self.language = language
        
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': f'weatherbar/{__version__}',
            'Accept': 'application/json'
        })
        self.set_log_context(service=self.service_type)

    def build_url(self, location: str) -> str:
        """Endpoint URL for a location, escaped as a single path segment."""
        return f"{self.base_url}/{quote(location, safe='')}"

    def fetch(self, location: str, timeout: float) -> dict[str, Any]:
        """Fetch the current weather for a location.
        
        ``timeout`` bounds the whole round trip: connecting, waiting for
        the response and reading the body. The request runs on a daemon
        worker thread; once the deadline elapses the response is closed
        and abandoned.
        
        Args:
            location: City or address understood by wttr.in
            timeout: Deadline in seconds
            
        Returns:
            dict: Decoded ``format=j1`` payload
            
        Raises:
            NetworkError: If the request could not be sent or read
            FetchTimeoutError: If the deadline elapsed
            HTTPStatusError: If the status code is not 200
            ParseError: If the body is not a usable payload
        """
        url = self.build_url(location)
        params = {'lang': self.language, 'format': 'j1'}
        self.debug("Fetching weather", url=url, timeout=timeout)
        
        request = _InFlightRequest()
        worker = threading.Thread(
            target=self._perform,
            args=(url, params, timeout, request),
            name=f"{self.service_type}-fetch",
            daemon=True
        )
        worker.start()
        worker.join(timeout)
        
        if worker.is_alive():
            self._abort(request)
            self.warning("Fetch deadline elapsed", url=url, timeout=timeout)
            raise FetchTimeoutError(f"request timed out after {timeout}s, url:{url}")
        if request.error is not None:
            raise request.error
        
        body = request.body or b""
        payload = self._parse_body(body)
        # Rejects structurally valid but empty responses
        CurrentCondition.from_payload(payload, self.language)
        self.debug("Fetched weather", bytes=len(body))
        return payload

    def _perform(self, url: str, params: dict[str, str], timeout: float, request: _InFlightRequest) -> None:
        """Worker thread body; the outcome is handed back through ``request``."""
        try:
            request.body = self._request(url, params, timeout, request)
        except Exception as e:
            request.error = e

    def _request(self, url: str, params: dict[str, str], timeout: float, request: _InFlightRequest) -> bytes:
        try:
            response = self.session.get(url, params=params, timeout=timeout, stream=True)
        except requests.exceptions.Timeout as e:
            raise FetchTimeoutError(f"request timed out after {timeout}s, url:{url}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"send request failed, url:{url}, err:{e}") from e
        
        request.response = response
        try:
            if response.status_code != 200:
                raise HTTPStatusError(
                    f"response status code invalid, status: {response.reason}, code:{response.status_code}",
                    response.status_code
                )
            return self._read_body(response, request, timeout)
        finally:
            response.close()

    def _read_body(self, response: requests.Response, request: _InFlightRequest, timeout: float) -> bytes:
        """Read the response body in chunks until done or aborted."""
        chunks: list[bytes] = []
        try:
            for chunk in response.iter_content(chunk_size=self.CHUNK_SIZE):
                if request.aborted.is_set():
                    raise FetchTimeoutError(f"request timed out after {timeout}s while reading body")
                chunks.append(chunk)
        except requests.exceptions.Timeout as e:
            raise FetchTimeoutError(f"request timed out after {timeout}s while reading body") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"read response body failed: {e}") from e
        return b"".join(chunks)

    def _abort(self, request: _InFlightRequest) -> None:
        """Mark the request abandoned and close its connection if one is open."""
        request.aborted.set()
        response = request.response
        if response is None:
            return
        try:
            response.close()
        except OSError as e:
            self.debug("Closing abandoned response failed", error=str(e))

    def _parse_body(self, body: bytes) -> dict[str, Any]:
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise ParseError(f"parse response body failed: {e}") from e
        if not isinstance(payload, dict):
            raise ParseError(f"parse response body failed: expected object, got {type(payload).__name__}")
        return payload
