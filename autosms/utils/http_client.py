"""
HTTP client for AutoSMS API communication.
"""

import requests
import logging
from typing import Dict, Any, Optional

from autosms.exceptions import TransportError, HttpStatusError
from autosms.constants import DEFAULT_TIMEOUT
from autosms.models import RequestResult

logger = logging.getLogger(__name__)


class HTTPClient:
    """
    HTTP client wrapper for AutoSMS API requests.
    Handles authentication headers, TLS verification, error mapping and logging.
    Requests are never retried; a failed call is a single failed result.
    """

    def __init__(
        self,
        base_url: str,
        api_token: str,
        timeout: int = DEFAULT_TIMEOUT,
        csrf_token: Optional[str] = None,
        ca_bundle: Optional[str] = None,
        strict_status: bool = False
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL for API requests
            api_token: Bearer token sent with every request
            timeout: Request timeout in seconds
            csrf_token: Optional CSRF token; enables browser-style headers
            ca_bundle: Optional CA bundle path used to verify the server certificate
            strict_status: Accept only HTTP 200 instead of any 2xx status
        """
        self.base_url = base_url.rstrip('/')
        self.api_token = api_token
        self.timeout = timeout
        self.csrf_token = csrf_token
        self.strict_status = strict_status
        self.session = requests.Session()
        # Certificate and hostname checks stay on; a CA bundle only swaps the trust store.
        self.session.verify = ca_bundle or True

    def _get_full_url(self, endpoint: str) -> str:
        """Get full URL for endpoint."""
        endpoint = endpoint.lstrip('/')
        return f"{self.base_url}/{endpoint}"

    def _build_headers(self) -> Dict[str, str]:
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {self.api_token}',
            'Accept': 'application/json',
        }
        if self.csrf_token:
            headers['X-Requested-With'] = 'XMLHttpRequest'
            headers['X-CSRF-TOKEN'] = self.csrf_token
        return headers

    def _log_request(self, method: str, url: str, headers: Dict, data: Optional[Dict] = None):
        """Log API request details."""
        logger.info(f"AutoSMS API Request: {method} {url}")
        logger.debug(f"Headers: {self._sanitize_headers(headers)}")
        if data:
            logger.debug(f"Payload: {data}")

    def _log_response(self, response: requests.Response):
        """Log API response details."""
        logger.info(f"AutoSMS API Response: {response.status_code}")
        logger.debug(f"Response: {response.text}")

    def _sanitize_headers(self, headers: Dict) -> Dict:
        """Remove sensitive data from headers for logging."""
        sanitized = headers.copy()
        if 'Authorization' in sanitized:
            sanitized['Authorization'] = 'Bearer ***'
        if 'X-CSRF-TOKEN' in sanitized:
            sanitized['X-CSRF-TOKEN'] = '***'
        return sanitized

    def _is_accepted(self, status_code: int) -> bool:
        if self.strict_status:
            return status_code == 200
        return 200 <= status_code < 300

    def _handle_response(self, response: requests.Response) -> RequestResult:
        """
        Turn a response into a RequestResult.

        Args:
            response: Response object from requests

        Returns:
            RequestResult with raw body and lowercased headers

        Raises:
            HttpStatusError: If the status code is not accepted
        """
        self._log_response(response)

        if not self._is_accepted(response.status_code):
            raise HttpStatusError(response.status_code, response.text)

        return RequestResult(
            body=response.content or b'',
            headers={name.lower(): value for name, value in response.headers.items()},
            status_code=response.status_code
        )

    def _send(self, method: str, endpoint: str, data: Optional[Dict[str, Any]] = None) -> RequestResult:
        url = self._get_full_url(endpoint)
        headers = self._build_headers()

        self._log_request(method, url, headers, data)

        try:
            response = self.session.request(
                method,
                url,
                json=data,
                headers=headers,
                timeout=self.timeout,
                allow_redirects=False
            )
        except requests.Timeout as e:
            logger.warning(f"AutoSMS API request timed out after {self.timeout}s: {url}")
            raise TransportError(f"Request timed out: {str(e)}")
        except requests.RequestException as e:
            logger.warning(f"AutoSMS API connection failed: {url}: {str(e)}")
            raise TransportError(f"Connection failed: {str(e)}")

        return self._handle_response(response)

    def post(self, endpoint: str, data: Optional[Dict[str, Any]] = None) -> RequestResult:
        """
        Make POST request to API.

        Args:
            endpoint: API endpoint path
            data: Request payload, JSON-encoded

        Returns:
            RequestResult

        Raises:
            TransportError: If the connection fails or times out
            HttpStatusError: If the status code is not accepted
        """
        return self._send('POST', endpoint, data if data is not None else {})

    def get(self, endpoint: str) -> RequestResult:
        """
        Make GET request to API.

        Args:
            endpoint: API endpoint path

        Returns:
            RequestResult
        """
        return self._send('GET', endpoint)

    def close(self):
        """Close the session."""
        self.session.close()
