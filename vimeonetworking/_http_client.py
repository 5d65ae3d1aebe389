from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict
from urllib3 import Retry


class HTTPMethod(str, Enum):
    """
    The HTTP verbs a request can be built with.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"


class HTTPRequest:
    """
    Represents an HTTP request with method, URL, headers, and body.

    Attributes:
    ----------
    method: HTTPMethod
        The HTTP method (e.g., GET, POST, PUT, etc.).
    url: str
        The full URL to send the request to, including any encoded query string.
    headers: CaseInsensitiveDict
        The headers to be included in the request. Lookups ignore case, iteration keeps
        insertion order.
    body: bytes, optional
        The encoded payload of the request (for POST, PUT requests, etc.).
    """

    def __init__(
        self,
        method: Union[HTTPMethod, str],
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
    ):
        self.method = HTTPMethod(method.upper() if isinstance(method, str) else method)
        self.url = url
        self.headers: CaseInsensitiveDict[str] = CaseInsensitiveDict(headers or {})
        self.body = body
        self.timeout_seconds: int = 15

    def copy(self) -> "HTTPRequest":
        """
        Returns an independent copy of the request, headers included.
        """
        request = HTTPRequest(self.method, self.url, headers=self.headers.copy(), body=self.body)
        request.timeout_seconds = self.timeout_seconds
        return request

    def __repr__(self) -> str:
        return f"HTTPRequest(method={self.method.value!r}, url={self.url!r})"


class HTTPResponse:
    """
    Represents an HTTP response with status code, body, and headers.

    Attributes:
    ----------
    status_code: int
        The HTTP status code of the response.
    body: dict
        The body of the response (assumed to be JSON).
    headers: dict
        The headers returned by the server.
    """

    def __init__(self, status_code: int, body: Dict[str, Any], headers: Mapping[str, str]):
        self.status_code = status_code
        self.body = body
        self.headers = headers


class HTTPClient:
    """
    Responsible for making actual HTTP requests using the `requests` library.

    This class abstracts the HTTP communication and interacts directly with external
    services using the given `HTTPRequest` object. Transient failures (429 and 5xx)
    are retried by a `urllib3` retry strategy mounted on the session.

    Attributes:
    ----------
    max_retries: int
        Total number of retries per request.
    retry_backoff_factor: float
        Backoff factor applied between retry attempts.
    """

    def __init__(self, max_retries: int = 3, retry_backoff_factor: float = 1.0):
        self.max_retries = max_retries
        self.retry_backoff_factor = retry_backoff_factor
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        if self._session is None:
            retry_strategy = Retry(
                total=self.max_retries,
                status_forcelist=[429, 500, 502, 503, 504],
                backoff_factor=self.retry_backoff_factor,
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            session = requests.Session()
            session.mount("https://", adapter)
            session.mount("http://", adapter)
            self._session = session
        return self._session

    def send(self, request: HTTPRequest) -> HTTPResponse:
        """
        Sends an HTTP request and returns the HTTP response.

        Parameters:
        ----------
        request: HTTPRequest
            The HTTPRequest object containing method, URL, headers, and body.

        Returns:
        -------
        HTTPResponse:
            The response object containing status code, body, and headers.
        """
        response = self._get_session().request(
            method=request.method.value,
            url=request.url,
            headers=dict(request.headers),
            data=request.body,
            timeout=request.timeout_seconds,
        )

        # Handle responses with no content (204) or empty bodies
        try:
            body = response.json() if response.content else {}
        except (ValueError, requests.exceptions.JSONDecodeError):
            body = {}

        return HTTPResponse(
            status_code=response.status_code,
            body=body,
            headers=response.headers,
        )
