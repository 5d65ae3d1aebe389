import json
from typing import Any, Iterator, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, urlsplit

from requests.structures import CaseInsensitiveDict
from requests.utils import default_user_agent

from vimeonetworking._http_client import HTTPMethod, HTTPRequest
from vimeonetworking.exceptions import RequestSerializationError

QUERY_STRING_METHODS = frozenset({HTTPMethod.GET, HTTPMethod.HEAD, HTTPMethod.DELETE})


def _escape(value: str) -> str:
    return quote(value, safe="")


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _query_pairs(key: Optional[str], value: Any) -> Iterator[Tuple[str, Any]]:
    if isinstance(value, Mapping):
        for nested_key in sorted(value, key=str):
            name = f"{key}[{nested_key}]" if key else str(nested_key)
            yield from _query_pairs(name, value[nested_key])
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _query_pairs(f"{key}[]", item)
    elif isinstance(value, (set, frozenset)):
        for item in sorted(value, key=str):
            yield from _query_pairs(f"{key}[]", item)
    else:
        if key is None:
            raise RequestSerializationError(f"Cannot encode {type(value).__name__} as a query string")
        yield key, value


def query_string_from_parameters(parameters: Mapping[str, Any]) -> str:
    """
    Encode parameters as a URL query string.

    Keys are sorted, nested mappings are written as ``key[nested]=value`` and
    sequences as ``key[]=value``. A ``None`` value writes the bare key.

    Parameters
    ----------
    parameters : Mapping[str, Any]
        The parameters to encode.

    Returns
    -------
    str
        The percent-encoded query string, without the leading ``?``.

    Raises
    ------
    RequestSerializationError
        If the parameters are not a mapping.
    """
    if not isinstance(parameters, Mapping):
        raise RequestSerializationError(
            f"Query string parameters must be a mapping, got {type(parameters).__name__}"
        )

    components: List[str] = []
    for key, value in _query_pairs(None, parameters):
        if value is None:
            components.append(_escape(key))
        else:
            components.append(f"{_escape(key)}={quote(_stringify(value), safe='')}")
    return "&".join(components)


class JSONRequestSerializer:
    """
    Builds `HTTPRequest` objects whose parameters are encoded as JSON.

    Parameters of GET, HEAD and DELETE requests are encoded into the URL query
    string; for every other method they become a JSON body. Default headers set on
    the serializer are added to each request that does not already carry them.

    Attributes:
    ----------
    default_headers: CaseInsensitiveDict
        Headers applied to every request the serializer builds.
    """

    def __init__(self):
        self.default_headers: CaseInsensitiveDict[str] = CaseInsensitiveDict()
        self.default_headers["User-Agent"] = default_user_agent()

    def set_header_value(self, field: str, value: Optional[str]) -> None:
        """
        Set or clear (with ``None``) a default header.
        """
        if value is None:
            self.default_headers.pop(field, None)
        else:
            self.default_headers[field] = value

    def header_value(self, field: str) -> Optional[str]:
        return self.default_headers.get(field)

    def request(
        self,
        method: Union[HTTPMethod, str],
        url: str,
        parameters: Any = None,
    ) -> HTTPRequest:
        """
        Build a new request.

        Parameters
        ----------
        method : Union[HTTPMethod, str]
            The HTTP method.
        url : str
            Absolute http(s) URL of the resource.
        parameters : Any, optional
            Query parameters or JSON body, depending on the method.

        Returns
        -------
        HTTPRequest
            The serialized request.

        Raises
        ------
        RequestSerializationError
            If the method or URL is invalid or the parameters cannot be encoded.
        """
        try:
            http_method = HTTPMethod(method.upper() if isinstance(method, str) else method)
        except ValueError:
            raise RequestSerializationError(f"Unsupported HTTP method: {method}")

        parts = urlsplit(url or "")
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise RequestSerializationError(f"Invalid request URL: {url!r}")

        request = HTTPRequest(method=http_method, url=url)
        return self.request_by_serializing_request(request, parameters)

    def request_by_serializing_request(self, request: HTTPRequest, parameters: Any = None) -> HTTPRequest:
        """
        Return a copy of ``request`` with default headers and ``parameters`` applied.

        Raises
        ------
        RequestSerializationError
            If the parameters cannot be encoded.
        """
        serialized = request.copy()

        for field, value in self.default_headers.items():
            if field not in serialized.headers:
                serialized.headers[field] = value

        if parameters is None:
            return serialized

        if serialized.method in QUERY_STRING_METHODS:
            query = query_string_from_parameters(parameters)
            if query:
                separator = "&" if urlsplit(serialized.url).query else "?"
                serialized.url = f"{serialized.url}{separator}{query}"
            return serialized

        if "Content-Type" not in serialized.headers:
            serialized.headers["Content-Type"] = "application/json"

        try:
            serialized.body = json.dumps(parameters).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise RequestSerializationError(f"Failed to encode parameters as JSON: {e}") from e

        return serialized
