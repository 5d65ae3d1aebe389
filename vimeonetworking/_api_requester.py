from typing import Any, Optional, Union

from vimeonetworking._auth_client import StaticTokenProvider
from vimeonetworking._config import AppConfiguration
from vimeonetworking._http_client import HTTPClient, HTTPMethod, HTTPRequest, HTTPResponse
from vimeonetworking._logging import LoggerConfig
from vimeonetworking._request_serializer import RequestSerializer

logger = LoggerConfig(logger_name=__name__).get_logger()


class APIRequester:
    """
    Handles high-level API requests, delegating serialization and transport.

    This class turns a method, an API path and parameters into a fully decorated
    request through the `RequestSerializer`, and hands it to the `HTTPClient`.

    Attributes:
    ----------
    config: AppConfiguration
        The configuration object containing settings for the API requester.
    base_url: str
        The base URL for all API calls.
    serializer: RequestSerializer
        Builds requests and adds the Accept, Authorization and User-Agent headers.
    http_client: HTTPClient
        The HTTP client responsible for making actual HTTP requests.
    """

    def __init__(
        self,
        config: AppConfiguration,
        serializer: Optional[RequestSerializer] = None,
        http_client: Optional[HTTPClient] = None,
    ):
        self.config = config
        self.base_url = config.base_url
        self.serializer = serializer or self._create_serializer(config)
        self.http_client = http_client or HTTPClient(
            max_retries=config.max_retries,
            retry_backoff_factor=config.retry_backoff_factor,
        )

    @staticmethod
    def _create_serializer(config: AppConfiguration) -> RequestSerializer:
        if config.access_token:
            return RequestSerializer(
                access_token_provider=StaticTokenProvider(config.access_token),
                api_version=config.api_version,
            )
        return RequestSerializer(app_configuration=config)

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def send_request(
        self,
        method: Union[HTTPMethod, str],
        path: str,
        parameters: Any = None,
    ) -> HTTPResponse:
        """
        Builds a decorated request for ``path`` and sends it.

        Parameters:
        ----------
        method: HTTPMethod or str
            The HTTP method.
        path: str
            An API path such as "/videos/123", or an absolute URL.
        parameters: Any, optional
            Query parameters or JSON body.

        Returns:
        -------
        HTTPResponse:
            The HTTPResponse object containing status code, body, and headers.

        Raises:
        -------
        RequestSerializationError:
            If the request cannot be built.
        """
        request = self.serializer.build_request(method, self.url_for(path), parameters)
        return self.send(request)

    def send(self, request: HTTPRequest) -> HTTPResponse:
        logger.debug("%s %s", request.method.value, request.url)
        return self.http_client.send(request)
