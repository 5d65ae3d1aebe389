from importlib.metadata import PackageNotFoundError, version
from typing import Any, Optional, Union

from vimeonetworking._auth_client import AuthorizationHeaderStrategy, TokenSource
from vimeonetworking._config import AppConfiguration
from vimeonetworking._headers import (
    ACCEPT_HEADER,
    DEFAULT_FRAMEWORK_NAME,
    DEFAULT_VENDOR,
    UserAgentDecorator,
    accept_header_value,
)
from vimeonetworking._http_client import HTTPMethod, HTTPRequest
from vimeonetworking._json_serializer import JSONRequestSerializer
from vimeonetworking._logging import LoggerConfig
from vimeonetworking.exceptions import RequestSerializationError

logger = LoggerConfig(logger_name=__name__).get_logger()


def installed_framework_version() -> Optional[str]:
    """Version of the installed vimeonetworking distribution, None when it is not installed."""
    try:
        return version("vimeonetworking")
    except PackageNotFoundError:
        return None


class RequestSerializer:
    """
    Serializes requests to the Vimeo API and adds Vimeo-specific headers to them.

    The serializer is created with exactly one credential source: either a dynamic
    access token provider (together with the API version) or a static
    `AppConfiguration`. Every request it builds carries:

    - ``Accept: application/vnd.<vendor>.*+json; version=<api_version>``
    - ``Authorization``: ``Bearer <token>`` while the provider returns a token,
      otherwise ``Basic <base64(client_identifier:client_secret)>`` when an app
      configuration is set, otherwise nothing.
    - ``User-Agent``: the transport's user-agent followed by ``<framework_name>/<framework_version>``.

    An access token provider may be attached after construction to a serializer
    created from an app configuration; its token then takes priority.

    Attributes:
    ----------
    api_version: str
        The API version requested in the ``Accept`` header.
    json_serializer: JSONRequestSerializer
        Builds the undecorated requests and holds the default headers.
    user_agent_decorator: UserAgentDecorator
        Appends the framework identifier to the user-agent.
    """

    def __init__(
        self,
        access_token_provider: Optional[TokenSource] = None,
        api_version: Optional[str] = None,
        app_configuration: Optional[AppConfiguration] = None,
        *,
        framework_name: str = DEFAULT_FRAMEWORK_NAME,
        framework_version: Optional[str] = None,
        vendor: str = DEFAULT_VENDOR,
    ):
        """
        Parameters:
        ----------
        access_token_provider: AccessTokenProvider or callable, optional
            Returns the bearer token of the current session, or None.
        api_version: str, optional
            Version of the API the requests should use. Required with an access token provider.
        app_configuration: AppConfiguration, optional
            Static configuration used for basic authentication; its API version is used.
        framework_name: str
            Product token appended to the user-agent.
        framework_version: str, optional
            Version appended to the user-agent. Defaults to the installed package version.
        vendor: str
            Vendor segment of the ``Accept`` media type.

        Raises:
        -------
        ValueError:
            If both or neither credential sources are given, the app configuration lacks a client
            identifier or secret, or the API version is missing.
        """
        if (access_token_provider is None) == (app_configuration is None):
            raise ValueError("Provide exactly one of access_token_provider or app_configuration")

        if app_configuration is not None:
            if not app_configuration.has_client_credentials:
                raise ValueError("app_configuration requires a client identifier and secret")
            api_version = app_configuration.api_version

        if not api_version:
            raise ValueError("api_version is required")

        self.api_version = api_version
        self._authorization = AuthorizationHeaderStrategy(access_token_provider, app_configuration)
        self.user_agent_decorator = UserAgentDecorator(
            framework_name=framework_name,
            framework_version=framework_version or installed_framework_version(),
        )
        self.json_serializer = JSONRequestSerializer()
        self.json_serializer.set_header_value(ACCEPT_HEADER, accept_header_value(api_version, vendor))

    @property
    def access_token_provider(self) -> Optional[TokenSource]:
        return self._authorization.access_token_provider

    @access_token_provider.setter
    def access_token_provider(self, provider: Optional[TokenSource]) -> None:
        self._authorization.access_token_provider = provider

    @property
    def app_configuration(self) -> Optional[AppConfiguration]:
        return self._authorization.app_configuration

    def build_request(
        self,
        method: Union[HTTPMethod, str],
        url: str,
        parameters: Any = None,
    ) -> HTTPRequest:
        """
        Build a request and decorate it with the authorization and user-agent headers.

        Parameters:
        ----------
        method: HTTPMethod or str
            The HTTP method.
        url: str
            The absolute URL of the resource.
        parameters: Any, optional
            Query parameters (GET, HEAD, DELETE) or JSON body (other methods).

        Returns:
        -------
        HTTPRequest:
            The decorated request.

        Raises:
        -------
        RequestSerializationError:
            Propagated unchanged from the JSON request builder.
        """
        request = self.json_serializer.request(method, url, parameters)
        return self.configure_headers(request)

    def decorate_existing_request(self, request: HTTPRequest, parameters: Any = None) -> Optional[HTTPRequest]:
        """
        Re-serialize ``parameters`` onto an existing request and decorate its headers.

        Used for requests that were not created by `build_request`, such as upload requests.

        Returns:
        -------
        HTTPRequest, optional:
            A decorated copy of the request, or None if the parameters could not be serialized.
        """
        try:
            serialized = self.json_serializer.request_by_serializing_request(request, parameters)
        except RequestSerializationError as e:
            logger.warning("Could not serialize parameters onto %r: %s", request, e)
            return None
        return self.configure_headers(serialized)

    def configure_headers(self, request: HTTPRequest) -> HTTPRequest:
        """
        Apply the header decoration pipeline to ``request`` in place and return it.

        ``Authorization`` is overwritten on every call; ``User-Agent`` is appended to on every call.
        """
        self._authorization.apply(request.headers)
        self.user_agent_decorator.decorate(request.headers)
        return request
