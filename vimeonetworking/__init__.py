from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("vimeonetworking")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Authentication-related imports
from vimeonetworking._auth_client import (
    AccessTokenProvider,
    Authentication,
    AuthorizationHeaderStrategy,
    StaticTokenProvider,
)

# Client and config-related imports
from vimeonetworking._api_requester import APIRequester
from vimeonetworking._config import AppConfiguration
from vimeonetworking._vimeo_client import VimeoClient

# Request serialization imports
from vimeonetworking._headers import UserAgentDecorator
from vimeonetworking._json_serializer import JSONRequestSerializer
from vimeonetworking._request_serializer import RequestSerializer

# HTTP-related imports
from vimeonetworking._http_client import HTTPClient, HTTPMethod, HTTPRequest, HTTPResponse

# Models
from vimeonetworking.videos.models import LiveModel, LiveStreamingStatus

__all__ = [
    "AccessTokenProvider",
    "Authentication",
    "AuthorizationHeaderStrategy",
    "StaticTokenProvider",
    "APIRequester",
    "AppConfiguration",
    "VimeoClient",
    "UserAgentDecorator",
    "JSONRequestSerializer",
    "RequestSerializer",
    "HTTPClient",
    "HTTPMethod",
    "HTTPRequest",
    "HTTPResponse",
    "LiveModel",
    "LiveStreamingStatus",
]
