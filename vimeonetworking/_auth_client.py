import base64
import json
import time
from typing import Callable, List, MutableMapping, Optional, Protocol, Union, runtime_checkable

import requests

from vimeonetworking._config import AppConfiguration
from vimeonetworking._headers import AUTHORIZATION_HEADER
from vimeonetworking._logging import LoggerConfig

logger = LoggerConfig(logger_name=__name__).get_logger()


@runtime_checkable
class AccessTokenProvider(Protocol):
    """
    Supplies the bearer token of the current session.

    Implementations are called for every request, possibly from any thread, and must
    return immediately from cached state. ``None`` or an empty string means that no
    authenticated session is available.
    """

    def get_access_token(self) -> Optional[str]: ...


TokenSource = Union[AccessTokenProvider, Callable[[], Optional[str]]]


def _read_token(source: Optional[TokenSource]) -> Optional[str]:
    if source is None:
        return None
    if isinstance(source, AccessTokenProvider):
        return source.get_access_token()
    return source()


class StaticTokenProvider:
    """
    An `AccessTokenProvider` returning a fixed token, e.g. a personal access token.
    """

    def __init__(self, access_token: Optional[str]):
        self.access_token = access_token

    def get_access_token(self) -> Optional[str]:
        return self.access_token


def basic_authorization_value(client_identifier: str, client_secret: str) -> Optional[str]:
    """
    Build the ``Basic`` authorization value for a client identifier and secret.

    Returns None when the credentials cannot be encoded as UTF-8.
    """
    try:
        credentials = f"{client_identifier}:{client_secret}".encode("utf-8")
    except UnicodeEncodeError:
        return None
    return f"Basic {base64.b64encode(credentials).decode('ascii')}"


class AuthorizationHeaderStrategy:
    """
    Chooses the ``Authorization`` header of an outbound request.

    A non-empty token from the access token provider always wins and produces a
    ``Bearer`` header. Without one, the application's client credentials produce a
    ``Basic`` header. With neither, no header is set.

    Attributes:
    ----------
    access_token_provider: AccessTokenProvider or callable, optional
        Queried on every request for the current bearer token.
    app_configuration: AppConfiguration, optional
        Supplies the client identifier and secret for basic authentication.
    """

    def __init__(
        self,
        access_token_provider: Optional[TokenSource] = None,
        app_configuration: Optional[AppConfiguration] = None,
    ):
        self.access_token_provider = access_token_provider
        self.app_configuration = app_configuration

    def authorization_value(self) -> Optional[str]:
        token = _read_token(self.access_token_provider)
        if token:
            return f"Bearer {token}"

        if self.app_configuration is not None and self.app_configuration.has_client_credentials:
            return basic_authorization_value(
                self.app_configuration.client_identifier,
                self.app_configuration.client_secret,
            )

        return None

    def apply(self, headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
        """
        Set the ``Authorization`` entry of ``headers`` in place, replacing any previous value.
        """
        value = self.authorization_value()
        if value is not None:
            headers[AUTHORIZATION_HEADER] = value
        return headers


class Authentication:
    """
    Authentication class using the OAuth 2.0 client credentials flow.

    This class exchanges the application's client credentials for an access token at
    the token endpoint. It implements `AccessTokenProvider`: once `authenticate` has
    succeeded, `get_access_token` returns the cached token without any network call.

    Attributes:
    ----------
    client_identifier: str
        client identifier
    client_secret: str
        client secret
    token_url: str
        The token endpoint URL to retrieve the access token.
    scopes: list of str
        The scopes requested for the token.
    token: str, optional
        The current access token, initially None.
    expiry: float, optional
        The timestamp of when the current token expires, None if it does not expire.
    """

    def __init__(
        self,
        client_identifier: str,
        client_secret: str,
        token_url: str,
        scopes: Optional[List[str]] = None,
    ):
        self.client_identifier = client_identifier
        self.client_secret = client_secret
        self.token_url = token_url
        self.scopes = scopes or ["public"]
        self.token: Optional[str] = None
        self.expiry: Optional[float] = None

    @classmethod
    def from_app_configuration(cls, app_configuration: AppConfiguration) -> "Authentication":
        return cls(
            app_configuration.client_identifier,
            app_configuration.client_secret,
            app_configuration.token_url,
            scopes=app_configuration.scopes,
        )

    def authenticate(self) -> str:
        """
        Authenticates using client credentials and retrieves an access token.

        This method performs an HTTP POST request to the token endpoint with HTTP Basic
        Authentication, requesting an access token via the client credentials grant type.

        Returns:
        -------
        str:
            The new access token.

        Raises:
        -------
        ValueError:
            If the authentication request fails, returns an invalid response, or if the response cannot be
            parsed as JSON.
        """
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        body = {"grant_type": "client_credentials", "scope": " ".join(self.scopes)}

        try:
            with requests.Session() as session:
                session.auth = (self.client_identifier, self.client_secret)

                response = session.post(self.token_url, headers=headers, data=body)
                response.raise_for_status()

                token_data = response.json()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            if status_code == 401:
                raise ValueError(
                    "Authentication failed: 401 Unauthorized. Invalid credentials, "
                    "check VIMEO_CLIENT_ID and VIMEO_CLIENT_SECRET."
                ) from e
            raise ValueError(f"Authentication failed: HTTP {status_code}: {e}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Authentication failed: Invalid JSON response: {e}") from e
        except requests.exceptions.ConnectionError as e:
            raise ValueError(f"Authentication failed: Unable to connect to {self.token_url}, check VIMEO_API_URL.") from e
        except requests.exceptions.Timeout as e:
            raise ValueError(f"Authentication failed: Request timeout reaching {self.token_url}.") from e
        except requests.RequestException as e:
            raise ValueError(f"Authentication failed: {e}") from e

        if not isinstance(token_data, dict) or "access_token" not in token_data:
            raise ValueError(f"Invalid response from Auth provider: {token_data}")

        self.token = token_data["access_token"]
        expires_in = token_data.get("expires_in")
        self.expiry = time.time() + expires_in if isinstance(expires_in, (int, float)) else None

        logger.info("Authenticated with client credentials (scope: %s)", token_data.get("scope", body["scope"]))
        return self.token

    def get_access_token(self) -> Optional[str]:
        """
        Returns the cached access token, or None if there is none or it has expired.
        """
        if self.expiry is not None and time.time() >= self.expiry:
            return None
        return self.token
