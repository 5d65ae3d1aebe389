from vimeonetworking._api_requester import APIRequester
from vimeonetworking._auth_client import Authentication
from vimeonetworking._config import AppConfiguration
from vimeonetworking.videos import VideoService


class VimeoClient:
    """
    VimeoClient is the main entry point for interacting with the Vimeo API.

    Requests are authorized with the configured access token when there is one, and
    with the application's client credentials (basic authentication) otherwise.
    Calling `authenticate` exchanges the client credentials for an access token, which
    is then used for every following request.

    Attributes:
    ----------
    config: AppConfiguration
        The configuration object containing the credentials, API version and base_url.
    auth: Authentication, optional
        The client-credentials grant, created when the configuration has client credentials.
    api_requester: APIRequester
        An instance that handles sending authenticated requests to the Vimeo API.
    """

    def __init__(self, config: AppConfiguration):
        self.config = config
        self.auth = Authentication.from_app_configuration(config) if config.has_client_credentials else None
        self.api_requester = APIRequester(config=config)

    def authenticate(self) -> str:
        """
        Performs the client-credentials grant and authorizes later requests with its token.

        Returns:
        -------
        str:
            The access token.

        Raises:
        -------
        ValueError:
            If the configuration has no client credentials or the grant fails.
        """
        if self.auth is None:
            raise ValueError("Client credentials are required to authenticate")
        token = self.auth.authenticate()
        self.api_requester.serializer.access_token_provider = self.auth
        return token

    @property
    def videos(self) -> VideoService:
        """
        Lazily initializes and returns the VideoService for video endpoints.
        """
        if not hasattr(self, "_video_service"):
            self._video_service = VideoService(self.api_requester)
        return self._video_service
