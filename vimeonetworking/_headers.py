from typing import MutableMapping, Optional

from vimeonetworking._logging import LoggerConfig

logger = LoggerConfig(logger_name=__name__).get_logger()

ACCEPT_HEADER = "Accept"
AUTHORIZATION_HEADER = "Authorization"
USER_AGENT_HEADER = "User-Agent"

DEFAULT_FRAMEWORK_NAME = "VimeoNetworking"
DEFAULT_VENDOR = "vimeo"


def accept_header_value(api_version: str, vendor: str = DEFAULT_VENDOR) -> str:
    """
    Build the versioned media type sent in the ``Accept`` header.

    >>> accept_header_value("3.4")
    'application/vnd.vimeo.*+json; version=3.4'
    """
    return f"application/vnd.{vendor}.*+json; version={api_version}"


class UserAgentDecorator:
    """
    Tags requests with the identity of this framework.

    The identifier ``<framework_name>/<framework_version>`` is appended to the
    user-agent already present on a request, or becomes the whole header when there
    is none. Decoration is not idempotent: decorating the same headers twice appends
    the identifier twice.

    Attributes:
    ----------
    framework_name: str
        Product token of the framework, e.g. "VimeoNetworking".
    framework_version: str, optional
        Version of the framework. When it is unknown the user-agent is left untouched.
    """

    def __init__(self, framework_name: str = DEFAULT_FRAMEWORK_NAME, framework_version: Optional[str] = None):
        self.framework_name = framework_name
        self.framework_version = framework_version

    @property
    def framework_identifier(self) -> Optional[str]:
        if not self.framework_version:
            return None
        return f"{self.framework_name}/{self.framework_version}"

    def decorate(self, headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
        """
        Add the framework identifier to the ``User-Agent`` entry of ``headers`` in place.

        Parameters:
        ----------
        headers: MutableMapping[str, str]
            Request headers, ideally a case-insensitive mapping.

        Returns:
        -------
        MutableMapping[str, str]:
            The same headers object.
        """
        identifier = self.framework_identifier
        if identifier is None:
            logger.error("Unable to get the framework version")
            return headers

        existing_user_agent = headers.get(USER_AGENT_HEADER)
        if existing_user_agent is not None:
            headers[USER_AGENT_HEADER] = f"{existing_user_agent} {identifier}"
        else:
            headers[USER_AGENT_HEADER] = identifier

        return headers
