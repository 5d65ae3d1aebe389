import json
import os
from configparser import ConfigParser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Union

import toml
from dotenv import dotenv_values

DEFAULT_API_VERSION = "3.4"
DEFAULT_BASE_URL = "https://api.vimeo.com"
DEFAULT_SCOPES = ["public"]


def _parse_scopes(value: Union[str, List[str], None]) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [scope for scope in value.replace(",", " ").split() if scope]
    return [str(scope) for scope in value]


@dataclass
class AppConfiguration:
    """
    Configuration of an application registered with the Vimeo API.

    This class holds the values needed to talk to the API: the application's client
    credentials (used for basic authentication and the client-credentials grant), an
    optional access token, the API version requested in the ``Accept`` header and the
    API endpoint. The configuration can be provided via input parameters or fetched
    from a configuration file or environment variables.

    The priority for each field is as follows:
    1. If a parameter is passed during initialization, it is used.
    2. If a configuration file is given (JSON, TOML, INI or .env), its value is used.
    3. Otherwise it falls back to an environment variable.
    4. If neither is available (for required fields), it raises a ValueError.

    Recognized keys:
    - `VIMEO_CLIENT_ID`: The application's client identifier.
    - `VIMEO_CLIENT_SECRET`: The application's client secret.
    - `VIMEO_ACCESS_TOKEN`: An access token (e.g. a personal access token), optional.
    - `VIMEO_API_VERSION`: The API version, defaults to "3.4".
    - `VIMEO_API_URL`: The API endpoint, defaults to "https://api.vimeo.com".
    - `VIMEO_SCOPES`: Space separated scopes requested when authenticating, defaults to "public".

    Parameters:
    ----------
    client_identifier: str
        The client identifier. Required unless an access token is configured.
    client_secret: str
        The client secret. Required unless an access token is configured.
    access_token: str, optional
        A bearer token used instead of the client credentials.
    api_version: str, optional
        The version of the API this application's requests should use.
    base_url: str, optional
        The base URL of the Vimeo API.
    scopes: list of str, optional
        The scopes requested by the client-credentials grant.
    json_path, toml_path, ini_path, env_path: str, optional
        Path to a configuration file in the corresponding format.
    ini_profile: str, optional
        The section of the INI file to read. Defaults to "default".
    max_retries: int, optional
        Total retries performed by the transport for transient failures.
    retry_backoff_factor: float, optional
        Backoff factor between transport retries.

    Raises:
    -------
    ValueError
        If the client credentials are missing and no access token is available.
    """

    client_identifier: str = ""
    client_secret: str = ""
    access_token: str = ""
    api_version: str = ""
    base_url: str = ""
    scopes: List[str] = field(default_factory=list)
    json_path: str = field(default_factory=lambda: os.getenv("VIMEO_JSON_PATH", ""))
    toml_path: str = field(default_factory=lambda: os.getenv("VIMEO_TOML_PATH", ""))
    ini_path: str = field(default_factory=lambda: os.getenv("VIMEO_INI_PATH", ""))
    ini_profile: str = field(default_factory=lambda: os.getenv("VIMEO_INI_PROFILE", "default"))
    env_path: str = field(default_factory=lambda: os.getenv("VIMEO_ENV_PATH", ""))

    # Transport configuration
    max_retries: int = 3
    retry_backoff_factor: float = 1.0

    def __post_init__(self):
        """Resolve every field from its source and validate the credentials."""
        if self.json_path:
            config = self.load_config_from_file(self.json_path)
        elif self.toml_path:
            config = self.load_config_from_file(self.toml_path)
        elif self.ini_path:
            config = self.load_config_from_file(self.ini_path)
        elif self.env_path:
            config = self.load_config_from_file(self.env_path)
        else:
            config = dict(os.environ)

        self.client_identifier = self.client_identifier or config.get("VIMEO_CLIENT_ID") or ""
        self.client_secret = self.client_secret or config.get("VIMEO_CLIENT_SECRET") or ""
        self.access_token = self.access_token or config.get("VIMEO_ACCESS_TOKEN") or ""
        self.api_version = self.api_version or config.get("VIMEO_API_VERSION") or DEFAULT_API_VERSION
        self.base_url = (self.base_url or config.get("VIMEO_API_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.scopes = _parse_scopes(self.scopes or config.get("VIMEO_SCOPES")) or list(DEFAULT_SCOPES)

        missing_fields = []

        if not self.access_token:
            if not self.client_identifier:
                missing_fields.append("client_identifier (or VIMEO_CLIENT_ID)")
            if not self.client_secret:
                missing_fields.append("client_secret (or VIMEO_CLIENT_SECRET)")

        if missing_fields:
            raise ValueError(f"Missing required fields: {', '.join(missing_fields)}")

    @property
    def token_url(self) -> str:
        """The endpoint of the client-credentials grant."""
        return f"{self.base_url}/oauth/authorize/client"

    @property
    def has_client_credentials(self) -> bool:
        return bool(self.client_identifier and self.client_secret)

    def load_config_from_file(self, file_path: str) -> dict[str, Any]:
        file_path = os.path.expanduser(file_path)
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Configuration file '{file_path}' does not exist.")

        _, ext = os.path.splitext(file_path)
        ext = ext.lower()

        if ext == ".ini":
            return self.read_credentials_from_ini(file_path, self.ini_profile)
        if ext == ".env" or os.path.basename(file_path) == ".env":
            return {key: value for key, value in dotenv_values(file_path).items() if value is not None}

        with open(file_path, "r") as f:
            if ext == ".json":
                return json.load(f)
            elif ext == ".toml":
                return toml.load(f)
            else:
                raise ValueError(f"Unsupported config file type: '{ext}'. Use .json, .toml, .ini or .env")

    @staticmethod
    def read_credentials_from_ini(ini_path: str, profile: str = "default") -> dict[str, str]:
        """
        Read credentials from an INI file.

        Parameters
        ----------
        ini_path : str
            The path to the INI file containing credentials.
        profile : str, optional
            The profile section name to read from. Defaults to 'default'.

        Returns
        -------
        dict
            Dictionary containing credentials with upper-cased keys.

        Raises
        ------
        FileNotFoundError
            If the INI file does not exist.
        ValueError
            If the specified profile is not found in the INI file.
        """
        ini_file = Path(ini_path).expanduser().resolve()

        if not ini_file.exists():
            raise FileNotFoundError(f"INI config file not found at: {ini_file}")

        config_parser = ConfigParser()
        config_parser.read(ini_file)

        if profile not in config_parser:
            available = ", ".join(config_parser.sections()) or "no profiles"
            raise ValueError(f"Profile '{profile}' not found in INI file. Available profiles: {available}")

        credentials = {key.upper(): value for key, value in config_parser[profile].items()}

        return credentials

