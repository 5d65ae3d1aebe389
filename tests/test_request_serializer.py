import base64
import json
import os
import unittest
from unittest.mock import Mock, patch

from requests.utils import default_user_agent

from vimeonetworking._auth_client import StaticTokenProvider
from vimeonetworking._config import AppConfiguration
from vimeonetworking._http_client import HTTPRequest
from vimeonetworking._request_serializer import RequestSerializer
from vimeonetworking.exceptions import RequestSerializationError

URL = "https://api.vimeo.com/me/videos"


def app_configuration(**kwargs):
    values = {"client_identifier": "id1", "client_secret": "sec1", "api_version": "3.4"}
    values.update(kwargs)
    return AppConfiguration(**values)


class TestRequestSerializerConstruction(unittest.TestCase):
    def test_requires_a_credential_source(self):
        with self.assertRaises(ValueError):
            RequestSerializer(api_version="3.4")

    def test_rejects_both_credential_sources(self):
        with self.assertRaises(ValueError):
            RequestSerializer(access_token_provider=lambda: "t", api_version="3.4", app_configuration=app_configuration())

    @patch.dict(os.environ, {}, clear=True)
    def test_rejects_app_configuration_without_client_credentials(self):
        for identifier, secret in (("", ""), ("id1", ""), ("", "sec1")):
            with self.subTest(identifier=identifier, secret=secret):
                config = AppConfiguration(access_token="tok", client_identifier=identifier, client_secret=secret)

                with self.assertRaises(ValueError):
                    RequestSerializer(app_configuration=config, framework_version="1.0")

    def test_requires_api_version_with_token_provider(self):
        with self.assertRaises(ValueError):
            RequestSerializer(access_token_provider=lambda: "t")

    def test_accept_header_from_api_version(self):
        serializer = RequestSerializer(access_token_provider=lambda: "t", api_version="3.2", framework_version="1.0")

        request = serializer.build_request("GET", URL)

        self.assertEqual(request.headers["Accept"], "application/vnd.vimeo.*+json; version=3.2")

    def test_accept_header_from_app_configuration(self):
        serializer = RequestSerializer(app_configuration=app_configuration(api_version="3.4"), framework_version="1.0")

        self.assertEqual(serializer.api_version, "3.4")
        self.assertEqual(serializer.json_serializer.header_value("Accept"), "application/vnd.vimeo.*+json; version=3.4")

    @patch("vimeonetworking._request_serializer.installed_framework_version", return_value="9.9.9")
    def test_framework_version_defaults_to_installed_version(self, _mock_version):
        serializer = RequestSerializer(access_token_provider=lambda: None, api_version="3.4")

        self.assertEqual(serializer.user_agent_decorator.framework_identifier, "VimeoNetworking/9.9.9")


class TestAuthorizationHeader(unittest.TestCase):
    def test_bearer_token(self):
        serializer = RequestSerializer(access_token_provider=lambda: "abc123", api_version="3.4", framework_version="1.0")

        request = serializer.build_request("GET", URL)

        self.assertEqual(request.headers["Authorization"], "Bearer abc123")

    def test_provider_object(self):
        serializer = RequestSerializer(
            access_token_provider=StaticTokenProvider("abc123"), api_version="3.4", framework_version="1.0"
        )

        request = serializer.build_request("GET", URL)

        self.assertEqual(request.headers["Authorization"], "Bearer abc123")

    def test_token_wins_over_app_configuration(self):
        serializer = RequestSerializer(app_configuration=app_configuration(), framework_version="1.0")
        serializer.access_token_provider = lambda: "user-token"

        request = serializer.build_request("GET", URL)

        self.assertEqual(request.headers["Authorization"], "Bearer user-token")
        self.assertFalse(request.headers["Authorization"].startswith("Basic"))

    def test_basic_auth_from_app_configuration(self):
        serializer = RequestSerializer(app_configuration=app_configuration(), framework_version="1.0")

        request = serializer.build_request("GET", URL)

        expected = base64.b64encode(b"id1:sec1").decode("ascii")
        self.assertEqual(expected, "aWQxOnNlYzE=")
        self.assertEqual(request.headers["Authorization"], f"Basic {expected}")

    def test_empty_token_falls_back_to_basic_auth(self):
        for token in (None, ""):
            with self.subTest(token=token):
                serializer = RequestSerializer(app_configuration=app_configuration(), framework_version="1.0")
                serializer.access_token_provider = lambda: token

                request = serializer.build_request("GET", URL)

                self.assertEqual(request.headers["Authorization"], "Basic aWQxOnNlYzE=")

    def test_no_token_and_no_configuration(self):
        for token in (None, ""):
            with self.subTest(token=token):
                serializer = RequestSerializer(access_token_provider=lambda: token, api_version="3.4", framework_version="1.0")

                request = serializer.build_request("GET", URL)

                self.assertNotIn("Authorization", request.headers)

    def test_token_is_read_on_every_request(self):
        provider = Mock()
        provider.get_access_token.side_effect = ["first", "second"]
        serializer = RequestSerializer(access_token_provider=provider, api_version="3.4", framework_version="1.0")

        first = serializer.build_request("GET", URL)
        second = serializer.build_request("GET", URL)

        self.assertEqual(first.headers["Authorization"], "Bearer first")
        self.assertEqual(second.headers["Authorization"], "Bearer second")


class TestUserAgentHeader(unittest.TestCase):
    def test_appends_to_transport_user_agent(self):
        serializer = RequestSerializer(access_token_provider=lambda: "t", api_version="3.4", framework_version="2.3.4")

        request = serializer.build_request("GET", URL)

        self.assertEqual(request.headers["User-Agent"], f"{default_user_agent()} VimeoNetworking/2.3.4")

    def test_appends_to_existing_user_agent(self):
        serializer = RequestSerializer(access_token_provider=lambda: "t", api_version="3.4", framework_version="2.3.4")
        existing = HTTPRequest("GET", URL, headers={"User-Agent": "MyApp/1.0"})

        request = serializer.decorate_existing_request(existing)

        self.assertEqual(request.headers["User-Agent"], "MyApp/1.0 VimeoNetworking/2.3.4")

    def test_sets_user_agent_without_transport_default(self):
        serializer = RequestSerializer(access_token_provider=lambda: "t", api_version="3.4", framework_version="2.3.4")
        serializer.json_serializer.set_header_value("User-Agent", None)

        request = serializer.build_request("GET", URL)

        self.assertEqual(request.headers["User-Agent"], "VimeoNetworking/2.3.4")

    @patch("vimeonetworking._request_serializer.installed_framework_version", return_value=None)
    def test_unknown_framework_version_leaves_user_agent(self, _mock_version):
        serializer = RequestSerializer(access_token_provider=lambda: "t", api_version="3.4")
        existing = HTTPRequest("GET", URL, headers={"User-Agent": "MyApp/1.0"})

        with self.assertLogs("vimeonetworking._headers", level="ERROR"):
            request = serializer.decorate_existing_request(existing)

        self.assertEqual(request.headers["User-Agent"], "MyApp/1.0")
        self.assertEqual(request.headers["Authorization"], "Bearer t")


class TestBuildRequest(unittest.TestCase):
    def setUp(self):
        self.serializer = RequestSerializer(access_token_provider=lambda: "t", api_version="3.4", framework_version="1.0")

    def test_builder_error_propagates_unchanged(self):
        error = RequestSerializationError("boom")

        with patch.object(self.serializer.json_serializer, "request", side_effect=error):
            with self.assertRaises(RequestSerializationError) as context:
                self.serializer.build_request("GET", URL)

        self.assertIs(context.exception, error)

    def test_invalid_url_raises(self):
        with self.assertRaises(RequestSerializationError):
            self.serializer.build_request("GET", "not a url")

    def test_parameters_are_serialized(self):
        request = self.serializer.build_request("POST", URL, {"name": "Live"})

        self.assertEqual(json.loads(request.body), {"name": "Live"})


class TestDecorateExistingRequest(unittest.TestCase):
    def setUp(self):
        self.serializer = RequestSerializer(access_token_provider=lambda: "t", api_version="3.4", framework_version="1.0")

    def test_reserializes_and_decorates(self):
        existing = HTTPRequest("POST", "https://upload.vimeo.com/upload", headers={"User-Agent": "MyApp/1.0"})

        request = self.serializer.decorate_existing_request(existing, {"size": 10})

        self.assertEqual(json.loads(request.body), {"size": 10})
        self.assertEqual(request.headers["Authorization"], "Bearer t")
        self.assertEqual(request.headers["Accept"], "application/vnd.vimeo.*+json; version=3.4")
        self.assertEqual(request.headers["User-Agent"], "MyApp/1.0 VimeoNetworking/1.0")

    def test_returns_none_when_reserialization_fails(self):
        existing = HTTPRequest("POST", "https://upload.vimeo.com/upload")

        with self.assertLogs("vimeonetworking._request_serializer", level="WARNING"):
            request = self.serializer.decorate_existing_request(existing, {"file": object()})

        self.assertIsNone(request)


class TestRedecoration(unittest.TestCase):
    def test_authorization_is_overwritten_user_agent_is_appended(self):
        serializer = RequestSerializer(access_token_provider=lambda: "t", api_version="3.4", framework_version="2.3.4")
        request = HTTPRequest("GET", URL, headers={"User-Agent": "MyApp/1.0"})

        serializer.configure_headers(request)
        serializer.configure_headers(request)

        self.assertEqual(request.headers["Authorization"], "Bearer t")
        self.assertEqual(len([key for key in request.headers if key.lower() == "authorization"]), 1)
        self.assertEqual(request.headers["User-Agent"], "MyApp/1.0 VimeoNetworking/2.3.4 VimeoNetworking/2.3.4")


if __name__ == "__main__":
    unittest.main()
