"""Tests for storefront/backend/api_client.py"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from storefront.backend.api_client import SupabaseAPIClient
from storefront.common.config_loader import BackendSettings


@pytest.fixture
def client():
    return SupabaseAPIClient(url="https://xyz.supabase.co/", anon_key="anon-key")


def make_response(status_code=200, json_data=None, content=b"x", headers=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    response.content = content
    response.headers = headers or {}
    response.text = text
    return response


class TestInit:
    def test_strips_trailing_slash(self, client):
        assert client.url == "https://xyz.supabase.co"

    def test_session_headers(self, client):
        assert client.session.headers["apikey"] == "anon-key"
        assert client.session.headers["Authorization"] == "Bearer anon-key"

    def test_from_settings(self):
        c = SupabaseAPIClient.from_settings(BackendSettings(url="https://a.supabase.co", anon_key="k"))
        assert c.url == "https://a.supabase.co"
        assert c.is_configured()

    @pytest.mark.parametrize("url,key", [("", "k"), ("https://a.supabase.co", ""), ("", "")])
    def test_not_configured(self, url, key):
        assert not SupabaseAPIClient(url=url, anon_key=key).is_configured()

    def test_public_url(self, client):
        assert client.public_url("/storage/v1/object/public/b/x.png") == \
            "https://xyz.supabase.co/storage/v1/object/public/b/x.png"


class TestRequest:
    def test_successful_get(self, client):
        response = make_response(json_data=[{"id": "1"}])

        with patch.object(client.session, "request", return_value=response) as mock_request:
            result = client.request("GET", "rest/v1/shops", params={"id": "eq.1"})

        assert result == [{"id": "1"}]
        mock_request.assert_called_once_with(
            "GET", "https://xyz.supabase.co/rest/v1/shops",
            params={"id": "eq.1"}, headers=None, timeout=30,
        )

    def test_json_body(self, client):
        with patch.object(client.session, "request", return_value=make_response(json_data={})) as mock_request:
            client.request("POST", "auth/v1/recover", data={"email": "a@b.co"})

        assert mock_request.call_args.kwargs["json"] == {"email": "a@b.co"}

    def test_raw_body_takes_precedence(self, client):
        with patch.object(client.session, "request", return_value=make_response(json_data={})) as mock_request:
            client.request("POST", "storage/v1/object/b/x.png", data={"ignored": True}, content=b"\x89PNG")

        kwargs = mock_request.call_args.kwargs
        assert kwargs["data"] == b"\x89PNG"
        assert "json" not in kwargs

    def test_empty_body_returns_empty_dict(self, client):
        with patch.object(client.session, "request", return_value=make_response(status_code=204, content=b"")):
            assert client.request("DELETE", "rest/v1/shops") == {}

    def test_returns_none_on_400(self, client):
        response = make_response(status_code=404, text="Not Found")
        with patch.object(client.session, "request", return_value=response):
            assert client.request("GET", "rest/v1/nothing") is None

    def test_returns_none_on_timeout(self, client):
        with patch.object(client.session, "request", side_effect=requests.exceptions.Timeout):
            assert client.request("GET", "rest/v1/shops") is None

    def test_returns_none_on_connection_error(self, client):
        with patch.object(client.session, "request", side_effect=requests.exceptions.ConnectionError("refused")):
            assert client.request("GET", "rest/v1/shops") is None

    def test_unsupported_method_raises(self, client):
        with pytest.raises(ValueError, match="Unsupported method"):
            client.request("HEAD", "rest/v1/shops")

    def test_unconfigured_skips_request(self, caplog):
        client = SupabaseAPIClient()
        with patch.object(client.session, "request") as mock_request:
            with caplog.at_level("WARNING", logger="storefront.backend.api_client"):
                assert client.request("GET", "rest/v1/shops") is None

        mock_request.assert_not_called()
        assert "not configured" in caplog.text


class TestRetries:
    def test_retries_on_rate_limit(self, client):
        limited = make_response(status_code=429, headers={"Retry-After": "0"})
        ok = make_response(json_data=[{"id": "1"}])

        with patch.object(client.session, "request", side_effect=[limited, ok]) as mock_request:
            with patch("storefront.backend.api_client.time.sleep") as mock_sleep:
                result = client.request("GET", "rest/v1/shops")

        assert result == [{"id": "1"}]
        assert mock_request.call_count == 2
        mock_sleep.assert_called_once_with(0)

    def test_backs_off_without_retry_after(self, client):
        unavailable = make_response(status_code=503)
        ok = make_response(json_data=[])

        with patch.object(client.session, "request", side_effect=[unavailable, unavailable, ok]):
            with patch("storefront.backend.api_client.time.sleep") as mock_sleep:
                client.request("GET", "rest/v1/shops")

        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2]

    def test_gives_up_after_max_retries(self, client):
        gateway = make_response(status_code=502, headers={"Retry-After": "0"})

        with patch.object(client.session, "request", return_value=gateway) as mock_request:
            with patch("storefront.backend.api_client.time.sleep"):
                assert client.request("GET", "rest/v1/shops") is None

        assert mock_request.call_count == client.MAX_RETRIES


class TestRestRequest:
    def test_targets_table_with_prefer(self, client):
        with patch.object(client, "request", return_value=[]) as mock_request:
            client.rest_request("POST", "products", data={"name": "A"}, prefer="return=representation")

        mock_request.assert_called_once_with(
            "POST", "rest/v1/products", params=None, data={"name": "A"},
            headers={"Prefer": "return=representation"},
        )

    def test_no_prefer_header_by_default(self, client):
        with patch.object(client, "request", return_value=[]) as mock_request:
            client.rest_request("GET", "shops", params={"id": "eq.1"})

        assert mock_request.call_args.kwargs["headers"] is None
