"""
Tests for the API HTTP client.
"""

import json
from unittest.mock import patch

import pytest
import requests

from autosms.exceptions import TransportError, HttpStatusError
from autosms.utils.http_client import HTTPClient
from helpers import API_URL, API_TOKEN, make_response


@pytest.fixture
def http_client():
    client = HTTPClient(API_URL, API_TOKEN, timeout=15)
    yield client
    client.close()


class TestRequestBuilding:

    def test_post_sends_json_with_auth_headers(self, http_client):
        with patch.object(http_client.session, "request", return_value=make_response(200, b"{}")) as request:
            http_client.post("/api/auto-sms/verify-transaction", {"phone_number": "01015218548"})

        method, url = request.call_args.args
        kwargs = request.call_args.kwargs
        assert method == "POST"
        assert url == f"{API_URL}/api/auto-sms/verify-transaction"
        assert kwargs["json"] == {"phone_number": "01015218548"}
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["headers"]["Authorization"] == f"Bearer {API_TOKEN}"
        assert kwargs["headers"]["Accept"] == "application/json"
        assert "X-CSRF-TOKEN" not in kwargs["headers"]
        assert kwargs["timeout"] == 15
        assert kwargs["allow_redirects"] is False

    def test_post_without_data_sends_empty_object(self, http_client):
        with patch.object(http_client.session, "request", return_value=make_response(200, b"{}")) as request:
            http_client.post("/api/auto-sms/orders/7/cancel")

        assert request.call_args.kwargs["json"] == {}

    def test_get_sends_no_body(self, http_client):
        with patch.object(http_client.session, "request", return_value=make_response(200, b"{}")) as request:
            http_client.get("/api/auto-sms/orders/7")

        assert request.call_args.args[0] == "GET"
        assert request.call_args.kwargs["json"] is None

    def test_csrf_token_adds_browser_headers(self):
        client = HTTPClient(API_URL, API_TOKEN, csrf_token="csrf-abc")

        with patch.object(client.session, "request", return_value=make_response(200, b"{}")) as request:
            client.post("/x")

        headers = request.call_args.kwargs["headers"]
        assert headers["X-Requested-With"] == "XMLHttpRequest"
        assert headers["X-CSRF-TOKEN"] == "csrf-abc"

    def test_tls_verification_is_enabled(self, http_client):
        assert http_client.session.verify is True

    def test_ca_bundle_replaces_trust_store(self):
        client = HTTPClient(API_URL, API_TOKEN, ca_bundle="/etc/ssl/custom.pem")

        assert client.session.verify == "/etc/ssl/custom.pem"

    def test_sanitize_headers_hides_secrets(self, http_client):
        sanitized = http_client._sanitize_headers({
            "Authorization": "Bearer real-token",
            "X-CSRF-TOKEN": "csrf",
            "Accept": "application/json",
        })

        assert sanitized["Authorization"] == "Bearer ***"
        assert sanitized["X-CSRF-TOKEN"] == "***"
        assert sanitized["Accept"] == "application/json"


class TestResponseHandling:

    def test_success_returns_raw_body_and_lowercased_headers(self, http_client):
        body = b'{"success": true}'
        response = make_response(200, body, {"X-AutoSMS-Signature": "abc", "Content-Type": "application/json"})

        with patch.object(http_client.session, "request", return_value=response):
            result = http_client.post("/x")

        assert result.body == body
        assert result.status_code == 200
        assert result.headers["x-autosms-signature"] == "abc"
        assert result.headers["content-type"] == "application/json"
        assert result.json() == {"success": True}

    @pytest.mark.parametrize("status", [201, 204])
    def test_other_2xx_accepted_by_default(self, http_client, status):
        with patch.object(http_client.session, "request", return_value=make_response(status, b"")):
            assert http_client.post("/x").status_code == status

    @pytest.mark.parametrize("status", [201, 204, 302])
    def test_strict_status_only_accepts_200(self, status):
        client = HTTPClient(API_URL, API_TOKEN, strict_status=True)

        with patch.object(client.session, "request", return_value=make_response(status, b"moved")):
            with pytest.raises(HttpStatusError) as exc_info:
                client.post("/x")

        assert exc_info.value.status_code == status

    @pytest.mark.parametrize("status", [301, 400, 401, 404, 500, 503])
    def test_non_success_status_raises(self, http_client, status):
        body = json.dumps({"message": "nope"})

        with patch.object(http_client.session, "request", return_value=make_response(status, body)):
            with pytest.raises(HttpStatusError) as exc_info:
                http_client.post("/x")

        assert exc_info.value.status_code == status
        assert exc_info.value.body == body
        assert exc_info.value.message == f"HTTP error {status}: {body}"

    @pytest.mark.parametrize("error", [
        requests.ConnectionError("refused"),
        requests.Timeout("slow"),
        requests.exceptions.SSLError("bad certificate"),
    ])
    def test_transport_failures_raise_transport_error(self, http_client, error):
        with patch.object(http_client.session, "request", side_effect=error):
            with pytest.raises(TransportError):
                http_client.post("/x")

    def test_no_retries(self, http_client):
        with patch.object(http_client.session, "request", side_effect=requests.ConnectionError("down")) as request:
            with pytest.raises(TransportError):
                http_client.post("/x")

        assert request.call_count == 1
