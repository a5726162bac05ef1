"""
Unit tests for the request dispatcher (HttpClient and InternalHttpClient).
"""

import logging

import httpx
import pytest

from gitlab_api.errors import MissingRequiredParameterError, TransportError, UnexpectedStatusError
from gitlab_api.models.config import ApiVersion, GitLabClientConfig
from gitlab_api.utils.form import GitLabApiForm
from gitlab_api.utils.http_client import HttpClient
from gitlab_api.utils.internal_http_client import (
    InternalHttpClient,
    encode_path_segment,
    normalize_expected_status,
)


class TestPathEncoding:
    """Test cases for path segment encoding."""

    def test_integer_segment(self):
        assert encode_path_segment(5) == "5"

    def test_project_path_is_encoded_as_one_segment(self):
        assert encode_path_segment("group/sub project") == "group%2Fsub%20project"

    def test_none_segment_raises(self):
        with pytest.raises(MissingRequiredParameterError):
            encode_path_segment(None)

    def test_build_url(self, config):
        client = InternalHttpClient(config)

        assert (
            client.build_url("projects", "group/project", "merge_requests", 7)
            == "https://gitlab.example.com/api/v4/projects/group%2Fproject/merge_requests/7"
        )

    def test_build_url_v3(self, config_v3):
        client = InternalHttpClient(config_v3)

        assert client.build_url("snippets") == "https://gitlab.example.com/api/v3/snippets"

    def test_normalize_expected_status(self):
        assert normalize_expected_status(200) == frozenset({200})
        assert normalize_expected_status([200, 204]) == frozenset({200, 204})
        with pytest.raises(ValueError):
            normalize_expected_status([])


class TestHttpClient:
    """Test cases for HttpClient dispatching."""

    def test_get_sends_params_in_query(self, http_client, fake_gitlab):
        """Test GET parameters travel in the query string."""
        fake_gitlab.respond(200, json=[])
        params = GitLabApiForm().with_param("state", "opened").with_page_params(2, 50).build()

        response = http_client.get(200, params, "projects", 5, "merge_requests")

        request = fake_gitlab.last_request
        assert response.status_code == 200
        assert request.method == "GET"
        assert request.url.path == "/api/v4/projects/5/merge_requests"
        assert request.url.params["state"] == "opened"
        assert request.url.params["page"] == "2"
        assert request.url.params["per_page"] == "50"
        assert request.content == b""

    def test_post_sends_params_as_form_body(self, http_client, fake_gitlab):
        """Test POST parameters travel in a form-encoded body."""
        fake_gitlab.respond(201, json={"id": 1})
        params = GitLabApiForm().with_param("title", "Fix").with_param("labels", ["a", "b"]).build()

        http_client.post(201, params, "snippets")

        request = fake_gitlab.last_request
        assert request.method == "POST"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert fake_gitlab.form_body() == {"title": "Fix", "labels": "a,b"}
        assert not request.url.params

    def test_put_sends_params_as_form_body(self, http_client, fake_gitlab):
        fake_gitlab.respond(200, json={})

        http_client.put(200, {"title": "New"}, "projects", 5, "merge_requests", 1)

        assert fake_gitlab.last_request.method == "PUT"
        assert fake_gitlab.form_body() == {"title": "New"}

    def test_delete_sends_params_in_query(self, http_client, fake_gitlab):
        fake_gitlab.respond(204)

        http_client.delete(204, {"confirm": True}, "snippets", 9)

        request = fake_gitlab.last_request
        assert request.method == "DELETE"
        assert request.url.params["confirm"] == "true"

    def test_private_token_header(self, http_client, fake_gitlab):
        """Test the configured token is sent as PRIVATE-TOKEN."""
        fake_gitlab.respond(200, json=[])

        http_client.get(200, None, "snippets")

        assert fake_gitlab.last_request.headers["PRIVATE-TOKEN"] == "glpat-test-token"
        assert fake_gitlab.last_request.headers["Accept"] == "application/json"

    def test_accepts_any_expected_status(self, http_client, fake_gitlab):
        fake_gitlab.respond(204)

        response = http_client.delete([200, 204], None, "snippets", 1)

        assert response.status_code == 204

    def test_unexpected_status_raises(self, http_client, fake_gitlab):
        """Test a status outside the accepted set raises UnexpectedStatusError."""
        fake_gitlab.respond(
            404,
            json={"message": "404 Not found"},
            headers={"X-Request-Id": "req-42"},
        )

        with pytest.raises(UnexpectedStatusError) as exc_info:
            http_client.get(200, None, "projects", 5)

        error = exc_info.value
        assert error.actual == 404
        assert error.expected == (200,)
        assert error.body == {"message": "404 Not found"}
        assert error.error_message == "404 Not found"
        assert error.request_id == "req-42"

    def test_success_status_not_in_expected_set_raises(self, http_client, fake_gitlab):
        """Test a 2xx that was not accepted still fails."""
        fake_gitlab.respond(200, json={})

        with pytest.raises(UnexpectedStatusError) as exc_info:
            http_client.post(201, {"title": "x"}, "snippets")

        assert exc_info.value.actual == 200

    def test_transport_failure_raises_transport_error(self, config):
        """Test network failures surface as TransportError with the cause kept."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = HttpClient(config, httpx.MockTransport(handler))

        with pytest.raises(TransportError) as exc_info:
            client.get(200, None, "snippets")

        assert isinstance(exc_info.value.cause, httpx.ConnectError)
        assert exc_info.value.url == "https://gitlab.example.com/api/v4/snippets"
        client.close()

    def test_malformed_gitlab_url_raises_transport_error(self, fake_gitlab):
        """Test an unparseable base URL surfaces as TransportError."""
        config = GitLabClientConfig(gitlab_url="https://gitlab.example.com\x00")
        client = HttpClient(config, fake_gitlab.transport)

        with pytest.raises(TransportError) as exc_info:
            client.get(200, None, "snippets")

        assert isinstance(exc_info.value.cause, httpx.InvalidURL)
        assert fake_gitlab.requests == []
        client.close()

    def test_none_path_segment_fails_before_request(self, http_client, fake_gitlab):
        with pytest.raises(MissingRequiredParameterError):
            http_client.get(200, None, "projects", None, "merge_requests")

        assert fake_gitlab.requests == []

    def test_unsupported_method(self, http_client, fake_gitlab):
        with pytest.raises(ValueError):
            http_client.request("PATCH", 200, None, "snippets")

        assert fake_gitlab.requests == []

    def test_get_url_uses_absolute_url(self, http_client, fake_gitlab):
        fake_gitlab.respond(200, json=[])
        url = "https://gitlab.example.com/api/v4/snippets?page=3&per_page=20"

        http_client.get_url(url, 200)

        assert str(fake_gitlab.last_request.url) == url

    def test_api_version(self, http_client, http_client_v3):
        assert http_client.api_version == ApiVersion.V4
        assert http_client.is_api_version(ApiVersion.V4) is True
        assert http_client_v3.is_api_version(ApiVersion.V3) is True
        assert http_client_v3.is_api_version(ApiVersion.V4) is False

    def test_context_manager_closes_client(self, config, fake_gitlab):
        fake_gitlab.respond(200, json=[])

        with HttpClient(config, fake_gitlab.transport) as client:
            client.get(200, None, "snippets")
            assert client._internal_client.client is not None

        assert client._internal_client.client is None


class TestHttpClientLogging:
    """Test cases for request logging."""

    def test_audit_line_masks_token(self, http_client, fake_gitlab, caplog):
        """Test every request is logged without credentials."""
        fake_gitlab.respond(200, json=[])

        with caplog.at_level(logging.DEBUG, logger="gitlab_api.utils.http_client"):
            http_client.get(200, {"private_token": "glpat-secret", "page": 1}, "snippets")

        assert "GET https://gitlab.example.com/api/v4/snippets 200" in caplog.text
        assert "glpat-secret" not in caplog.text
        assert "glpat-test-token" not in caplog.text

    def test_failed_request_logged_as_warning(self, http_client, fake_gitlab, caplog):
        fake_gitlab.respond(500, json={"message": "boom"})

        with caplog.at_level(logging.INFO, logger="gitlab_api.utils.http_client"):
            with pytest.raises(UnexpectedStatusError):
                http_client.get(200, None, "snippets")

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "500" in warnings[0].getMessage()
