"""
Unit tests for optional lookup results.
"""

import httpx
import pytest

from gitlab_api.errors import DecodeError, TransportError, UnexpectedStatusError
from gitlab_api.models.optional import Absent, Found, fetch_optional


class TestFetchOptional:
    """Test cases for fetch_optional."""

    def test_found(self):
        result = fetch_optional(lambda: "value")

        assert isinstance(result, Found)
        assert result.is_present is True
        assert result.value == "value"
        assert result.or_else("default") == "value"

    def test_404_is_absent(self):
        error = UnexpectedStatusError(404, [200])

        def fetch():
            raise error

        result = fetch_optional(fetch)

        assert isinstance(result, Absent)
        assert result.is_present is False
        assert result.error is error
        assert result.or_else("default") == "default"

    @pytest.mark.parametrize("status_code", [401, 403, 500])
    def test_other_statuses_propagate(self, status_code):
        def fetch():
            raise UnexpectedStatusError(status_code, [200])

        with pytest.raises(UnexpectedStatusError):
            fetch_optional(fetch)

    def test_transport_error_propagates(self):
        def fetch():
            raise TransportError(httpx.ConnectError("refused"))

        with pytest.raises(TransportError):
            fetch_optional(fetch)

    def test_decode_error_propagates(self):
        def fetch():
            raise DecodeError("Snippet", ValueError("bad"))

        with pytest.raises(DecodeError):
            fetch_optional(fetch)
