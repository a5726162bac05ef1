"""
Unit tests for DataMasker.
"""

from gitlab_api.utils.data_masker import DataMasker


class TestDataMasker:
    """Test cases for DataMasker."""

    def test_is_sensitive_field_token(self):
        """Test detecting token fields."""
        assert DataMasker.is_sensitive_field("token") is True
        assert DataMasker.is_sensitive_field("PRIVATE-TOKEN") is True
        assert DataMasker.is_sensitive_field("private_token") is True
        assert DataMasker.is_sensitive_field("job_token") is True

    def test_is_sensitive_field_password(self):
        """Test detecting password fields."""
        assert DataMasker.is_sensitive_field("password") is True
        assert DataMasker.is_sensitive_field("user_password") is True

    def test_is_sensitive_field_headers(self):
        """Test detecting sensitive headers."""
        assert DataMasker.is_sensitive_field("Authorization") is True
        assert DataMasker.is_sensitive_field("Cookie") is True

    def test_is_sensitive_field_not_sensitive(self):
        """Test non-sensitive fields."""
        assert DataMasker.is_sensitive_field("title") is False
        assert DataMasker.is_sensitive_field("source_branch") is False
        assert DataMasker.is_sensitive_field("per_page") is False

    def test_mask_sensitive_data_dict(self):
        """Test masking sensitive data in a dictionary."""
        data = {"title": "Fix", "private_token": "glpat-abc", "nested": {"secret": "s"}}

        masked = DataMasker.mask_sensitive_data(data)

        assert masked["title"] == "Fix"
        assert masked["private_token"] == "***MASKED***"
        assert masked["nested"]["secret"] == "***MASKED***"
        assert data["private_token"] == "glpat-abc"

    def test_mask_sensitive_data_pairs(self):
        """Test masking a list of query parameter pairs."""
        data = [("page", "1"), ("private_token", "glpat-abc")]

        masked = DataMasker.mask_sensitive_data(data)

        assert masked == [("page", "1"), ("private_token", "***MASKED***")]

    def test_mask_sensitive_data_none_and_primitives(self):
        """Test None and primitives pass through."""
        assert DataMasker.mask_sensitive_data(None) is None
        assert DataMasker.mask_sensitive_data("text") == "text"

    def test_mask_url(self):
        """Test masking sensitive query parameters in a URL."""
        url = "https://gitlab.example.com/api/v4/snippets?page=2&private_token=glpat-abc"

        masked = DataMasker.mask_url(url)

        assert "glpat-abc" not in masked
        assert "page=2" in masked
        assert "private_token=***MASKED***" in masked

    def test_mask_url_without_query(self):
        url = "https://gitlab.example.com/api/v4/snippets"

        assert DataMasker.mask_url(url) == url
