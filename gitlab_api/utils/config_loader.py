"""
Configuration loader utility.

Loads the client configuration from environment variables (and a .env file
when one exists) with sensible defaults.
"""

import os

from dotenv import load_dotenv

from ..errors import ConfigurationError
from ..models.config import ApiVersion, GitLabClientConfig

DEFAULT_GITLAB_URL = "https://gitlab.com"


def _read_number(name: str, default: str, cast):
    value = os.environ.get(name) or default
    try:
        return cast(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}")


def load_config() -> GitLabClientConfig:
    """
    Load configuration from environment variables with defaults.

    Environment variables:
    - GITLAB_URL (default: https://gitlab.com)
    - GITLAB_PRIVATE_TOKEN or GITLAB_TOKEN
    - GITLAB_API_VERSION (v3 or v4, default: v4)
    - GITLAB_PER_PAGE (default: 96)
    - GITLAB_TIMEOUT in seconds (default: 30)
    - GITLAB_LOG_LEVEL (debug, info, warn, error)

    Returns:
        GitLabClientConfig instance

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    load_dotenv()

    gitlab_url = os.environ.get("GITLAB_URL") or DEFAULT_GITLAB_URL
    if not gitlab_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"GITLAB_URL must start with http:// or https://, got: {gitlab_url}")

    private_token = (
        os.environ.get("GITLAB_PRIVATE_TOKEN") or os.environ.get("GITLAB_TOKEN") or None
    )

    api_version_value = (os.environ.get("GITLAB_API_VERSION") or "v4").lower()
    try:
        api_version = ApiVersion(api_version_value)
    except ValueError:
        raise ConfigurationError(
            f"GITLAB_API_VERSION must be one of v3, v4, got: {api_version_value}"
        )

    default_per_page = _read_number("GITLAB_PER_PAGE", "96", int)
    if default_per_page < 1:
        raise ConfigurationError("GITLAB_PER_PAGE must be at least 1")

    timeout = _read_number("GITLAB_TIMEOUT", "30", float)
    if timeout <= 0:
        raise ConfigurationError("GITLAB_TIMEOUT must be positive")

    log_level = os.environ.get("GITLAB_LOG_LEVEL", "info")
    if log_level not in ["debug", "info", "warn", "error"]:
        log_level = "info"

    return GitLabClientConfig(
        gitlab_url=gitlab_url,
        private_token=private_token,
        api_version=api_version,
        default_per_page=default_per_page,
        timeout=timeout,
        log_level=log_level,
    )
