"""
Data masker utility for request logging.

Masks credentials (private tokens, passwords, secrets) in headers, parameters
and URLs before they are written to the log.
"""

from collections.abc import Mapping
from typing import Any, FrozenSet
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

# Lowercase, without '_' and '-'; matched as substrings of normalized keys
SENSITIVE_FIELDS: FrozenSet[str] = frozenset(
    {
        "password",
        "passwd",
        "secret",
        "token",
        "authorization",
        "cookie",
        "apikey",
        "privatekey",
    }
)


def _normalize(key: str) -> str:
    return key.lower().replace("_", "").replace("-", "")


class DataMasker:
    """Masks credential values in the structures HttpClient logs."""

    MASKED_VALUE = "***MASKED***"

    @classmethod
    def is_sensitive_field(cls, key: str) -> bool:
        """
        Check if a parameter or header name carries a credential.

        ``PRIVATE-TOKEN``, ``private_token`` and ``job_token`` all match
        through the ``token`` entry.

        Args:
            key: Parameter or header name

        Returns:
            True if the value must not be logged
        """
        normalized = _normalize(key)
        return any(field in normalized for field in SENSITIVE_FIELDS)

    @classmethod
    def _mask_value(cls, name: Any, value: Any) -> Any:
        if cls.is_sensitive_field(str(name)):
            return cls.MASKED_VALUE
        if isinstance(value, (Mapping, list)):
            return cls.mask_sensitive_data(value)
        return value

    @classmethod
    def mask_sensitive_data(cls, data: Any) -> Any:
        """
        Return a masked copy of a mapping or list; the input is left untouched.

        Lists of ``(name, value)`` pairs (query parameters) are masked by
        name. Anything else is returned unchanged.
        """
        if isinstance(data, Mapping):
            return {key: cls._mask_value(key, value) for key, value in data.items()}

        if isinstance(data, list):
            masked = []
            for item in data:
                if isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str):
                    masked.append((item[0], cls._mask_value(item[0], item[1])))
                else:
                    masked.append(cls.mask_sensitive_data(item))
            return masked

        return data

    @classmethod
    def mask_url(cls, url: str) -> str:
        """Mask credential values in the query string of a URL."""
        parts = urlsplit(url)
        if not parts.query:
            return url

        query = [
            (name, cls.MASKED_VALUE if cls.is_sensitive_field(name) else value)
            for name, value in parse_qsl(parts.query, keep_blank_values=True)
        ]
        return urlunsplit(parts._replace(query=urlencode(query, safe="*")))
