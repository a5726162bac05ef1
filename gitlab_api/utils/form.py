"""Form builder for GitLab query strings and request bodies.

GitLabApiForm accumulates named parameters in insertion order, drops absent
optional values and stringifies the rest the way the GitLab API expects them.
Its terminal ``build()`` produces an immutable ParameterSet that can be sent
either as a query string (GET/DELETE) or as a form body (POST/PUT).
"""

from collections.abc import Mapping
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..errors import MissingRequiredParameterError

PAGE_PARAM = "page"
PER_PAGE_PARAM = "per_page"

ISO_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
ISO_DATE_FORMAT = "%Y-%m-%d"


def stringify_param(value: Any) -> str:
    """Convert a parameter value to its wire representation.

    Examples:
        >>> stringify_param(True)
        'true'
        >>> stringify_param(["bug", "ui"])
        'bug,ui'
        >>> stringify_param(datetime(2017, 5, 1, 12, 0, tzinfo=timezone.utc))
        '2017-05-01T12:00:00Z'

    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime(ISO_DATETIME_FORMAT)
    if isinstance(value, date):
        return value.strftime(ISO_DATE_FORMAT)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(stringify_param(item) for item in value)
    return str(value)


class ParameterSet(Mapping):
    """Immutable ordered mapping of parameter name to stringified value."""

    __slots__ = ("_params",)

    def __init__(self, params: Optional[Mapping] = None):
        self._params: Dict[str, str] = dict(params or {})

    def __getitem__(self, name: str) -> str:
        return self._params[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"ParameterSet({self._params!r})"

    def as_query_params(self) -> List[Tuple[str, str]]:
        """Parameters as ordered (name, value) pairs for a query string."""
        return list(self._params.items())

    def as_form_body(self) -> Dict[str, str]:
        """Parameters as a dict for an application/x-www-form-urlencoded body."""
        return dict(self._params)

    def merged(self, other: Optional[Mapping]) -> "ParameterSet":
        """Return a new set with ``other`` applied on top (later keys win)."""
        if not other:
            return self
        combined = dict(self._params)
        for name, value in other.items():
            if value is not None:
                combined[name] = stringify_param(value)
        return ParameterSet(combined)


EMPTY_PARAMS = ParameterSet()


class GitLabApiForm:
    """Fluent builder for GitLab request parameters.

    Examples:
        >>> params = (
        ...     GitLabApiForm()
        ...     .with_param("title", "Fix login", required=True)
        ...     .with_param("labels", ["bug", "ui"])
        ...     .with_param("milestone_id", None)
        ...     .build()
        ... )
        >>> params.as_form_body()
        {'title': 'Fix login', 'labels': 'bug,ui'}

    """

    def __init__(self) -> None:
        self._params: Dict[str, str] = {}

    def with_param(self, name: str, value: Any, required: bool = False) -> "GitLabApiForm":
        """Add a parameter.

        Args:
            name: Parameter name exactly as GitLab expects it
            value: Parameter value; None means absent
            required: Fail immediately if the value is absent

        Returns:
            This builder

        Raises:
            MissingRequiredParameterError: If required and value is None

        """
        if value is None:
            if required:
                raise MissingRequiredParameterError(name)
            return self

        self._params[name] = stringify_param(value)
        return self

    def with_params(self, params: Optional[Mapping]) -> "GitLabApiForm":
        """Add every optional parameter of a mapping."""
        if params:
            for name, value in params.items():
                self.with_param(name, value)
        return self

    def with_page_params(self, page: Optional[int], per_page: Optional[int]) -> "GitLabApiForm":
        """Add the page and per_page query parameters."""
        return self.with_param(PAGE_PARAM, page).with_param(PER_PAGE_PARAM, per_page)

    def build(self) -> ParameterSet:
        """Produce the immutable parameter set."""
        return ParameterSet(self._params)
