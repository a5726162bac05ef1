"""
Shared pytest fixtures for GitLab API client tests.

HTTP traffic is answered in-process by an httpx.MockTransport wrapped around
a FakeGitLab recorder, so no test touches the network.
"""

import math
from typing import Callable, List, Optional

import httpx
import pytest

from gitlab_api import GitLabClient
from gitlab_api.models.config import ApiVersion, GitLabClientConfig
from gitlab_api.utils.http_client import HttpClient

GITLAB_URL = "https://gitlab.example.com"


class FakeGitLab:
    """Records every request and answers it with the current handler."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def respond(self, status_code: int = 200, **kwargs) -> None:
        """Answer every request with the same response."""
        self.handler = lambda request: httpx.Response(status_code, **kwargs)

    def form_body(self, request: Optional[httpx.Request] = None) -> dict:
        """Decode the form-encoded body of a request."""
        request = request or self.last_request
        return dict(httpx.QueryParams(request.content.decode()))


def make_items(count: int) -> List[dict]:
    return [{"id": 1000 + i, "iid": i + 1, "title": f"MR {i + 1}"} for i in range(count)]


def paginated_handler(
    items: List[dict],
    total_headers: bool = True,
    link_header: bool = False,
) -> Callable[[httpx.Request], httpx.Response]:
    """Serve ``items`` page by page the way GitLab does."""

    def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params.get("page", "1"))
        per_page = int(request.url.params.get("per_page", "20"))
        chunk = items[(page - 1) * per_page : page * per_page]
        total_pages = max(1, math.ceil(len(items) / per_page))

        headers = {"X-Page": str(page), "X-Per-Page": str(per_page)}
        if total_headers:
            headers["X-Total"] = str(len(items))
            headers["X-Total-Pages"] = str(total_pages)
        if link_header:
            links = []
            if page < total_pages:
                next_url = request.url.copy_merge_params({"page": str(page + 1)})
                links.append(f'<{next_url}>; rel="next"')
            first_url = request.url.copy_merge_params({"page": "1"})
            links.append(f'<{first_url}>; rel="first"')
            headers["Link"] = ", ".join(links)
        return httpx.Response(200, json=chunk, headers=headers)

    return handler


@pytest.fixture
def config():
    """Test configuration (V4)."""
    return GitLabClientConfig(
        gitlab_url=GITLAB_URL,
        private_token="glpat-test-token",
        api_version=ApiVersion.V4,
        log_level="debug",
    )


@pytest.fixture
def config_v3():
    """Test configuration (V3)."""
    return GitLabClientConfig(
        gitlab_url=GITLAB_URL,
        private_token="glpat-test-token",
        api_version=ApiVersion.V3,
    )


@pytest.fixture
def fake_gitlab():
    """In-process GitLab stand-in."""
    return FakeGitLab()


@pytest.fixture
def http_client(config, fake_gitlab):
    """HTTP client fixture wired to the fake server."""
    client = HttpClient(config, fake_gitlab.transport)
    yield client
    client.close()


@pytest.fixture
def http_client_v3(config_v3, fake_gitlab):
    """V3 HTTP client fixture wired to the fake server."""
    client = HttpClient(config_v3, fake_gitlab.transport)
    yield client
    client.close()


@pytest.fixture
def client(config, fake_gitlab):
    """Test GitLabClient instance."""
    with GitLabClient(config, fake_gitlab.transport) as gitlab_client:
        yield gitlab_client


@pytest.fixture
def client_v3(config_v3, fake_gitlab):
    """Test GitLabClient instance talking V3."""
    with GitLabClient(config_v3, fake_gitlab.transport) as gitlab_client:
        yield gitlab_client


@pytest.fixture
def serve_pages(fake_gitlab):
    """Install a paginated handler serving ``count`` merge requests."""

    def _serve(count: int, total_headers: bool = True, link_header: bool = False) -> List[dict]:
        items = make_items(count)
        fake_gitlab.handler = paginated_handler(items, total_headers, link_header)
        return items

    return _serve
