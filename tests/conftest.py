from __future__ import annotations

import threading
from typing import Any

import pytest

from gh_langs.domain.repository import AccountType
from gh_langs.infrastructure.github_client import GitHubAPIError


class FakeGitHubClient:
    """In-memory stand-in for GitHubRESTClient."""

    def __init__(
        self,
        profiles: dict[str, dict[str, Any]] | None = None,
        pages: list[list[dict[str, Any]]] | None = None,
        languages: dict[str, dict[str, int]] | None = None,
        failing_pages: set[int] | None = None,
        failing_repos: set[str] | None = None,
        token: str | None = None,
        login: str | None = None,
    ) -> None:
        self.profiles = profiles or {}
        self.pages = pages or [[]]
        self.languages = languages or {}
        self.failing_pages = failing_pages or set()
        self.failing_repos = failing_repos or set()
        self.token = token
        self.login = login
        self.timeout = 5
        self.page_requests: list[tuple[AccountType, str, int]] = []
        self.language_requests: list[str] = []
        self._lock = threading.Lock()

    def __enter__(self) -> FakeGitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed = True

    def get_account(self, account: str) -> dict[str, Any]:
        if account not in self.profiles:
            raise GitHubAPIError(f"HTTP 404 from users/{account}: Not Found", status_code=404)
        return self.profiles[account]

    def get_authenticated_login(self) -> str:
        if not self.login:
            raise GitHubAPIError("HTTP 401 from user: Requires authentication", status_code=401)
        return self.login

    def list_repositories_page(self, account_type: AccountType, account: str, page: int) -> list[dict[str, Any]]:
        self.page_requests.append((account_type, account, page))
        if page in self.failing_pages:
            raise GitHubAPIError("HTTP 502 from repos: Bad Gateway", status_code=502)
        if page > len(self.pages):
            return []
        return self.pages[page - 1]

    def get_languages(self, full_name: str) -> dict[str, int]:
        with self._lock:
            self.language_requests.append(full_name)
        if full_name in self.failing_repos:
            raise GitHubAPIError(f"HTTP 500 from repos/{full_name}/languages: Server Error", status_code=500)
        return dict(self.languages.get(full_name, {}))


def repo_item(full_name: str, updated_at: str = "2026-10-01T00:00:00Z") -> dict[str, Any]:
    return {"full_name": full_name, "updated_at": updated_at, "stargazers_count": 0}


@pytest.fixture
def fake_client_cls() -> type[FakeGitHubClient]:
    return FakeGitHubClient


@pytest.fixture
def make_repo_item():
    return repo_item
