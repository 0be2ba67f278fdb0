"""GitHub REST API client with transport-level retry logic."""

import time
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import requests

from gh_langs.config import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS
from gh_langs.domain.repository import AccountType, LanguageBreakdown

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when GitHub answers with an error status or an undecodable body."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class GitHubRESTClient:
    """Client for the GitHub REST API sharing one session across threads."""

    API_VERSION = "2022-11-28"
    MAX_RETRIES = 3
    RETRY_DELAY_SECONDS = 1
    PER_PAGE = 100

    def __init__(
        self,
        token: Optional[str] = None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize GitHub REST client.

        Args:
            token: GitHub personal access token. If None, requests are unauthenticated.
            api_url: Base URL of the REST API
            timeout: Per-request timeout in seconds
            session: Session to issue requests on. A new one is created if None.
        """
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
            "User-Agent": "gh-langs",
        })

        # Add authorization header if token is available
        if self.token:
            self.session.headers["Authorization"] = f"Bearer {self.token}"

    def __enter__(self) -> "GitHubRESTClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self):
        """Close the underlying HTTP session."""
        self.session.close()

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Issue a GET request and decode the JSON body.

        Connection-level failures are retried with exponential backoff;
        HTTP error statuses are not.

        Args:
            path: Path relative to the API base URL
            params: Query string parameters

        Returns:
            Decoded JSON body

        Raises:
            GitHubAPIError: If GitHub returns an error status or invalid JSON
            requests.RequestException: If the request fails after retries
        """
        url = f"{self.api_url}/{path.lstrip('/')}"

        for attempt in range(self.MAX_RETRIES):
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                if attempt < self.MAX_RETRIES - 1:
                    delay = self.RETRY_DELAY_SECONDS * (2 ** attempt)  # Exponential backoff
                    logger.warning(f"Request to {url} failed (attempt {attempt + 1}/{self.MAX_RETRIES}): {e}. Retrying in {delay}s...")
                    time.sleep(delay)
                    continue
                raise

            if response.status_code >= 400:
                raise GitHubAPIError(
                    f"HTTP {response.status_code} from {url}: {_error_message(response)}",
                    status_code=response.status_code,
                    url=url,
                )

            try:
                return response.json()
            except ValueError as e:
                raise GitHubAPIError(f"Invalid JSON from {url}: {e}", status_code=response.status_code, url=url) from e

        raise GitHubAPIError(f"Max retries exceeded for {url}", url=url)

    def get_account(self, account: str) -> Dict[str, Any]:
        """
        Fetch the public profile of a user or organization.

        Args:
            account: Account login

        Returns:
            Profile object; its "type" field is "User" or "Organization"
        """
        data = self._get(f"users/{_segment(account)}")
        if not isinstance(data, dict):
            raise GitHubAPIError(f"Unexpected profile payload for {account}")
        return data

    def get_authenticated_login(self) -> str:
        """Return the login of the user owning the configured token."""
        data = self._get("user")
        login = data.get("login") if isinstance(data, dict) else None
        if not login:
            raise GitHubAPIError("Authenticated user has no login")
        return login

    def list_repositories_page(self, account_type: AccountType, account: str, page: int) -> List[Dict[str, Any]]:
        """
        Fetch one page of an account's repositories, most recently updated first.

        Args:
            account_type: Whether the account is a user or an organization
            account: Account login
            page: 1-based page number

        Returns:
            Raw repository objects in server order; empty past the last page
        """
        params = {
            "sort": "updated",
            "per_page": self.PER_PAGE,
            "page": page,
        }
        data = self._get(f"{account_type.value}/{_segment(account)}/repos", params=params)
        if not isinstance(data, list):
            raise GitHubAPIError(f"Unexpected repository page payload for {account}")
        return data

    def get_languages(self, full_name: str) -> LanguageBreakdown:
        """
        Fetch the language breakdown of one repository.

        Args:
            full_name: Repository name as "owner/name"

        Returns:
            Mapping from language name to byte count
        """
        data = self._get(f"repos/{_repository_path(full_name)}/languages")
        if not isinstance(data, dict):
            raise GitHubAPIError(f"Unexpected languages payload for {full_name}")

        breakdown: LanguageBreakdown = {}
        for language, size in data.items():
            if not isinstance(language, str) or isinstance(size, bool) or not isinstance(size, int) or size < 0:
                raise GitHubAPIError(f"Invalid byte count {size!r} for {language!r} in {full_name}")
            breakdown[language] = size
        return breakdown


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text[:200]


def _segment(value: str) -> str:
    """Escape one URL path segment so names cannot add path parts or a query."""
    if value in ("", ".", ".."):
        raise GitHubAPIError(f"Invalid name {value!r}")
    return quote(value, safe="")


def _repository_path(full_name: str) -> str:
    owner, _, name = full_name.partition("/")
    return f"{_segment(owner)}/{_segment(name)}"
