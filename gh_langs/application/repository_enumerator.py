"""Paginated listing of every repository owned by an account."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

import requests

from gh_langs.domain.errors import FetchError
from gh_langs.domain.repository import AccountType, Repository
from gh_langs.infrastructure.github_client import GitHubAPIError, GitHubRESTClient

logger = logging.getLogger(__name__)


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO-8601 timestamp ("2024-05-01T12:00:00Z") as aware UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def repository_from_api(node: Dict[str, Any]) -> Repository:
    """Build a Repository from a REST listing item."""
    full_name = node["full_name"]
    owner, name = full_name.split("/", 1)
    return Repository(
        name=name,
        owner=owner,
        full_name=full_name,
        updated_at=parse_timestamp(node["updated_at"]),
    )


def enumerate_repositories(client: GitHubRESTClient, account_type: AccountType, account: str) -> List[Repository]:
    """
    Fetch every repository of an account, page by page.

    Pages are requested sequentially from 1 until the server returns an
    empty page. Repositories keep the server's order.

    Args:
        client: GitHub API client
        account_type: Whether the account is a user or an organization
        account: Account login

    Returns:
        All repositories of the account

    Raises:
        FetchError: If any page fails to download or decode
    """
    repositories: List[Repository] = []
    page = 1

    while True:
        try:
            items = client.list_repositories_page(account_type, account, page)
            batch = [repository_from_api(item) for item in items]
        except (GitHubAPIError, requests.RequestException, KeyError, TypeError, ValueError) as e:
            raise FetchError(str(e), account=account, page=page) from e

        if not batch:
            break

        repositories.extend(batch)
        logger.info(f"Fetched page {page} of {account}: {len(batch)} repositories ({len(repositories)} total)")
        page += 1

    logger.info(f"Enumerated {len(repositories)} repositories of {account} in {page} requests")
    return repositories
