"""Resolution of an account name to its kind (user or organization)."""

import logging
from typing import Callable, Optional, Tuple

import requests

from gh_langs.domain.errors import InvalidAccount, NoCurrentUser
from gh_langs.domain.repository import AccountType
from gh_langs.infrastructure.github_client import GitHubAPIError, GitHubRESTClient
from gh_langs.infrastructure.identity import IdentityLookupError

logger = logging.getLogger(__name__)


def classify_account(profile: dict) -> AccountType:
    """Organizations list repos under /orgs, everything else under /users."""
    if str(profile.get("type", "")).lower() == "organization":
        return AccountType.ORGANIZATION
    return AccountType.USER


def resolve_account(
    client: GitHubRESTClient,
    account: Optional[str],
    identity_lookup: Callable[[], str],
) -> Tuple[AccountType, str]:
    """
    Determine whether an account is a user or an organization.

    Args:
        client: GitHub API client
        account: Account login, or None/empty for the current user
        identity_lookup: Returns the current user's login; only called if account is empty

    Returns:
        Tuple of (account type, account login)

    Raises:
        NoCurrentUser: If no account was given and the identity lookup fails
        InvalidAccount: If the profile lookup fails
    """
    if not account:
        try:
            account = identity_lookup()
        except IdentityLookupError as e:
            raise NoCurrentUser(str(e)) from e
        if not account:
            raise NoCurrentUser()
        logger.info(f"No account given, using current user {account}")

    try:
        profile = client.get_account(account)
    except (GitHubAPIError, requests.RequestException) as e:
        raise InvalidAccount(account, str(e)) from e

    account_type = classify_account(profile)
    logger.info(f"Resolved {account} as {account_type.name.lower()}")
    return account_type, account
