"""Lookup of the GitHub login of whoever is running the tool."""

import logging
import shutil
import subprocess
import requests

from gh_langs.infrastructure.github_client import GitHubAPIError, GitHubRESTClient

logger = logging.getLogger(__name__)


class IdentityLookupError(Exception):
    """Raised when the current GitHub login cannot be determined."""
    pass


def login_from_gh_cli(timeout: float = 30) -> str:
    """
    Ask the gh CLI for the login it is authenticated as.

    Raises:
        IdentityLookupError: If gh is missing, fails, or prints nothing
    """
    gh = shutil.which("gh")
    if gh is None:
        raise IdentityLookupError("gh CLI not found and no GITHUB_TOKEN set")

    try:
        proc = subprocess.run(
            [gh, "api", "user", "--jq", ".login"],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise IdentityLookupError(f"gh api user failed: {e}") from e

    if proc.returncode != 0:
        raise IdentityLookupError(f"gh api user failed: {proc.stderr.strip() or proc.returncode}")

    login = proc.stdout.strip()
    if not login:
        raise IdentityLookupError("gh api user returned an empty login")
    return login


def current_login(client: GitHubRESTClient) -> str:
    """
    Resolve the caller's own GitHub login.

    Uses the token's owner when the client is authenticated, otherwise falls
    back to the gh CLI.

    Raises:
        IdentityLookupError: If neither source yields a login
    """
    if client.token:
        try:
            login = client.get_authenticated_login()
        except (GitHubAPIError, requests.RequestException) as e:
            raise IdentityLookupError(str(e)) from e
        logger.info(f"Current user from token: {login}")
        return login

    login = login_from_gh_cli(timeout=client.timeout)
    logger.info(f"Current user from gh CLI: {login}")
    return login
