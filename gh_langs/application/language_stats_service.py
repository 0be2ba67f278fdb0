"""Application service computing language statistics for an account."""

import logging
from datetime import datetime
from typing import Callable, Optional

from gh_langs.application.account_resolver import resolve_account
from gh_langs.application.language_aggregator import aggregate_languages
from gh_langs.application.recency_filter import filter_recent
from gh_langs.application.report_builder import build_report
from gh_langs.application.repository_enumerator import enumerate_repositories
from gh_langs.config import DEFAULT_MAX_WORKERS
from gh_langs.domain.repository import Report
from gh_langs.infrastructure.github_client import GitHubRESTClient
from gh_langs.infrastructure.identity import current_login

logger = logging.getLogger(__name__)


class LanguageStatsService:
    """Service running the resolve, list, filter, aggregate and report steps once."""

    def __init__(
        self,
        github_client: GitHubRESTClient,
        max_workers: int = DEFAULT_MAX_WORKERS,
        strict: bool = False,
        identity_lookup: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize language stats service.

        Args:
            github_client: GitHub API client
            max_workers: Upper bound on concurrent language retrievals
            strict: Fail the run if any repository's languages cannot be fetched
            identity_lookup: Returns the current user's login. Defaults to the token owner or gh CLI.
        """
        self.github_client = github_client
        self.max_workers = max_workers
        self.strict = strict
        self.identity_lookup = identity_lookup or (lambda: current_login(github_client))

    def collect(self, account: Optional[str] = None, years: float = 1.0, now: Optional[datetime] = None) -> Report:
        """
        Build the language report for an account.

        Args:
            account: Account login, or None for the current user
            years: Only count repositories updated within this many years; 0 counts all
            now: Reference instant for the recency window

        Returns:
            Report ready for rendering

        Raises:
            InvalidAccount: If the account cannot be resolved
            NoCurrentUser: If no account was given and the current user is unknown
            FetchError: If listing fails, or a language retrieval fails in strict mode
        """
        account_type, account = resolve_account(self.github_client, account, self.identity_lookup)

        repositories = enumerate_repositories(self.github_client, account_type, account)
        repositories, cutoff = filter_recent(repositories, years, now)

        aggregation = aggregate_languages(
            self.github_client,
            repositories,
            max_workers=self.max_workers,
            strict=self.strict,
        )
        logger.info(
            f"Aggregated {len(aggregation.languages)} languages from "
            f"{aggregation.processed}/{len(repositories)} repositories of {account}"
        )

        return build_report(
            account=account,
            aggregate=aggregation.languages,
            repository_count=len(repositories),
            cutoff=cutoff,
            failures=aggregation.failures,
        )
