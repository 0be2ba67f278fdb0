"""Concurrent retrieval and merging of per-repository language breakdowns."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List

import requests

from gh_langs.domain.errors import FetchError
from gh_langs.domain.repository import (
    AggregationResult,
    LanguageAggregate,
    LanguageBreakdown,
    Repository,
    RepositoryFailure,
)
from gh_langs.infrastructure.github_client import GitHubAPIError, GitHubRESTClient

logger = logging.getLogger(__name__)


def merge_breakdown(aggregate: LanguageAggregate, breakdown: LanguageBreakdown) -> None:
    """Add one repository's byte counts into the aggregate. Zero counts are not stored."""
    for language, size in breakdown.items():
        if size > 0:
            aggregate[language] = aggregate.get(language, 0) + size


def aggregate_languages(
    client: GitHubRESTClient,
    repositories: List[Repository],
    max_workers: int,
    strict: bool = False,
) -> AggregationResult:
    """
    Fetch the language breakdown of every repository and sum them.

    Retrievals run on a thread pool of at most `max_workers` threads; this
    call returns only once all of them have finished. Results are merged on
    the calling thread as they complete, so the aggregate has a single writer.

    A repository whose retrieval fails is excluded from the aggregate and
    reported in `failures`. With `strict`, the first failing repository in
    input order is raised instead, after every retrieval has completed.

    Args:
        client: GitHub API client
        repositories: Repositories to process
        max_workers: Upper bound on concurrent retrievals
        strict: Raise on any failed retrieval

    Returns:
        Aggregated byte counts plus any per-repository failures

    Raises:
        FetchError: In strict mode, if any retrieval failed
    """
    result = AggregationResult()
    if not repositories:
        return result

    errors: Dict[int, Exception] = {}
    workers = max(1, min(max_workers, len(repositories)))
    logger.info(f"Fetching languages of {len(repositories)} repositories with {workers} workers")

    with ThreadPoolExecutor(max_workers=workers) as ex:
        futures = {ex.submit(client.get_languages, repo.full_name): i for i, repo in enumerate(repositories)}

        try:
            for done, fut in enumerate(as_completed(futures), start=1):
                index = futures[fut]
                try:
                    breakdown = fut.result()
                except (GitHubAPIError, requests.RequestException) as e:
                    errors[index] = e
                    continue

                merge_breakdown(result.languages, breakdown)
                result.processed += 1
                logger.debug(f"Fetched languages of {repositories[index].full_name} ({done}/{len(futures)})")
        except BaseException:
            # Queued retrievals must not start once the drain is abandoned (e.g. Ctrl-C).
            ex.shutdown(wait=False, cancel_futures=True)
            raise

    # Report failures in input order so repeated runs agree.
    for index in sorted(errors):
        full_name = repositories[index].full_name
        if strict:
            raise FetchError(str(errors[index]), repository=full_name) from errors[index]
        logger.warning(f"Skipping {full_name}: {errors[index]}")
        result.failures.append(RepositoryFailure(full_name=full_name, message=str(errors[index])))

    return result
