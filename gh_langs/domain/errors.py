"""Errors raised by the language statistics pipeline."""

from typing import Optional


class GhLangsError(Exception):
    """Base class for errors that end a run."""
    pass


class InvalidAccount(GhLangsError):
    """Raised when an account name does not resolve to a user or organization."""

    def __init__(self, account: str, reason: Optional[str] = None):
        self.account = account
        message = f"{account} is not a valid GitHub username"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NoCurrentUser(GhLangsError):
    """Raised when no account was given and the caller's identity is unknown."""

    def __init__(self, reason: Optional[str] = None):
        message = "could not determine the current GitHub user"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class FetchError(GhLangsError):
    """Raised when a page or a repository breakdown cannot be fetched or decoded."""

    def __init__(
        self,
        reason: str,
        account: Optional[str] = None,
        page: Optional[int] = None,
        repository: Optional[str] = None,
    ):
        self.reason = reason
        self.account = account
        self.page = page
        self.repository = repository

        if repository is not None:
            where = f"languages of {repository}"
        elif page is not None:
            where = f"repositories of {account} (page {page})"
        else:
            where = f"data for {account}"
        super().__init__(f"failed to fetch {where}: {reason}")
