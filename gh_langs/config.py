"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_API_URL = "https://api.github.com"
DEFAULT_MAX_WORKERS = 8
DEFAULT_TIMEOUT_SECONDS = 30.0


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """
    Settings for a single run.

    Attributes:
        token: GitHub token, or None for unauthenticated requests.
        api_url: Base URL of the GitHub REST API.
        max_workers: Upper bound on concurrent language retrievals.
        timeout: Per-request timeout in seconds.
    """

    token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    max_workers: int = DEFAULT_MAX_WORKERS
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Raises:
            ValueError: If a numeric variable is malformed or not positive
        """
        # GH_TOKEN is what the gh CLI exports
        token = os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN") or None
        api_url = os.getenv("GITHUB_API_URL") or DEFAULT_API_URL

        return cls(
            token=token,
            api_url=api_url.rstrip("/"),
            max_workers=_env_number("GH_LANGS_MAX_WORKERS", DEFAULT_MAX_WORKERS, int),
            timeout=_env_number("GH_LANGS_TIMEOUT", DEFAULT_TIMEOUT_SECONDS, float),
        )
