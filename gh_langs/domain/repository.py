"""Domain entities for GitHub repositories and language statistics."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple


# Language name -> byte count, as reported for a single repository.
LanguageBreakdown = Dict[str, int]

# Language name -> total byte count across every processed repository.
LanguageAggregate = Dict[str, int]


class AccountType(str, Enum):
    """Kind of account, valued by the REST path segment used to list its repos."""

    USER = "users"
    ORGANIZATION = "orgs"


@dataclass(frozen=True)
class Repository:
    """Immutable repository entity."""

    name: str
    owner: str
    full_name: str
    updated_at: datetime


@dataclass(frozen=True)
class RepositoryFailure:
    """A repository whose language breakdown could not be retrieved."""

    full_name: str
    message: str


@dataclass(frozen=True)
class ReportRow:
    language: str
    bytes: int


@dataclass(frozen=True)
class Report:
    """Everything the renderer needs for one run."""

    account: str
    rows: Tuple[ReportRow, ...]
    total: int
    repository_count: int
    cutoff: Optional[datetime] = None
    failures: Tuple[RepositoryFailure, ...] = field(default_factory=tuple)


@dataclass
class AggregationResult:
    """Outcome of retrieving and merging the breakdowns of a repository set."""

    languages: LanguageAggregate = field(default_factory=dict)
    processed: int = 0
    failures: List[RepositoryFailure] = field(default_factory=list)
