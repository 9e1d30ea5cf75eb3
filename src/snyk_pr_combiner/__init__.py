from __future__ import annotations

from typing import Optional

from .combiner import PRCombiner
from .config import ActionInputs
from .exceptions import (
    ConfigurationError,
    GitHubApiError,
    GitHubAuthError,
    GitHubConflictError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubValidationError,
)
from .host import GitHubRepositoryHost, RepositoryHost
from .models import CombineResult, FilterOptions, PullRequestSummary
from .rest import GitHubRestClient


def create_host(
    token: str,
    *,
    base_url: str = "https://api.github.com",
    api_version: str = "2022-11-28",
) -> GitHubRepositoryHost:
    if not token:
        raise ConfigurationError("Input required and not supplied: token")
    rest = GitHubRestClient(token=token, base_url=base_url, api_version=api_version)
    return GitHubRepositoryHost(rest)


def combine_snyk_prs(
    token: str,
    owner: str,
    repo: str,
    options: Optional[FilterOptions] = None,
    *,
    host: Optional[RepositoryHost] = None,
) -> CombineResult:
    """
    Merge every open Snyk upgrade PR that passes `options` into a fresh
    integration branch and open one PR for it.

    Not atomic: a failure after the branch is created leaves it on the
    remote with whatever merges already landed.
    """
    if host is None:
        host = create_host(token)
    return PRCombiner(host, owner, repo).run(options or FilterOptions())


__all__ = [
    "ActionInputs",
    "CombineResult",
    "ConfigurationError",
    "FilterOptions",
    "GitHubApiError",
    "GitHubAuthError",
    "GitHubConflictError",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
    "GitHubRepositoryHost",
    "GitHubRestClient",
    "GitHubValidationError",
    "PRCombiner",
    "PullRequestSummary",
    "RepositoryHost",
    "combine_snyk_prs",
    "create_host",
]
