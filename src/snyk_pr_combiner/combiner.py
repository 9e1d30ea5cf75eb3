from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Sequence

from .host import RepositoryHost
from .models import CombinedStatus, CombineResult, FilterOptions, PullRequestSummary

log = logging.getLogger(__name__)

UPGRADE_BRANCH_PREFIX = "snyk-upgrade-"
INTEGRATION_BRANCH = "combined-snyk-security-updates"
DEFAULT_BRANCH = "main"
PR_TITLE = "chore: combined Snyk security updates"
PR_BODY_HEADER = "This PR combines the changes from the following Snyk upgrade PRs:\n"


def is_upgrade_pr(pr: PullRequestSummary) -> bool:
    return pr.head_ref.startswith(UPGRADE_BRANCH_PREFIX)


def merge_commit_message(head_ref: str) -> str:
    return f"Merge branch '{head_ref}'"


def build_pr_body(merged: Sequence[PullRequestSummary]) -> str:
    return PR_BODY_HEADER + "\n".join(f"- {pr.title}" for pr in merged)


def fetch_statuses(
    host: RepositoryHost,
    owner: str,
    repo: str,
    candidates: Sequence[PullRequestSummary],
) -> List[CombinedStatus]:
    """
    One combined-status lookup per candidate, all in flight at once.
    The first failing lookup propagates.
    """
    if not candidates:
        return []
    with ThreadPoolExecutor(max_workers=len(candidates)) as executor:
        return list(executor.map(lambda pr: host.get_combined_status(owner, repo, pr.head_sha), candidates))


def select_pull_requests(
    host: RepositoryHost,
    owner: str,
    repo: str,
    pulls: Sequence[PullRequestSummary],
    options: FilterOptions,
) -> List[PullRequestSummary]:
    """
    Label filters first, then (only when a check option is set) a concurrent
    batch of status lookups, then the status filter over the resolved batch.
    Input order is preserved.
    """
    candidates: List[PullRequestSummary] = []
    for pr in pulls:
        reason = options.label_rejection(pr)
        if reason:
            log.debug("Skip #%s (%s): %s", pr.number, pr.head_ref, reason)
            continue
        candidates.append(pr)

    if not options.needs_status or not candidates:
        return candidates

    statuses = fetch_statuses(host, owner, repo, candidates)

    accepted: List[PullRequestSummary] = []
    for pr, status in zip(candidates, statuses):
        reason = options.status_rejection(status)
        if reason:
            log.debug("Skip #%s (%s): %s", pr.number, pr.head_ref, reason)
            continue
        accepted.append(pr)
    return accepted


@dataclass
class PRCombiner:
    host: RepositoryHost
    owner: str
    repo: str
    branch: str = INTEGRATION_BRANCH
    base: str = DEFAULT_BRANCH

    def run(self, options: FilterOptions) -> CombineResult:
        full = f"{self.owner}/{self.repo}"

        pulls = self.host.list_open_pull_requests(self.owner, self.repo)
        upgrades = [pr for pr in pulls if is_upgrade_pr(pr)]
        log.info("%s: %d open PRs, %d Snyk upgrade PRs", full, len(pulls), len(upgrades))

        selected = select_pull_requests(self.host, self.owner, self.repo, upgrades, options)
        log.info("%s: %d PRs passed the filters", full, len(selected))

        base_sha = self.host.get_branch_ref(self.owner, self.repo, self.base)
        self.host.create_branch_ref(self.owner, self.repo, self.branch, base_sha)
        log.info("Created %s at %s/%s (%s)", self.branch, full, self.base, base_sha[:7])

        result = CombineResult(branch=self.branch)
        try:
            for pr in selected:
                log.info("Merging #%s (%s) into %s", pr.number, pr.head_ref, self.branch)
                self.host.merge_branch(
                    self.owner,
                    self.repo,
                    base=self.branch,
                    head=pr.head_ref,
                    commit_message=merge_commit_message(pr.head_ref),
                )
                result.merged.append(pr)

            result.pull_request = self.host.create_pull_request(
                self.owner,
                self.repo,
                title=PR_TITLE,
                head=self.branch,
                base=self.base,
                body=build_pr_body(result.merged),
            )
        except Exception:
            # The branch and any merges so far stay on the remote.
            log.error(
                "%s left on %s with %d of %d merges applied; delete it before re-running",
                self.branch, full, len(result.merged), len(selected),
            )
            raise
        log.info(
            "Opened %s with %d merged PRs",
            result.pull_request.get("html_url") or f"{full}#{result.pull_request.get('number')}",
            len(result.merged),
        )
        return result
