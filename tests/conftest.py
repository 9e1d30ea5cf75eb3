"""
Shared test helpers: an in-memory RepositoryHost and a PR factory.
"""

import threading

from snyk_pr_combiner.exceptions import GitHubConflictError, GitHubNotFoundError, GitHubValidationError
from snyk_pr_combiner.models import CombinedStatus, PullRequestSummary


class FakeHost:
    """Records every call; behaves like GitHub for the six operations used."""

    def __init__(self, pulls=None, statuses=None, branches=None, conflicts=()):
        self.pulls = list(pulls or [])
        self.statuses = dict(statuses or {})
        self.branches = dict(branches if branches is not None else {"main": "a" * 40})
        self.conflicts = set(conflicts)
        self.calls = []
        self.status_lookups = []
        self.merges = []
        self.created_prs = []
        self._lock = threading.Lock()

    def list_open_pull_requests(self, owner, repo):
        self.calls.append("list_open_pull_requests")
        return list(self.pulls)

    def get_combined_status(self, owner, repo, ref):
        with self._lock:
            self.status_lookups.append(ref)
        return CombinedStatus(sha=ref, state=self.statuses.get(ref, "pending"))

    def get_branch_ref(self, owner, repo, branch):
        self.calls.append("get_branch_ref")
        if branch not in self.branches:
            raise GitHubNotFoundError(404, "Not Found")
        return self.branches[branch]

    def create_branch_ref(self, owner, repo, branch, sha):
        self.calls.append("create_branch_ref")
        if branch in self.branches:
            raise GitHubValidationError(422, "Reference already exists")
        self.branches[branch] = sha
        return {"ref": f"refs/heads/{branch}", "object": {"sha": sha}}

    def merge_branch(self, owner, repo, *, base, head, commit_message):
        self.calls.append("merge_branch")
        if head in self.conflicts:
            raise GitHubConflictError(409, "Merge conflict")
        self.merges.append((base, head, commit_message))
        return {"sha": "m" * 40}

    def create_pull_request(self, owner, repo, *, title, head, base, body):
        self.calls.append("create_pull_request")
        pr = {"number": 99, "title": title, "head": head, "base": base, "body": body,
              "html_url": f"https://github.com/{owner}/{repo}/pull/99"}
        self.created_prs.append(pr)
        return pr


def make_pr(number, head_ref, title=None, labels=(), sha=None):
    return PullRequestSummary(
        number=number,
        title=title or f"Upgrade for {head_ref}",
        head_ref=head_ref,
        head_sha=sha or f"sha-{number}",
        labels=frozenset(labels),
    )
