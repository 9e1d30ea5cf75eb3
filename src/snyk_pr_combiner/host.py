from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from .models import CombinedStatus, PullRequestSummary
from .rest import GitHubRestClient


class RepositoryHost(Protocol):
    """The hosting-service operations the combiner needs, and nothing else."""

    def list_open_pull_requests(self, owner: str, repo: str) -> List[PullRequestSummary]: ...

    def get_combined_status(self, owner: str, repo: str, ref: str) -> CombinedStatus: ...

    def get_branch_ref(self, owner: str, repo: str, branch: str) -> str: ...

    def create_branch_ref(self, owner: str, repo: str, branch: str, sha: str) -> Dict[str, Any]: ...

    def merge_branch(
        self, owner: str, repo: str, *, base: str, head: str, commit_message: str
    ) -> Optional[Dict[str, Any]]: ...

    def create_pull_request(
        self, owner: str, repo: str, *, title: str, head: str, base: str, body: str
    ) -> Dict[str, Any]: ...


@dataclass
class GitHubRepositoryHost:
    gh: GitHubRestClient

    def list_open_pull_requests(self, owner: str, repo: str) -> List[PullRequestSummary]:
        # Single page: large PR lists are not paginated.
        data = self.gh.json(
            "GET",
            f"/repos/{owner}/{repo}/pulls",
            params={"state": "open", "per_page": 100},
        )
        return [PullRequestSummary.from_api(pr) for pr in data or []]

    def get_combined_status(self, owner: str, repo: str, ref: str) -> CombinedStatus:
        payload = self.gh.json("GET", f"/repos/{owner}/{repo}/commits/{ref}/status")
        return CombinedStatus.from_api(ref, payload or {})

    def get_branch_ref(self, owner: str, repo: str, branch: str) -> str:
        """Returns the sha the branch currently points at."""
        payload = self.gh.json("GET", f"/repos/{owner}/{repo}/git/ref/heads/{branch}")
        return payload["object"]["sha"]

    def create_branch_ref(self, owner: str, repo: str, branch: str, sha: str) -> Dict[str, Any]:
        return self.gh.json(
            "POST",
            f"/repos/{owner}/{repo}/git/refs",
            json_body={"ref": f"refs/heads/{branch}", "sha": sha},
        )

    def merge_branch(
        self, owner: str, repo: str, *, base: str, head: str, commit_message: str
    ) -> Optional[Dict[str, Any]]:
        """
        201 returns the merge commit; 204 (base already contains head)
        returns None. 409 raises GitHubConflictError.
        """
        return self.gh.json(
            "POST",
            f"/repos/{owner}/{repo}/merges",
            json_body={"base": base, "head": head, "commit_message": commit_message},
        )

    def create_pull_request(
        self, owner: str, repo: str, *, title: str, head: str, base: str, body: str
    ) -> Dict[str, Any]:
        return self.gh.json(
            "POST",
            f"/repos/{owner}/{repo}/pulls",
            json_body={"title": title, "head": head, "base": base, "body": body},
        )
