from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional

from .types import PASSING_OR_SKIPPED_STATES, PASSING_STATES, CombinedState


@dataclass(frozen=True)
class PullRequestSummary:
    number: int
    title: str
    head_ref: str
    head_sha: str
    labels: FrozenSet[str] = frozenset()

    @classmethod
    def from_api(cls, pr: Dict[str, Any]) -> "PullRequestSummary":
        head = pr.get("head") or {}
        return cls(
            number=int(pr["number"]),
            title=pr.get("title") or "",
            head_ref=head.get("ref") or "",
            head_sha=head.get("sha") or "",
            labels=frozenset(l["name"] for l in pr.get("labels") or [] if l.get("name")),
        )

    def has_label(self, name: str) -> bool:
        return name in self.labels


@dataclass(frozen=True)
class CombinedStatus:
    sha: str
    state: CombinedState

    @classmethod
    def from_api(cls, sha: str, payload: Dict[str, Any]) -> "CombinedStatus":
        return cls(sha=payload.get("sha") or sha, state=payload.get("state") or "pending")


@dataclass(frozen=True)
class FilterOptions:
    require_all_checks_pass: bool = False
    accept_skipped_checks: bool = False
    required_label: Optional[str] = None
    excluded_label: Optional[str] = None

    def __post_init__(self) -> None:
        # An empty action input means the label filter is unset.
        object.__setattr__(self, "required_label", self.required_label or None)
        object.__setattr__(self, "excluded_label", self.excluded_label or None)

    @property
    def needs_status(self) -> bool:
        return self.require_all_checks_pass or self.accept_skipped_checks

    def label_rejection(self, pr: PullRequestSummary) -> Optional[str]:
        """Reason the PR fails the label filters, or None if it passes."""
        if self.excluded_label and pr.has_label(self.excluded_label):
            return f"carries excluded label {self.excluded_label!r}"
        if self.required_label and not pr.has_label(self.required_label):
            return f"missing required label {self.required_label!r}"
        return None

    def status_rejection(self, status: CombinedStatus) -> Optional[str]:
        """Reason the combined status fails the check filters, or None."""
        if self.require_all_checks_pass and status.state not in PASSING_STATES:
            return f"combined status is {status.state!r}, not 'success'"
        if self.accept_skipped_checks and status.state not in PASSING_OR_SKIPPED_STATES:
            return f"combined status is {status.state!r}, not 'success' or 'skipped'"
        return None


@dataclass
class CombineResult:
    branch: str
    merged: List[PullRequestSummary] = field(default_factory=list)
    pull_request: Dict[str, Any] = field(default_factory=dict)
