from __future__ import annotations
from typing import Literal

# GitHub's combined status endpoint returns "error" as well; "skipped" is
# what some CI integrations report for commits they chose not to build.
CombinedState = Literal["success", "failure", "pending", "skipped", "error"]

PASSING_STATES = frozenset({"success"})
PASSING_OR_SKIPPED_STATES = frozenset({"success", "skipped"})
