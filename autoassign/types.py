from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping


@dataclass(frozen=True)
class PullRequestContext:
    """Snapshot of the pull request that triggered an invocation."""

    owner: str
    repo: str
    number: int
    title: str
    author: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PullRequestContext":
        """Build a context from a ``pull_request`` webhook payload."""
        pull_request = payload["pull_request"]
        repository = payload["repository"]
        return cls(
            owner=repository["owner"]["login"],
            repo=repository["name"],
            number=int(payload.get("number") or pull_request["number"]),
            title=pull_request.get("title") or "",
            author=(pull_request.get("user") or {}).get("login", ""),
        )

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class SelectionResult:
    reviewers: FrozenSet[str] = frozenset()
    assignees: FrozenSet[str] = frozenset()


@dataclass
class AssignmentOutcome:
    """What a handler invocation did, reported back to the caller."""

    status: str
    selection: SelectionResult | None = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"status": self.status, "errors": dict(self.errors)}
        if self.selection is not None:
            data["reviewers"] = sorted(self.selection.reviewers)
            data["assignees"] = sorted(self.selection.assignees)
        return data
