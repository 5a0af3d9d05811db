from __future__ import annotations

import random
import threading
from typing import AbstractSet, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest

from autoassign.config_models import AssignmentConfig
from autoassign.handler import AssignmentHandler
from autoassign.types import PullRequestContext


class FakeResolver:
    def __init__(self, config: Optional[AssignmentConfig]) -> None:
        self.config = config
        self.calls = 0

    def resolve(self) -> Optional[AssignmentConfig]:
        self.calls += 1
        return self.config


class RecordingMutations:
    """Records mutation calls; optionally raises from one of them."""

    def __init__(self, *, fail_reviewers: Optional[Exception] = None, fail_assignees: Optional[Exception] = None) -> None:
        self.reviewer_calls: List[Tuple[PullRequestContext, frozenset]] = []
        self.assignee_calls: List[Tuple[PullRequestContext, frozenset]] = []
        self._fail_reviewers = fail_reviewers
        self._fail_assignees = fail_assignees
        self._lock = threading.Lock()

    def request_reviewers(self, context: PullRequestContext, reviewers: AbstractSet[str]) -> None:
        with self._lock:
            self.reviewer_calls.append((context, frozenset(reviewers)))
        if self._fail_reviewers:
            raise self._fail_reviewers

    def add_assignees(self, context: PullRequestContext, assignees: AbstractSet[str]) -> None:
        with self._lock:
            self.assignee_calls.append((context, frozenset(assignees)))
        if self._fail_assignees:
            raise self._fail_assignees

    @property
    def reviewers(self) -> frozenset:
        assert len(self.reviewer_calls) == 1
        return self.reviewer_calls[0][1]

    @property
    def assignees(self) -> frozenset:
        assert len(self.assignee_calls) == 1
        return self.assignee_calls[0][1]


def make_config(**values) -> AssignmentConfig:
    data = {
        "addAssignees": True,
        "addReviewers": True,
        "numberOfReviewers": 0,
        "reviewers": ["reviewer1", "reviewer2", "reviewer3"],
        "skipKeywords": ["wip"],
    }
    data.update(values)
    return AssignmentConfig.model_validate(data)


@pytest.fixture
def context() -> PullRequestContext:
    return PullRequestContext(
        owner="kentaro-m",
        repo="auto-assign",
        number=1,
        title="test",
        author="pr-author",
    )


@pytest.fixture
def log() -> MagicMock:
    return MagicMock()


@pytest.fixture
def run_handler(context, log):
    """Run a handler for ``config`` and return ``(outcome, mutations)``."""

    def _run(config, mutations=None, ctx=None, seed=1):
        mutations = mutations or RecordingMutations()
        handler = AssignmentHandler(
            FakeResolver(config),
            mutations,
            mutations,
            logger=log,
            rng=random.Random(seed),
        )
        outcome = handler.handle(ctx or context)
        return outcome, mutations

    return _run


@pytest.fixture
def pull_request_payload() -> dict:
    return {
        "action": "opened",
        "number": 5,
        "pull_request": {"title": "Add feature", "user": {"login": "octocat"}},
        "repository": {"name": "demo", "owner": {"login": "acme"}},
    }
