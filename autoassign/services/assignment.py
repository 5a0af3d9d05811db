from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from .. import settings
from ..config_loader import RepositoryConfigResolver
from ..github import GitHubClient, GitHubMutations
from ..handler import AssignmentHandler
from ..selector import RandomSource
from ..types import AssignmentOutcome, PullRequestContext

logger = logging.getLogger(__name__)

HANDLED_ACTIONS = frozenset({"opened"})


@dataclass
class EventOutcome:
    """Result of processing one webhook delivery."""

    ignored: bool = False
    reason: Optional[str] = None
    outcome: Optional[AssignmentOutcome] = None


class AssignmentService:
    """Wires GitHub adapters into an :class:`AssignmentHandler` per pull request."""

    def __init__(
        self,
        *,
        client_factory: Callable[[str, str], GitHubClient] = GitHubClient,
        config_path: Optional[str] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self._client_factory = client_factory
        self._config_path = config_path
        self._rng = rng

    def build_handler(self, client: GitHubClient) -> AssignmentHandler:
        resolver = RepositoryConfigResolver(client, self._config_path or settings.CONFIG_PATH)
        mutations = GitHubMutations(client)
        return AssignmentHandler(
            resolver,
            mutations,
            mutations,
            logger=logging.getLogger("autoassign.handler"),
            rng=self._rng,
        )

    async def assign(self, context: PullRequestContext) -> AssignmentOutcome:
        client = self._client_factory(context.owner, context.repo)
        return await self._run(client, context)

    async def _run(self, client: GitHubClient, context: PullRequestContext) -> AssignmentOutcome:
        outcome = await self.build_handler(client).handle_async(context)
        logger.info(
            "Handled %s#%s",
            context.full_name,
            context.number,
            extra={"status": outcome.status, "errors": sorted(outcome.errors)},
        )
        return outcome

    async def assign_existing(self, owner: str, repo: str, pr_number: int) -> AssignmentOutcome:
        """Run assignment for a pull request that is already open."""
        client = self._client_factory(owner, repo)
        details = client.get_pull_request_details(pr_number)
        context = PullRequestContext(
            owner=owner,
            repo=repo,
            number=details.number,
            title=details.title,
            author=details.author,
        )
        return await self._run(client, context)

    async def process_pull_request_event(self, payload: Mapping[str, Any]) -> EventOutcome:
        action = payload.get("action")
        if action not in HANDLED_ACTIONS:
            return EventOutcome(ignored=True, reason=f"action {action!r} is not handled")

        context = PullRequestContext.from_payload(payload)
        outcome = await self.assign(context)
        return EventOutcome(outcome=outcome)
