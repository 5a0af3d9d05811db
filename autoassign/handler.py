from __future__ import annotations

import asyncio
import logging
from typing import AbstractSet, Callable, Dict, Optional, Protocol

from .config_models import AssignmentConfig
from .errors import ConfigurationError
from .selector import RandomSource, choose_users
from .types import AssignmentOutcome, PullRequestContext, SelectionResult


class ConfigResolver(Protocol):
    def resolve(self) -> Optional[AssignmentConfig]: ...


class ReviewRequester(Protocol):
    def request_reviewers(self, context: PullRequestContext, reviewers: AbstractSet[str]) -> None: ...


class AssigneeAdder(Protocol):
    def add_assignees(self, context: PullRequestContext, assignees: AbstractSet[str]) -> None: ...


class AssignmentHandler:
    """Picks reviewers and assignees for a newly opened pull request.

    The two mutations are attempted independently: a failure in one is logged
    and recorded on the outcome, and never stops the other from running.
    """

    def __init__(
        self,
        config_resolver: ConfigResolver,
        review_requester: ReviewRequester,
        assignee_adder: AssigneeAdder,
        *,
        logger: Optional[logging.Logger] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self._config_resolver = config_resolver
        self._review_requester = review_requester
        self._assignee_adder = assignee_adder
        self._logger = logger or logging.getLogger(__name__)
        self._rng = rng

    def handle(self, context: PullRequestContext) -> AssignmentOutcome:
        return asyncio.run(self.handle_async(context))

    async def handle_async(self, context: PullRequestContext) -> AssignmentOutcome:
        config = await asyncio.to_thread(self._config_resolver.resolve)
        if not config:
            raise ConfigurationError()

        keyword = config.matching_skip_keyword(context.title)
        if keyword is not None:
            self._logger.info(
                "Skipping %s#%s: title contains skip keyword %r",
                context.full_name,
                context.number,
                keyword,
            )
            return AssignmentOutcome(status="skipped")

        selection = self.select(context, config)
        errors: Dict[str, str] = {}
        await asyncio.gather(
            self._attempt(
                "assignees",
                self._assignee_adder.add_assignees,
                context,
                selection.assignees,
                errors,
            ),
            self._attempt(
                "reviewers",
                self._review_requester.request_reviewers,
                context,
                selection.reviewers,
                errors,
            ),
        )
        return AssignmentOutcome(status="completed", selection=selection, errors=errors)

    def select(self, context: PullRequestContext, config: AssignmentConfig) -> SelectionResult:
        reviewers: frozenset = frozenset()
        if config.add_reviewers:
            reviewers = choose_users(
                config.reviewers,
                config.number_of_reviewers,
                context.author,
                rng=self._rng,
            )

        assignees: frozenset = frozenset()
        if config.assign_author:
            assignees = frozenset([context.author])
        elif config.add_assignees:
            assignees = choose_users(
                config.assignee_pool,
                config.assignee_count,
                context.author,
                rng=self._rng,
            )

        return SelectionResult(reviewers=reviewers, assignees=assignees)

    async def _attempt(
        self,
        kind: str,
        mutation: Callable[[PullRequestContext, AbstractSet[str]], None],
        context: PullRequestContext,
        users: AbstractSet[str],
        errors: Dict[str, str],
    ) -> None:
        try:
            await asyncio.to_thread(mutation, context, users)
        except Exception as exc:
            errors[kind] = str(exc)
            self._logger.warning(
                "Failed to add %s to %s#%s: %s",
                kind,
                context.full_name,
                context.number,
                exc,
            )
            return
        self._logger.info(
            "Added %s to %s#%s: %s",
            kind,
            context.full_name,
            context.number,
            ", ".join(sorted(users)) or "(none)",
        )
