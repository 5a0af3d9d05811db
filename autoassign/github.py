from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import AbstractSet, Any, Dict, Optional

import requests

from . import settings
from .security import get_token
from .types import PullRequestContext

logger = logging.getLogger(__name__)


@dataclass
class PullRequestDetails:
    number: int
    title: str
    author: str


def _headers(token: Optional[str] = None) -> Dict[str, str]:
    h = {"User-Agent": "auto-assign/1.0", "Accept": "application/vnd.github+json"}
    if token:
        h["Authorization"] = f"Bearer {token}"
    return h


class GitHubClient:
    """Minimal REST client for the endpoints the assigner needs."""

    def __init__(self, owner: str, repo: str, token: Optional[str] = None) -> None:
        self.owner = owner
        self.repo = repo
        self._token = token

    @property
    def token(self) -> str:
        if self._token is None:
            self._token = get_token(self.owner, self.repo)
        return self._token

    def _url(self, path: str) -> str:
        return f"{settings.GITHUB_API_BASE}/repos/{self.owner}/{self.repo}/{path}"

    def _get(self, path: str) -> requests.Response:
        return requests.get(self._url(path), headers=_headers(self.token), timeout=settings.GITHUB_TIMEOUT)

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        r = requests.post(
            self._url(path),
            headers=_headers(self.token),
            json=payload,
            timeout=settings.GITHUB_TIMEOUT,
        )
        r.raise_for_status()
        return r.json()

    def get_pull_request_details(self, number: int) -> PullRequestDetails:
        r = self._get(f"pulls/{number}")
        r.raise_for_status()
        data = r.json()
        return PullRequestDetails(
            number=int(data.get("number") or number),
            title=data.get("title") or "",
            author=(data.get("user") or {}).get("login", ""),
        )

    def request_reviewers(self, number: int, reviewers: AbstractSet[str]) -> Dict[str, Any]:
        return self._post(f"pulls/{number}/requested_reviewers", {"reviewers": sorted(reviewers)})

    def add_assignees(self, number: int, assignees: AbstractSet[str]) -> Dict[str, Any]:
        return self._post(f"issues/{number}/assignees", {"assignees": sorted(assignees)})

    def get_file_content(self, path: str) -> Optional[str]:
        """Decoded contents of ``path`` on the default branch, or None if it does not exist."""
        r = self._get(f"contents/{path}")
        if r.status_code == 404:
            return None
        r.raise_for_status()
        data = r.json()
        if not isinstance(data, dict) or data.get("type") != "file":
            logger.warning("%s in %s/%s is not a file", path, self.owner, self.repo)
            return None
        return base64.b64decode(data.get("content") or "").decode("utf-8")


class GitHubMutations:
    """Adapts a :class:`GitHubClient` to the handler's mutation interfaces."""

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def request_reviewers(self, context: PullRequestContext, reviewers: AbstractSet[str]) -> None:
        # the API rejects an empty reviewer list
        if not reviewers:
            logger.debug("No reviewers to request for %s#%s", context.full_name, context.number)
            return
        self._client.request_reviewers(context.number, reviewers)

    def add_assignees(self, context: PullRequestContext, assignees: AbstractSet[str]) -> None:
        if not assignees:
            logger.debug("No assignees to add for %s#%s", context.full_name, context.number)
            return
        self._client.add_assignees(context.number, assignees)
