from __future__ import annotations

import base64
from typing import Dict

import pytest
import requests

from autoassign.github import GitHubClient, GitHubMutations
from autoassign.types import PullRequestContext


class FakeResponse:
    def __init__(self, payload: Dict[str, object], status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def json(self):
        return self._payload

    def raise_for_status(self):
        if not (200 <= self.status_code < 300):
            raise requests.HTTPError(f"HTTP {self.status_code}")


CONFIG_YAML = "addReviewers: true\nreviewers:\n  - alice\n"


@pytest.fixture
def mock_requests(monkeypatch):
    state = {"posted": [], "headers": [], "post_status": 201}

    def fake_get(url, headers=None, timeout=None):
        state["headers"].append(headers)
        if url.endswith("/repos/acme/demo/pulls/42"):
            return FakeResponse({
                "number": 42,
                "title": "Add feature",
                "user": {"login": "octocat"},
            })
        if url.endswith("/contents/.github/auto_assign.yml"):
            encoded = base64.b64encode(CONFIG_YAML.encode("utf-8")).decode("ascii")
            return FakeResponse({"type": "file", "content": encoded})
        if url.endswith("/contents/.github"):
            return FakeResponse([{"type": "file"}])
        return FakeResponse({"message": "Not Found"}, status_code=404)

    def fake_post(url, headers=None, json=None, timeout=None):
        state["posted"].append((url, json))
        return FakeResponse({}, status_code=state["post_status"])

    monkeypatch.setattr("autoassign.github.requests.get", fake_get)
    monkeypatch.setattr("autoassign.github.requests.post", fake_post)
    return state


@pytest.fixture(autouse=True)
def mock_token(monkeypatch):
    monkeypatch.setattr("autoassign.github.get_token", lambda owner, repo: "token")


def test_pull_request_details(mock_requests):
    details = GitHubClient("acme", "demo").get_pull_request_details(42)
    assert details.title == "Add feature"
    assert details.author == "octocat"
    assert mock_requests["headers"][0]["Authorization"] == "Bearer token"


def test_request_reviewers_posts_sorted_logins(mock_requests):
    GitHubClient("acme", "demo").request_reviewers(42, {"bob", "alice"})
    url, body = mock_requests["posted"][0]
    assert url.endswith("/repos/acme/demo/pulls/42/requested_reviewers")
    assert body == {"reviewers": ["alice", "bob"]}


def test_add_assignees_uses_issues_endpoint(mock_requests):
    GitHubClient("acme", "demo").add_assignees(42, {"carol"})
    url, body = mock_requests["posted"][0]
    assert url.endswith("/repos/acme/demo/issues/42/assignees")
    assert body == {"assignees": ["carol"]}


def test_failed_mutation_raises_http_error(mock_requests):
    mock_requests["post_status"] = 422
    with pytest.raises(requests.HTTPError):
        GitHubClient("acme", "demo").request_reviewers(42, {"alice"})


def test_file_content_is_decoded(mock_requests):
    assert GitHubClient("acme", "demo").get_file_content(".github/auto_assign.yml") == CONFIG_YAML


def test_missing_file_returns_none(mock_requests):
    assert GitHubClient("acme", "demo").get_file_content("missing.yml") is None


def test_directory_is_not_a_file(mock_requests):
    assert GitHubClient("acme", "demo").get_file_content(".github") is None


def test_explicit_token_skips_lookup(mock_requests, monkeypatch):
    def fail(owner, repo):
        raise AssertionError("token lookup should not happen")

    monkeypatch.setattr("autoassign.github.get_token", fail)
    GitHubClient("acme", "demo", token="explicit").get_pull_request_details(42)
    assert mock_requests["headers"][0]["Authorization"] == "Bearer explicit"


def test_mutations_skip_empty_sets(mock_requests):
    context = PullRequestContext(owner="acme", repo="demo", number=42, title="t", author="octocat")
    mutations = GitHubMutations(GitHubClient("acme", "demo"))

    mutations.request_reviewers(context, frozenset())
    mutations.add_assignees(context, frozenset())
    assert mock_requests["posted"] == []

    mutations.request_reviewers(context, frozenset({"alice"}))
    mutations.add_assignees(context, frozenset({"bob"}))
    assert [body for _, body in mock_requests["posted"]] == [
        {"reviewers": ["alice"]},
        {"assignees": ["bob"]},
    ]
