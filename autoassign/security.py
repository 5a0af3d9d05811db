from __future__ import annotations
import time
import requests
import jwt  # PyJWT

from . import settings


def build_app_jwt() -> str:
    """Sign a short-lived JWT as the GitHub App."""
    if not (settings.GITHUB_APP_ID and settings.GITHUB_APP_PRIVATE_KEY_PEM):
        raise RuntimeError("Missing GITHUB_APP_ID or GITHUB_APP_PRIVATE_KEY_PEM")
    now = int(time.time())
    payload = {"iat": now - 60, "exp": now + 9 * 60, "iss": settings.GITHUB_APP_ID}
    return jwt.encode(payload, settings.GITHUB_APP_PRIVATE_KEY_PEM, algorithm="RS256")


def get_installation_token(owner: str, repo: str) -> str:
    """Exchange App JWT for an installation access token scoped to the repo."""
    app_jwt = build_app_jwt()
    headers = {"Authorization": f"Bearer {app_jwt}", "Accept": "application/vnd.github+json"}
    # 1) find installation
    r = requests.get(
        f"{settings.GITHUB_API_BASE}/repos/{owner}/{repo}/installation",
        headers=headers,
        timeout=settings.GITHUB_TIMEOUT,
    )
    r.raise_for_status()
    inst_id = r.json()["id"]
    # 2) create token
    r = requests.post(
        f"{settings.GITHUB_API_BASE}/app/installations/{inst_id}/access_tokens",
        headers=headers,
        timeout=settings.GITHUB_TIMEOUT,
    )
    r.raise_for_status()
    return r.json()["token"]


def get_token(owner: str, repo: str) -> str:
    """Static ``GITHUB_TOKEN`` if configured, else an App installation token."""
    if settings.GITHUB_TOKEN:
        return settings.GITHUB_TOKEN
    return get_installation_token(owner, repo)
