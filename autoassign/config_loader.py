from __future__ import annotations

import logging
from typing import Optional

import requests
import yaml
from pydantic import ValidationError

from . import settings
from .config_models import AssignmentConfig
from .github import GitHubClient

logger = logging.getLogger(__name__)


def parse_config(text: str, *, source: str = "<config>") -> Optional[AssignmentConfig]:
    """Validate YAML text into an :class:`AssignmentConfig`, or None if it is unusable."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        logger.warning("Could not parse %s as YAML: %s", source, exc)
        return None

    if not isinstance(data, dict) or not data:
        logger.warning("%s does not contain a mapping of settings", source)
        return None

    try:
        return AssignmentConfig.model_validate(data)
    except ValidationError as exc:
        logger.warning("Invalid settings in %s: %s", source, exc)
        return None


class RepositoryConfigResolver:
    """Reads the assignment config file from the pull request's repository."""

    def __init__(self, client: GitHubClient, path: str = settings.CONFIG_PATH) -> None:
        self._client = client
        self._path = path

    def resolve(self) -> Optional[AssignmentConfig]:
        source = f"{self._client.owner}/{self._client.repo}:{self._path}"
        try:
            text = self._client.get_file_content(self._path)
        except (requests.RequestException, ValueError) as exc:
            # ValueError covers bad base64 and non-UTF-8 content
            logger.warning("Failed to fetch %s: %s", source, exc)
            return None

        if text is None:
            logger.info("No config file at %s", source)
            return None
        return parse_config(text, source=source)
