from __future__ import annotations
import os
from dotenv import load_dotenv

load_dotenv()

# GitHub App
GITHUB_APP_ID = os.getenv("GITHUB_APP_ID", "").strip()

# Private key can be pasted with real newlines or \n-escaped single line
_pem_env = os.getenv("GITHUB_APP_PRIVATE_KEY_PEM", "")
if "\\n" in _pem_env and "\n" not in _pem_env:
    _pem_env = _pem_env.replace("\\n", "\n")
GITHUB_APP_PRIVATE_KEY_PEM = _pem_env

# Personal access token; takes precedence over App credentials when set
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "").strip()

# GitHub API root (override for GHES)
GITHUB_API_BASE = os.getenv("GITHUB_API", "https://api.github.com")
GITHUB_TIMEOUT = int(os.getenv("GITHUB_TIMEOUT", "30"))

# Per-repository assignment config, read from the default branch
CONFIG_PATH = os.getenv("AUTO_ASSIGN_CONFIG_PATH", ".github/auto_assign.yml")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "logs/autoassign.log")
LOG_CONSOLE = os.getenv("LOG_CONSOLE", "true").lower() not in {"0", "false", "no"}
LOG_FORCE = os.getenv("LOG_FORCE", "false").lower() in {"1", "true", "yes"}
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "3"))
