"""GitHub update check — config and API client.

Reads the version marker from the repository's readme on the tracked
branch and reports when it is newer than the running version. The check
is advisory: any failure is logged and treated as "no update".
"""

from __future__ import annotations

import json
import logging
import os
import re
import urllib.error
import urllib.request

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_REPO = "creativecoder/wp-archive-pages"

_VERSION_PATTERNS = (
    re.compile(r"~Current Version:\s*([0-9][0-9A-Za-z.\-]*)\s*~"),
    re.compile(r"^\s*(?:Stable tag|Version):\s*([0-9][0-9A-Za-z.\-]*)", re.MULTILINE),
)


class UpdaterConfig(BaseModel):
    """Configuration for the GitHub update check."""

    repo: str = DEFAULT_REPO
    branch: str = "master"
    api_url: str = "https://api.github.com"
    raw_url: str = "https://raw.githubusercontent.com"
    github_url: str = "https://github.com"
    readme: str = "README.md"
    requires: str = "3.0"
    tested: str = "4.4"
    access_token: str = ""
    enabled: bool = True
    timeout: float = 10.0

    @property
    def is_configured(self) -> bool:
        return self.enabled and bool(self.repo)

    @classmethod
    def from_env(cls) -> UpdaterConfig:
        """Create config from environment variables."""
        return cls(
            repo=os.environ.get("ARCHIVE_PAGES_UPDATE_REPO", DEFAULT_REPO),
            access_token=os.environ.get("ARCHIVE_PAGES_GITHUB_TOKEN", ""),
        )


class UpdateInfo(BaseModel):
    """A newer release found in the source repository."""

    version: str
    zip_url: str
    repo_url: str
    readme_url: str
    requires: str = ""
    tested: str = ""
    description: str = ""


def parse_version(text: str) -> str | None:
    """Extract the version marker from a readme body."""
    for pattern in _VERSION_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1).rstrip(".")
    return None


def version_key(version: str) -> tuple[int, ...]:
    """Numeric sort key; non-numeric suffixes are ignored."""
    parts: list[int] = []
    for piece in re.split(r"[.\-]", version):
        digits = re.match(r"\d+", piece)
        if digits is None:
            break
        parts.append(int(digits.group()))
    while parts and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def is_newer(candidate: str, current: str) -> bool:
    return version_key(candidate) > version_key(current)


class GitHubUpdateChecker:
    """Client for the GitHub raw-content and repository APIs."""

    def __init__(self, config: UpdaterConfig) -> None:
        self.config = config

    @property
    def repo_url(self) -> str:
        return f"{self.config.github_url.rstrip('/')}/{self.config.repo}"

    @property
    def readme_url(self) -> str:
        return (
            f"{self.config.raw_url.rstrip('/')}/{self.config.repo}"
            f"/{self.config.branch}/{self.config.readme}"
        )

    @property
    def zip_url(self) -> str:
        return f"{self.repo_url}/zipball/{self.config.branch}"

    def _request(self, url: str) -> bytes:
        """GET ``url`` with the optional access token."""
        headers = {"User-Agent": "archive-pages-updater"}
        if self.config.access_token:
            headers["Authorization"] = f"token {self.config.access_token}"
        req = urllib.request.Request(url, method="GET", headers=headers)
        with urllib.request.urlopen(req, timeout=self.config.timeout) as resp:
            return resp.read()

    def fetch_remote_version(self) -> str | None:
        text = self._request(self.readme_url).decode("utf-8", errors="replace")
        return parse_version(text)

    def fetch_description(self) -> str:
        url = f"{self.config.api_url.rstrip('/')}/repos/{self.config.repo}"
        data = json.loads(self._request(url).decode("utf-8"))
        return data.get("description") or ""

    def check_for_update(self, current_version: str) -> UpdateInfo | None:
        """Return UpdateInfo when the repository carries a newer version.

        Args:
            current_version: Version of the running installation.

        Returns:
            UpdateInfo for a newer remote version, or None when up to
            date, disabled, or on any network or parse failure.
        """
        if not self.config.is_configured:
            return None
        try:
            remote = self.fetch_remote_version()
        except (urllib.error.URLError, OSError, ValueError):
            logger.warning("Update check against %s failed", self.readme_url, exc_info=True)
            return None
        if remote is None:
            logger.warning("No version marker in %s", self.readme_url)
            return None
        if not is_newer(remote, current_version):
            logger.debug("Up to date: remote %s, local %s", remote, current_version)
            return None

        try:
            description = self.fetch_description()
        except (urllib.error.URLError, OSError, ValueError):
            logger.debug("Could not fetch repository description", exc_info=True)
            description = ""

        return UpdateInfo(
            version=remote,
            zip_url=self.zip_url,
            repo_url=self.repo_url,
            readme_url=self.readme_url,
            requires=self.config.requires,
            tested=self.config.tested,
            description=description,
        )
