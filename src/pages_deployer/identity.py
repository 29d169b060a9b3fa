"""GitHub account resolution for hosted URLs."""

from __future__ import annotations

import re
from typing import Optional

from .gitops import GitRepositoryManager
from .utils.logging import get_logger

logger = get_logger(__name__)

_GITHUB_OWNER = re.compile(r"github\.com[/:]([^/]+)")


def owner_from_remote_url(url: Optional[str]) -> Optional[str]:
    """Extract the account from https or ssh GitHub remote URLs."""
    if not url:
        return None
    match = _GITHUB_OWNER.search(url)
    if not match:
        return None
    return match.group(1).strip() or None


class IdentityResolver:
    """Resolves the account once per run and caches the answer.

    Tiers, first hit wins: owner parsed from the remote URL, then the
    configured git user name, then a placeholder.
    """

    def __init__(
        self,
        git: GitRepositoryManager,
        remote: str = "origin",
        placeholder: str = "yourusername",
        override: Optional[str] = None,
    ) -> None:
        self.git = git
        self.remote = remote
        self.placeholder = placeholder or "yourusername"
        self.override = override
        self._resolved: Optional[str] = None

    def resolve(self) -> str:
        if self._resolved is None:
            self._resolved = self._lookup()
            logger.info("Resolved GitHub account: %s", self._resolved)
        return self._resolved

    def _lookup(self) -> str:
        if self.override and self.override.strip():
            return self.override.strip()

        owner = owner_from_remote_url(self.git.remote_url(self.remote))
        if owner:
            return owner

        name = self.git.user_name()
        if name and name.strip():
            return name.strip()

        return self.placeholder
