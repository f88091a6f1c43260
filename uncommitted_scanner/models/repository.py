"""
Repository status models.

This module defines the per-repository status summary built during a scan
and the ScanResult that aggregates every reported repository.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .change import ChangeRecord

# Hostname fragment -> display name for recognized hosting services
KNOWN_REMOTE_HOSTS = {
    "github.com": "GitHub",
    "gitlab.com": "GitLab",
    "bitbucket.org": "Bitbucket",
}


@dataclass
class RepositoryStatus:
    """Branch, remote and change summary for one repository root."""

    root_path: str
    branch: Optional[str] = None
    remote_url: Optional[str] = None
    tracking_branch: Optional[str] = None
    has_remote: bool = False
    is_pushed: bool = False
    ahead: int = 0
    behind: int = 0
    changes: List[ChangeRecord] = field(default_factory=list)
    staged_count: int = 0
    unstaged_count: int = 0
    untracked_count: int = 0

    def add_change(self, record: ChangeRecord) -> None:
        """Append a change and update the matching counter."""
        self.changes.append(record)
        if record.is_untracked:
            self.untracked_count += 1
        elif record.staged:
            self.staged_count += 1
        else:
            self.unstaged_count += 1

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)

    @property
    def remote_host(self) -> Optional[str]:
        """Display name of the hosting service behind the remote, if recognized."""
        if not self.remote_url:
            return None

        url = self.remote_url.lower()
        for host, name in KNOWN_REMOTE_HOSTS.items():
            if host in url:
                return name
        return None

    def validate(self) -> bool:
        """Validate repository status data."""
        if not self.root_path:
            raise ValueError("root_path cannot be empty")

        if self.ahead < 0 or self.behind < 0:
            raise ValueError("ahead and behind must be non-negative")

        total = self.staged_count + self.unstaged_count + self.untracked_count
        if total != len(self.changes):
            raise ValueError(
                f"change counts ({total}) do not match recorded changes "
                f"({len(self.changes)})"
            )

        for record in self.changes:
            record.validate()

        return True


@dataclass(frozen=True)
class ScanResult:
    """Repositories with uncommitted work, in discovery order."""

    repositories: Tuple[RepositoryStatus, ...] = ()
    skipped_directories: Tuple[str, ...] = ()

    @property
    def repository_count(self) -> int:
        return len(self.repositories)

    @property
    def total_staged(self) -> int:
        return sum(repo.staged_count for repo in self.repositories)

    @property
    def total_unstaged(self) -> int:
        return sum(repo.unstaged_count for repo in self.repositories)

    @property
    def total_untracked(self) -> int:
        return sum(repo.untracked_count for repo in self.repositories)

    @property
    def total_changes(self) -> int:
        return sum(len(repo.changes) for repo in self.repositories)

    def __bool__(self) -> bool:
        return bool(self.repositories)
