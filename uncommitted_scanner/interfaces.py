"""
Protocol interfaces for the uncommitted changes scanner.

This module defines the protocol interfaces that establish the boundaries
between the tree walk, the git boundary, status parsing and rendering.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Set, Tuple, Union

from .models.change import ChangeRecord
from .models.repository import RepositoryStatus, ScanResult


class IVersionControlGateway(Protocol):
    """Protocol for the read-only boundary to the version-control tool."""

    def current_branch(self) -> Optional[str]:
        """Short name of the checked-out branch."""
        ...

    def remote_url(self) -> Optional[str]:
        """URL of the origin remote."""
        ...

    def tracking_branch(self) -> Optional[str]:
        """Short name of the upstream of the current branch."""
        ...

    def remote_ref_exists(self, branch: str) -> bool:
        """Check the local ref cache for origin/<branch>."""
        ...

    def ahead_behind(self) -> Tuple[int, int]:
        """Commits only on HEAD and only on the upstream."""
        ...

    def status_lines(self) -> List[str]:
        """Porcelain status output, one entry per line."""
        ...

    def is_ignored(self, path: str) -> bool:
        """Check a single path against the ignore rules."""
        ...

    def check_ignored(self, paths: Iterable[str]) -> Set[str]:
        """Return the subset of paths matched by the ignore rules."""
        ...

    def populate_branch_info(self, repo: RepositoryStatus) -> None:
        """Fill branch, remote and ahead/behind fields of a repository."""
        ...


class IStatusParser(Protocol):
    """Protocol for turning porcelain status lines into change records."""

    def parse_line(self, raw_line: str) -> List[ChangeRecord]:
        """Parse one status line into zero, one or two records."""
        ...

    def populate(self, repo: RepositoryStatus, raw_lines: Iterable[str]) -> int:
        """Add accepted records from status lines to a repository."""
        ...


class IRepositoryScanner(Protocol):
    """Protocol for discovering repositories with uncommitted work."""

    def scan(self, root_path: Union[str, Path]) -> ScanResult:
        """Walk a directory tree and collect repository status."""
        ...


class IReportRenderer(Protocol):
    """Protocol for producing the terminal report."""

    def render(self, result: ScanResult) -> str:
        """Render a full report for a scan result."""
        ...
