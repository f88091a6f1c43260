"""
Repository discovery component.

This module provides the RepositoryScanner class that walks a directory tree,
stops at every repository root it finds and collects the status of those
roots that have uncommitted work.
"""

import os
from pathlib import Path
from typing import Callable, List, Optional, Set, Tuple, Union

from ..interfaces import IRepositoryScanner, IVersionControlGateway
from ..models.config import ScannerConfig
from ..models.repository import RepositoryStatus, ScanResult
from ..utils.error_handling import (
    ErrorCategory,
    ErrorSeverity,
    get_error_tracker,
)
from ..utils.logging import get_logger
from .git_gateway import GitGateway
from .status_parser import StatusParser

logger = get_logger("repository.scanner")

METADATA_DIR = ".git"

GatewayFactory = Callable[[Path], IVersionControlGateway]


def is_repository_root(path: Union[str, Path]) -> bool:
    """A directory is a repository root when it holds .git (directory or gitdir file)."""
    return os.path.exists(os.path.join(path, METADATA_DIR))


class RepositoryScanner(IRepositoryScanner):
    """
    Depth-first scanner for repositories with uncommitted changes.

    The walk is pre-order and follows the order in which the filesystem lists
    directory entries. Hidden directories are never entered, and nothing
    below a repository root is walked.
    """

    def __init__(
        self,
        config: Optional[ScannerConfig] = None,
        gateway_factory: Optional[GatewayFactory] = None,
    ):
        """
        Initialize the scanner.

        Args:
            config: Scanner configuration, defaults when None
            gateway_factory: Callable building a gateway for a repository
                root. Defaults to GitGateway with the configured executable
                and timeout.
        """
        self.config = config or ScannerConfig()
        self.gateway_factory = gateway_factory or self._default_gateway
        self.exclude_dirs = set(self.config.exclude_dirs)

    def _default_gateway(self, path: Path) -> IVersionControlGateway:
        return GitGateway(
            path,
            git_executable=self.config.git_executable,
            timeout=self.config.effective_timeout,
        )

    def collect_repository(self, path: Union[str, Path]) -> RepositoryStatus:
        """
        Build the status of a single repository root.

        Args:
            path: Repository root

        Returns:
            RepositoryStatus, possibly without changes
        """
        root = os.path.abspath(os.fspath(path))
        gateway = self.gateway_factory(Path(root))
        repo = RepositoryStatus(root_path=root)

        gateway.populate_branch_info(repo)

        parser = StatusParser(ignore_checker=gateway.check_ignored)
        added = parser.populate(repo, gateway.status_lines())

        logger.debug(
            "Collected repository status",
            extra={
                "repo_path": repo.root_path,
                "changes": added,
                "staged": repo.staged_count,
                "unstaged": repo.unstaged_count,
                "untracked": repo.untracked_count,
            },
        )
        return repo

    def _list_subdirectories(self, path: str) -> List[str]:
        """Visible subdirectories of path in listing order; raises OSError if unreadable."""
        subdirectories = []
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.name.startswith("."):
                    continue
                if entry.name in self.exclude_dirs:
                    continue
                try:
                    # Follows symlinks, like stat()
                    if entry.is_dir():
                        subdirectories.append(entry.path)
                except OSError:
                    continue
        return subdirectories

    def _directory_key(self, path: str) -> Optional[Tuple[int, int]]:
        try:
            st = os.stat(path)
        except OSError:
            return None
        return st.st_dev, st.st_ino

    def _skip_directory(self, path: str, error: OSError, skipped: List[str]) -> None:
        skipped.append(path)
        get_error_tracker().record_error(
            component="repository.scanner",
            category=ErrorCategory.FILESYSTEM,
            severity=ErrorSeverity.LOW,
            message=f"Skipping unreadable directory {path}: {error.strerror or error}",
            context={"path": path},
        )

    def scan(self, root_path: Union[str, Path]) -> ScanResult:
        """
        Walk a tree and collect every repository with uncommitted changes.

        Each directory is entered once, keyed by device and inode. A repository
        reachable both directly and through a directory symlink is reported
        under whichever path the walk reaches first in listing order; later
        aliases are skipped.

        Args:
            root_path: Directory to start from

        Returns:
            ScanResult in pre-order depth-first discovery order
        """
        start = os.path.abspath(os.fspath(root_path))
        logger.info("Starting scan", extra={"root_path": start})

        repositories: List[RepositoryStatus] = []
        skipped: List[str] = []
        visited: Set[Tuple[int, int]] = set()
        pending = [start]

        while pending:
            path = pending.pop()

            key = self._directory_key(path)
            if key is not None:
                if key in visited:
                    logger.debug("Skipping already visited directory", extra={"path": path})
                    continue
                visited.add(key)

            if is_repository_root(path):
                repo = self.collect_repository(path)
                if repo.has_changes:
                    repositories.append(repo)
                continue

            try:
                subdirectories = self._list_subdirectories(path)
            except OSError as e:
                self._skip_directory(path, e, skipped)
                continue

            # Reversed so the first listed entry is popped first
            pending.extend(reversed(subdirectories))

        logger.info(
            "Scan complete",
            extra={
                "root_path": start,
                "repositories": len(repositories),
                "skipped_directories": len(skipped),
            },
        )
        return ScanResult(repositories=tuple(repositories), skipped_directories=tuple(skipped))
