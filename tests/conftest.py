"""
Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the uncommitted scanner test suite.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple
from unittest.mock import Mock

import pytest

import uncommitted_scanner.utils.logging as logging_module
from uncommitted_scanner.models.change import ChangeRecord, ChangeStatus
from uncommitted_scanner.models.repository import RepositoryStatus, ScanResult
from uncommitted_scanner.utils.error_handling import reset_error_tracker
from uncommitted_scanner.utils.logging import ROOT_LOGGER_NAME


class FakeGateway:
    """In-memory stand-in for GitGateway used by scanner tests."""

    def __init__(
        self,
        path: Path,
        lines: Optional[List[str]] = None,
        ignored: Optional[Set[str]] = None,
        branch: Optional[str] = "main",
    ):
        self.path = path
        self.lines = lines or []
        self.ignored = ignored or set()
        self.branch = branch
        self.ignore_queries: List[List[str]] = []

    def current_branch(self) -> Optional[str]:
        return self.branch

    def remote_url(self) -> Optional[str]:
        return None

    def tracking_branch(self) -> Optional[str]:
        return None

    def remote_ref_exists(self, branch: str) -> bool:
        return False

    def ahead_behind(self) -> Tuple[int, int]:
        return 0, 0

    def status_lines(self) -> List[str]:
        return list(self.lines)

    def is_ignored(self, path: str) -> bool:
        return path in self.ignored

    def check_ignored(self, paths: Iterable[str]) -> Set[str]:
        paths = list(paths)
        self.ignore_queries.append(paths)
        return {path for path in paths if path in self.ignored}

    def populate_branch_info(self, repo: RepositoryStatus) -> None:
        repo.branch = self.current_branch()


class FakeGatewayFactory:
    """Builds FakeGateways from a mapping of repository path to status lines."""

    def __init__(self, status_by_path: Dict[str, List[str]], ignored: Optional[Set[str]] = None):
        self.status_by_path = status_by_path
        self.ignored = ignored or set()
        self.created: List[Path] = []

    def __call__(self, path: Path) -> FakeGateway:
        self.created.append(path)
        return FakeGateway(path, self.status_by_path.get(str(path), []), self.ignored)


@pytest.fixture
def fake_gateway_factory():
    """Factory fixture for FakeGatewayFactory."""
    return FakeGatewayFactory


# Test data fixtures
@pytest.fixture
def sample_changes() -> List[ChangeRecord]:
    """One record of each interesting kind."""
    return [
        ChangeRecord(path="src/app.py", status=ChangeStatus.MODIFIED, staged=True),
        ChangeRecord(path="src/app.py", status=ChangeStatus.MODIFIED, staged=False),
        ChangeRecord(path="README.md", status=ChangeStatus.DELETED, staged=False),
        ChangeRecord(path="notes.txt", status=ChangeStatus.UNTRACKED, staged=False),
    ]


@pytest.fixture
def sample_repository_status(sample_changes) -> RepositoryStatus:
    """Create a sample RepositoryStatus for testing."""
    repo = RepositoryStatus(
        root_path="/home/user/projects/app",
        branch="main",
        remote_url="git@github.com:user/app.git",
        tracking_branch="origin/main",
        has_remote=True,
        is_pushed=True,
        ahead=2,
        behind=1,
    )
    for record in sample_changes:
        repo.add_change(record)
    return repo


@pytest.fixture
def sample_scan_result(sample_repository_status) -> ScanResult:
    """Create a sample ScanResult for testing."""
    other = RepositoryStatus(root_path="/home/user/projects/lib")
    other.add_change(ChangeRecord(path="setup.cfg", status=ChangeStatus.ADDED, staged=True))
    return ScanResult(repositories=(sample_repository_status, other))


@pytest.fixture
def mock_gateway():
    """Create a mock gateway for testing."""
    gateway = Mock()
    gateway.status_lines.return_value = []
    gateway.check_ignored.return_value = set()
    return gateway


@pytest.fixture(autouse=True)
def fresh_error_tracker():
    """Give every test an empty global error tracker."""
    return reset_error_tracker()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by a test so later tests start clean."""
    yield
    logging_module._logging_manager = None
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Add unit marker to all tests by default
        if not any(
            marker.name in ["integration", "slow"] for marker in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)
