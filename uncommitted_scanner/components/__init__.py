"""
Core components of the uncommitted changes scanner.

This module contains the components that walk the directory tree, query git,
parse porcelain status output and render the report.
"""

from .git_gateway import GitGateway
from .report_renderer import ReportRenderer
from .repository_scanner import RepositoryScanner, is_repository_root
from .status_parser import StatusParser

__all__ = [
    "GitGateway",
    "ReportRenderer",
    "RepositoryScanner",
    "StatusParser",
    "is_repository_root",
]
