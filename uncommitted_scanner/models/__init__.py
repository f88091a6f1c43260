"""
Data models for the uncommitted changes scanner.

This module contains the data classes used throughout the application for
representing individual changes, per-repository status and scan results.
"""

from .change import ChangeRecord, ChangeStatus
from .config import ScannerConfig
from .repository import RepositoryStatus, ScanResult

__all__ = [
    "ChangeRecord",
    "ChangeStatus",
    "RepositoryStatus",
    "ScanResult",
    "ScannerConfig",
]
